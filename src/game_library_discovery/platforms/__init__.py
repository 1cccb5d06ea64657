"""Client platform implementations for catalog discovery.

This package contains self-contained platform modules that provide
source and transformer implementations for each game client
(Steam, Epic Games Launcher).

Each platform module auto-registers itself with the SourceRegistry
when imported.
"""

# Platform modules are imported dynamically by SourceRegistry.discover_platforms()
# to handle missing dependencies gracefully
