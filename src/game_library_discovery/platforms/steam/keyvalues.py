"""Line-oriented helpers for Steam's text key/value files.

libraryfolders.vdf and appmanifest_*.acf share a brace-delimited text
format. Only a handful of keys matter for discovery, and each of them sits
on its own line as `"key"  "value"`, so a full tree parser is unnecessary.
"""

QUOTE = '"'
ESCAPE = "\\"


def _read_quoted(line: str, start: int) -> tuple[str, int]:
    """Read a quoted token whose opening quote is at line[start].

    Backslash escapes (\\\\ and \\") are unescaped. An unterminated token
    runs to the end of the line.

    Returns:
        Tuple of (token, index just past the closing quote)
    """
    chars: list[str] = []
    i = start + 1
    while i < len(line):
        char = line[i]
        if char == ESCAPE and i + 1 < len(line) and line[i + 1] in (ESCAPE, QUOTE):
            chars.append(line[i + 1])
            i += 2
            continue
        if char == QUOTE:
            return "".join(chars), i + 1
        chars.append(char)
        i += 1
    return "".join(chars), i


def extract_quoted_value(line: str, index: int) -> str | None:
    """Extract the nth (0-indexed) quoted token from a line.

    Example:
        extract_quoted_value('"path"   "/mnt/games"', 1) -> "/mnt/games"

    Args:
        line: A single line of text
        index: Which quoted token to return

    Returns:
        The token, or None when the line has fewer quoted tokens
    """
    found = 0
    i = 0
    while True:
        start = line.find(QUOTE, i)
        if start < 0:
            return None
        token, i = _read_quoted(line, start)
        if found == index:
            return token
        found += 1


def find_value(contents: str, key: str) -> str | None:
    """Find the value for the first line that starts with the quoted key.

    Args:
        contents: Full text of a key/value file
        key: Key name without quotes

    Returns:
        The second quoted token on the first matching line, or None
    """
    prefix = f'{QUOTE}{key}{QUOTE}'
    for line in contents.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(prefix):
            return extract_quoted_value(trimmed, 1)
    return None


def has_balanced_braces(contents: str) -> bool:
    """Check that the text is a plausible key/value document.

    Braces inside quoted tokens are ignored.

    Returns:
        True when at least one block is opened and every block is closed
    """
    depth = 0
    opened = False
    for line in contents.splitlines():
        i = 0
        while i < len(line):
            char = line[i]
            if char == QUOTE:
                _, i = _read_quoted(line, i)
                continue
            if char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
                if depth < 0:
                    return False
            i += 1
    return opened and depth == 0
