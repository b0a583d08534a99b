"""File naming styles used to format swagger tag names.

A style spells "gozero" the way names should come out: `gozero` gives
`userapi`, `go_zero` gives `user_api`, `goZero` gives `userApi` and
`GoZero` gives `UserApi`.
"""

import re

DEFAULT_STYLE = "gozero"

STYLE_PATTERN = re.compile(r"([gG])[oO](.*)([zZ])[eE][rR][oO]")


def parse_style(style: str) -> tuple[bool, bool, str]:
    """Return (upper first word, upper following words, separator). Raises ValueError."""
    style = style.strip()
    if not style:
        raise ValueError("missing naming style")
    match = STYLE_PATTERN.fullmatch(style)
    if not match or any(c.isalnum() for c in match.group(2)):
        raise ValueError(f"unsupported naming style: {style!r}")
    return match.group(1) == "G", match.group(3) == "Z", match.group(2)


def split_words(content: str) -> list[str]:
    """Split on underscores and before every upper-case letter."""
    words = []
    current = ""
    for char in content:
        if char == "_":
            if current:
                words.append(current)
            current = ""
            continue
        if "A" <= char <= "Z" and current:
            words.append(current)
            current = ""
        current += char
    if current:
        words.append(current)
    return words


def format_name(style: str, content: str) -> str:
    upper_before, upper_after, separator = parse_style(style)
    formatted = []
    for i, word in enumerate(split_words(content)):
        upper = upper_before if i == 0 else upper_after
        first = word[0].upper() if upper else word[0].lower()
        formatted.append(first + word[1:])
    return separator.join(formatted)
