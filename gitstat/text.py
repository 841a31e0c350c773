"""Glyphs and small string helpers used by the formatters."""


class GlyphChars:
    ARROW_UP = "↑"
    ARROW_DOWN = "↓"
    ARROW_LEFT = "←"
    DOT = "•"
    SPACE = " "


def pad(text: str, before: int = 0, after: int = 0) -> str:
    """Surround text with the given number of spaces."""
    return f"{GlyphChars.SPACE * before}{text}{GlyphChars.SPACE * after}"


def pluralize(noun: str, count: int, include_number: bool = True) -> str:
    word = noun if count == 1 else f"{noun}s"
    if not include_number:
        return word
    return f"{count} {word}"
