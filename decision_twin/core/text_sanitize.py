"""Text Sanitizing — strip angle brackets and surrounding whitespace from user text."""

import re

_ANGLE_BRACKETS = re.compile(r"[<>]")


def sanitize_text(value: str) -> str:
    return _ANGLE_BRACKETS.sub("", value).strip()
