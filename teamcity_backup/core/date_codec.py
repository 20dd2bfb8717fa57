from __future__ import annotations

import re
from datetime import datetime

DEFAULT_PATTERN = "yyyyMMdd_HHmmss"


class DateCodec:
    """Server-side date patterns (``yyyyMMdd_HHmmss``); parse is strict."""

    _tokens = (
        ("yyyy", "%Y", r"\d{4}"),
        ("MM", "%m", r"\d{2}"),
        ("dd", "%d", r"\d{2}"),
        ("HH", "%H", r"\d{2}"),
        ("mm", "%M", r"\d{2}"),
        ("ss", "%S", r"\d{2}"),
    )

    @classmethod
    def parse(cls, text: str, pattern: str = DEFAULT_PATTERN) -> datetime | None:
        directives, layout = cls._translate(pattern)
        if not layout.fullmatch(text):
            return None
        try:
            return datetime.strptime(text, "".join(directives))
        except ValueError:
            return None

    @classmethod
    def format(cls, value: datetime, pattern: str = DEFAULT_PATTERN) -> str:
        directives, _ = cls._translate(pattern)
        # strftime does not pad years below 1000 on every platform.
        return "".join(
            f"{value.year:04d}" if directive == "%Y" else value.strftime(directive)
            for directive in directives
        )

    @classmethod
    def _translate(cls, pattern: str) -> tuple[list[str], re.Pattern[str]]:
        directives: list[str] = []
        regex: list[str] = []
        index = 0
        while index < len(pattern):
            for token, directive, digits in cls._tokens:
                if pattern.startswith(token, index):
                    directives.append(directive)
                    regex.append(digits)
                    index += len(token)
                    break
            else:
                literal = pattern[index]
                directives.append("%%" if literal == "%" else literal)
                regex.append(re.escape(literal))
                index += 1
        return directives, re.compile("".join(regex))
