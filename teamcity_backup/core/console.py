from __future__ import annotations

import sys

_SERVICE_MESSAGE_ESCAPES = (
    ("|", "||"),
    ("'", "|'"),
    ("\n", "|n"),
    ("\r", "|r"),
    ("[", "|["),
    ("]", "|]"),
)


def escape_service_value(value: str) -> str:
    for raw, escaped in _SERVICE_MESSAGE_ESCAPES:
        value = value.replace(raw, escaped)
    return value


class Console:
    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def info(self, message: str) -> None:
        print(message)

    def detail(self, message: str) -> None:
        if self.verbose:
            print(message)

    def warn(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def set_parameter(self, name: str, value: str) -> None:
        print(
            f"##teamcity[setParameter name='{escape_service_value(name)}' "
            f"value='{escape_service_value(value)}']"
        )
