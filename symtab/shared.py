from sys import stderr
from typing import Any


def printf(format: str, *args: Any):
    print(format.format(*args), end="")


def printf_err(format: str, *args: Any):
    print(format.format(*args), end="", file=stderr)


def show(data: Any) -> str:
    # strings are quoted so that "1" and 1 are told apart in dumps
    if isinstance(data, str):
        return '"' + data + '"'
    return str(data)
