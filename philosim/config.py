"""Command-line argument validation for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

INT_MAX = 2_147_483_647

MSG_NOT_ENOUGH = "❌ Not enough arguments."
MSG_TOO_MANY = "❌ Too many arguments."
MSG_NOT_NUMERIC = "❌ Arguments should be numeric."
MSG_NEGATIVE = "❌ Arguments can't be negative."
MSG_TOO_BIG = "❌ Arguments value is too big."

_USAGE_LINES = (
    "✅ Usage: ",
    "./philo <num_philos> <time_die> <time_eat> <time_sleep> [num_must_eat]",
    "Arguments:",
    "1. number of philosophers,",
    "2. time (in ms) to die without eating,",
    "3. time (in ms) to eat,",
    "4. time (in ms) to sleep,",
    "5. optionally, how many times each philosopher must eat "
    "before simulation ends.",
)


class UsageError(ValueError):
    """Raised when the command-line arguments are not acceptable."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


@dataclass(frozen=True)
class SimConfig:
    """Timing and size parameters of one simulation (times in milliseconds)."""

    num_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    num_must_eat: int = -1


def usage_message(msg: str) -> str:
    """Return the usage text headed by ``msg``."""
    return "\n".join((msg, *_USAGE_LINES)) + "\n"


def _is_numeric(arg: str) -> bool:
    digits = arg[1:] if arg[:1] in ("+", "-") else arg
    return bool(digits) and all("0" <= ch <= "9" for ch in digits)


def _to_int(arg: str) -> int:
    text = arg.lstrip(" \t\n\v\f\r")
    if text[:1] == "-":
        raise UsageError(MSG_NEGATIVE)
    if text[:1] == "+":
        text = text[1:]
    value = 0
    for ch in text:
        if not "0" <= ch <= "9":
            break
        value = value * 10 + (ord(ch) - ord("0"))
        if value > INT_MAX:
            raise UsageError(MSG_TOO_BIG)
    return value


def parse_args(args: Sequence[str]) -> SimConfig:
    """Validate the arguments (program name excluded) and build a config."""
    args = list(args)
    if len(args) < 4:
        raise UsageError(MSG_NOT_ENOUGH)
    if len(args) > 5:
        raise UsageError(MSG_TOO_MANY)
    if not all(_is_numeric(arg) for arg in args):
        raise UsageError(MSG_NOT_NUMERIC)

    num_philos, time_to_die, time_to_eat, time_to_sleep, *rest = (
        _to_int(arg) for arg in args
    )
    num_must_eat = rest[0] if rest else -1
    return SimConfig(
        num_philos=num_philos,
        time_to_die=time_to_die,
        time_to_eat=min(time_to_eat, time_to_die),
        time_to_sleep=min(time_to_sleep, time_to_die),
        num_must_eat=num_must_eat,
    )