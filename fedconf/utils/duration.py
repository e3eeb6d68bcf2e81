"""Go-style duration parsing and formatting.

Operator configuration is usually written by hand in YAML next to Kubernetes
manifests, so durations use the same notation: ``"10s"``, ``"1m30s"``,
``"500ms"``, ``"-5s"``. Parsed values are plain :class:`datetime.timedelta`
objects; timedelta resolution is one microsecond, finer units are rounded.

Example:
    from fedconf.utils.duration import format_duration, parse_duration

    lease = parse_duration("15s")
    assert format_duration(lease) == "15s"
"""

import math
import re
from datetime import timedelta
from typing import Any

_UNIT_MICROSECONDS: dict[str, float] = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60 * 1_000_000,
    "h": 3600 * 1_000_000,
}

_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_PATTERN = re.compile(r"[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+")

# Largest magnitude a Go time.Duration can hold (2**63 - 1 ns), about 292 years
MAX_DURATION_MICROSECONDS = (2**63 - 1) // 1_000


def parse_duration(value: Any) -> timedelta:
    """Convert a duration literal to a timedelta.

    Args:
        value: A Go-style duration string, a number of seconds, or a timedelta

    Returns:
        The equivalent timedelta

    Raises:
        ValueError: If the value cannot be interpreted as a duration

    Examples:
        >>> parse_duration("1m30s")
        datetime.timedelta(seconds=90)
        >>> parse_duration(2.5)
        datetime.timedelta(seconds=2, microseconds=500000)
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        msg = f"invalid duration {value!r}"
        raise ValueError(msg)
    if isinstance(value, int | float):
        return _checked(value * 1_000_000, value)
    if not isinstance(value, str):
        msg = f"invalid duration {value!r}: expected string or number"
        raise ValueError(msg)

    text = value.strip()
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_PATTERN.fullmatch(text):
        msg = f"invalid duration {value!r}"
        raise ValueError(msg)

    sign = -1 if text.startswith("-") else 1
    total = 0.0
    for number, unit in _COMPONENT_PATTERN.findall(text.lstrip("+-")):
        total += float(number) * _UNIT_MICROSECONDS[unit]

    return _checked(sign * total, value)


def _checked(microseconds: float, value: Any) -> timedelta:
    if abs(microseconds) > MAX_DURATION_MICROSECONDS or not math.isfinite(microseconds):
        msg = f"invalid duration {value!r}: out of range"
        raise ValueError(msg)
    return timedelta(microseconds=round(microseconds))


def format_duration(value: timedelta) -> str:
    """Render a timedelta the way Go's ``time.Duration.String`` does.

    Examples:
        >>> format_duration(timedelta(seconds=90))
        '1m30s'
        >>> format_duration(timedelta(milliseconds=500))
        '500ms'
        >>> format_duration(timedelta(0))
        '0s'
    """
    micros = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros / 1_000)}ms"

    hours, rest = divmod(micros, 3600 * 1_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000)
    seconds = _trim(rest / 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim(number: float) -> str:
    text = f"{number:.6f}".rstrip("0").rstrip(".")
    return text or "0"
