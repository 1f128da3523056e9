"""Magnitude-scaled unit strings for bit counters.

Values are grouped in powers of 1000 and tagged with the short-scale SI
prefixes (``k`` through ``Q``).  Once the ``Q`` prefix is exhausted the
alphabet starts over and the overflow letter ``Q`` is appended, followed by
the cycle count from the second cycle onward.  ``8.163e63`` therefore renders
as ``8.163kQ2b``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

__all__ = [
    "Bits",
    "UNIT_SUFFIXES",
    "display_divisor",
    "format_bits",
    "format_rate",
    "magnitude_power",
    "scale",
    "unit_suffix",
]


UNIT_SUFFIXES: Tuple[str, ...] = ("k", "M", "G", "T", "P", "E", "Z", "Y", "R", "Q")
UNIT_CHARACTER = "b"

_PREFIX_CYCLE = 3 * len(UNIT_SUFFIXES)


def _check_domain(value: float) -> None:
    assert math.isfinite(value) and value >= 0.0, (
        f"magnitudes must be finite and non-negative, got {value!r}"
    )


def magnitude_power(value: float) -> int:
    """Return ``floor(log10(value))`` clamped at zero.

    ``0`` has no logarithm and values below one would yield a negative
    power; both map to ``0`` so they render without a prefix.
    """

    _check_domain(value)
    if value == 0.0:
        return 0
    return max(0, math.floor(math.log10(value)))


def unit_suffix(value: float) -> str:
    """Return the unit string (prefix, overflow marker and ``b``) for ``value``."""

    power = magnitude_power(value)
    group, remainder = divmod(power, _PREFIX_CYCLE)
    prefix_index = remainder // 3

    parts: list[str] = []
    if prefix_index > 0:
        parts.append(UNIT_SUFFIXES[prefix_index - 1])
    if group > 0:
        parts.append(UNIT_SUFFIXES[-1])
    if group > 1:
        parts.append(str(group))
    parts.append(UNIT_CHARACTER)
    return "".join(parts)


def display_divisor(value: float) -> float:
    """Return the power of 1000 that ``value`` is divided by for display.

    The divisor follows plain base-1000 scaling; it does not wrap with the
    prefix alphabet.
    """

    power = magnitude_power(value)
    return 10.0 ** (power // 3 * 3)


def scale(value: float) -> tuple[float, str]:
    """Split ``value`` into its display mantissa and unit suffix."""

    return value / display_divisor(value), unit_suffix(value)


def format_bits(value: float) -> str:
    """Render ``value`` as a human-readable bit count.

    Values below 1000 are rendered as whole numbers, larger ones with exactly
    three decimals::

        >>> format_bits(15)
        '15b'
        >>> format_bits(4500)
        '4.500kb'

    ``value`` must be finite and non-negative; anything else trips an
    assertion.
    """

    value = float(value)
    if value == 0.0:
        value = 0.0  # drop the sign of -0.0
    divisor = display_divisor(value)
    suffix = unit_suffix(value)
    if divisor == 1.0:
        return f"{value:.0f}{suffix}"
    return f"{value / divisor:.3f}{suffix}"


def format_rate(value: float) -> str:
    """Render a per-second rate, e.g. ``12.000kb/s``."""

    return f"{format_bits(value)}/s"


@dataclass(frozen=True)
class Bits:
    """A non-negative bit count with a scaled string representation."""

    value: float = 0.0

    def power(self) -> int:
        return magnitude_power(self.value)

    def suffix(self) -> str:
        return unit_suffix(self.value)

    def divisor(self) -> float:
        return display_divisor(self.value)

    def __str__(self) -> str:
        return format_bits(self.value)
