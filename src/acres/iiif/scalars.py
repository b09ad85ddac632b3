"""
Bounded decimal values used inside region, size and rotation parameters.

``Percentage`` and ``Degree`` store their canonical text form, so rounding to
two fractional digits happens exactly once, when the value is constructed.
Two values are equal when their canonical forms are equal.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import ClassVar

from .errors import IiifError, InvalidDegree, InvalidPercentage

# Rejects whitespace, digit-group underscores and non-ASCII digits that float() would accept.
_FLOAT_TEXT = re.compile(
    r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)


def canonical_decimal(value: float) -> str:
    """
    Render a float with at most two fractional digits.

    Trailing zeros and a bare trailing decimal point are removed.

    Example:
        >>> canonical_decimal(10.0)
        '10'
        >>> canonical_decimal(10.333333)
        '10.33'
    """
    return f"{value:.2f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class BoundedDecimal:
    """A finite, non-negative decimal no greater than ``upper``."""

    text: str

    upper: ClassVar[float] = 0.0
    error: ClassVar[type[IiifError]] = IiifError

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", self._checked(self.text))

    @classmethod
    def _checked(cls, text: str) -> str:
        if not _FLOAT_TEXT.fullmatch(text):
            raise cls.error(text, f"{cls.error.template.format(value=text)} (not a number)")
        return cls._canonical(float(text))

    @classmethod
    def _canonical(cls, value: float) -> str:
        if not math.isfinite(value):
            raise cls.error(value, f"{cls.error.template.format(value=value)} (not finite)")
        if math.copysign(1.0, value) < 0:
            raise cls.error(value, f"{cls.error.template.format(value=value)} (negative)")
        if value > cls.upper:
            raise cls.error(
                value,
                f"{cls.error.template.format(value=value)} (greater than {cls.upper:g})",
            )
        return canonical_decimal(value)

    @classmethod
    def from_number(cls, value: float):
        """
        Validate a number and fix its canonical form.

        Parameters:
            value: Any real number

        Returns:
            Instance holding the value rounded to two fractional digits

        Raises:
            InvalidPercentage / InvalidDegree: If the value is non-finite,
                negative (including -0.0), or greater than the upper bound

        Example:
            >>> str(Percentage.from_number(1.0 / 3.0))
            '0.33'
        """
        return cls(cls._canonical(float(value)))

    @classmethod
    def parse(cls, text: str):
        """Parse decimal text, then apply the same checks as ``from_number``."""
        return cls(text)

    def __str__(self) -> str:
        return self.text

    def __float__(self) -> float:
        return float(self.text)


class Percentage(BoundedDecimal):
    """A percentage in [0, 100]."""

    upper = 100.0
    error = InvalidPercentage


class Degree(BoundedDecimal):
    """A clockwise rotation angle in [0, 360]."""

    upper = 360.0
    error = InvalidDegree
