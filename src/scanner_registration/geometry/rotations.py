"""
Rotation Catalog

The 24 proper rotations of 3-space that map every coordinate axis onto a
signed coordinate axis. A rotation is stored as three tagged rows, one per
output coordinate, each naming the input axis it reads and the sign applied:

    (+y, -x, +z)  maps  (x, y, z) -> (y, -x, z)

Mirror images (determinant -1) are excluded; a scanner cannot be reflected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import product
from typing import Iterator, Tuple

import numpy as np

from .points import Point


class Axis(Enum):
    X = 0
    Y = 1
    Z = 2


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1

    def __mul__(self, other: "Sign") -> "Sign":
        return Sign.POSITIVE if self is other else Sign.NEGATIVE


@dataclass(frozen=True)
class AxisSign:
    """One output coordinate: the signed value of a single input axis."""

    axis: Axis
    sign: Sign

    def select(self, point: Point) -> int:
        return self.sign.value * point.as_tuple()[self.axis.value]

    def __str__(self) -> str:
        prefix = "+" if self.sign is Sign.POSITIVE else "-"
        return f"{prefix}{self.axis.name.lower()}"


@dataclass(frozen=True)
class RotationMatrix:
    rows: Tuple[AxisSign, AxisSign, AxisSign]

    def apply(self, point: Point) -> Point:
        """Rotate a point; pure, returns a new Point."""
        return Point(
            self.rows[0].select(point),
            self.rows[1].select(point),
            self.rows[2].select(point),
        )

    __call__ = apply

    def compose(self, other: "RotationMatrix") -> "RotationMatrix":
        """Rotation equivalent to applying `other` first, then `self`."""
        rows = []
        for row in self.rows:
            inner = other.rows[row.axis.value]
            rows.append(AxisSign(inner.axis, row.sign * inner.sign))
        return RotationMatrix(tuple(rows))

    def inverse(self) -> "RotationMatrix":
        # Output i reads input a  <=>  inverse output a reads input i (same sign)
        rows = [None, None, None]
        for i, row in enumerate(self.rows):
            rows[row.axis.value] = AxisSign(Axis(i), row.sign)
        return RotationMatrix(tuple(rows))

    def determinant(self) -> int:
        axes = tuple(row.axis.value for row in self.rows)
        det = _permutation_parity(axes)
        for row in self.rows:
            det *= row.sign.value
        return det

    def as_array(self) -> np.ndarray:
        """Dense 3x3 integer matrix M such that M @ p rotates column vector p."""
        matrix = np.zeros((3, 3), dtype=np.int64)
        for i, row in enumerate(self.rows):
            matrix[i, row.axis.value] = row.sign.value
        return matrix

    def __str__(self) -> str:
        return "(" + ", ".join(str(row) for row in self.rows) + ")"


IDENTITY = RotationMatrix((
    AxisSign(Axis.X, Sign.POSITIVE),
    AxisSign(Axis.Y, Sign.POSITIVE),
    AxisSign(Axis.Z, Sign.POSITIVE),
))


def _permutation_parity(axes: Tuple[int, int, int]) -> int:
    """+1 for the cyclic orders of (0, 1, 2), -1 for the transpositions."""
    if sorted(axes) != [0, 1, 2]:
        raise ValueError(f"Rows must use each axis exactly once, got {axes}")
    return 1 if (axes[1] - axes[0]) % 3 == 1 else -1


def enumerate_rotations() -> Iterator[RotationMatrix]:
    """
    Yield the 24 proper axis-aligned rotations, each exactly once.

    Output x picks one of three axes, output y one of the two remaining and
    output z takes the last. Signs of x and y are free; the z sign is whatever
    makes the determinant +1.
    """
    for x_axis in Axis:
        for y_axis in Axis:
            if y_axis is x_axis:
                continue
            (z_axis,) = [a for a in Axis if a is not x_axis and a is not y_axis]
            parity = _permutation_parity((x_axis.value, y_axis.value, z_axis.value))
            for x_sign, y_sign in product(Sign, Sign):
                z_sign = x_sign * y_sign
                if parity < 0:
                    z_sign = z_sign * Sign.NEGATIVE
                yield RotationMatrix((
                    AxisSign(x_axis, x_sign),
                    AxisSign(y_axis, y_sign),
                    AxisSign(z_axis, z_sign),
                ))


ROTATIONS: Tuple[RotationMatrix, ...] = tuple(enumerate_rotations())
