"""Series accessors that feed dataset point data.

A dataset does not own its numbers. It holds a reference to any object that
exposes parallel X/Y/R sequences, and the sequences are read when the chart is
encoded.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Series(Protocol):
    """Protocol for objects that provide dataset values (duck-typed).

    `xs()` is always required. `ys()` and `rs()` return None when the series
    has no such dimension (category charts only need X, or X and Y).
    """

    def xs(self) -> Sequence[float]: ...

    def ys(self) -> Sequence[float] | None: ...

    def rs(self) -> Sequence[float] | None: ...


@dataclass(frozen=True, slots=True)
class Points:
    """In-memory Series backed by tuples.

    Args:
        x: X values.
        y: Optional Y values, parallel to `x`.
        r: Optional radius values, parallel to `x`.
    """

    x: tuple[float, ...] = ()
    y: tuple[float, ...] | None = None
    r: tuple[float, ...] | None = None

    @classmethod
    def from_xy(
        cls,
        x: Iterable[float],
        y: Iterable[float] | None = None,
        r: Iterable[float] | None = None,
    ) -> Points:
        """Build Points from any iterables (lists, ranges, numpy arrays)."""

        return cls(
            x=tuple(x),
            y=None if y is None else tuple(y),
            r=None if r is None else tuple(r),
        )

    def __len__(self) -> int:
        return len(self.x)

    def xs(self) -> Sequence[float]:
        return self.x

    def ys(self) -> Sequence[float] | None:
        return self.y

    def rs(self) -> Sequence[float] | None:
        return self.r
