"""Color values accepted by Chart.js style fields."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_RGBA_PATTERN: Final = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
)
_HEX_PATTERN: Final = re.compile(r"^#([0-9a-fA-F]{6})([0-9a-fA-F]{2})?$")


@dataclass(frozen=True, slots=True)
class RGBA:
    """An sRGB color with an alpha channel.

    All four channels are integers in 0..255. The alpha channel is scaled to
    0..1 when rendered for Chart.js.

    Args:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
        a: Alpha channel (255 is fully opaque).
    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"RGBA.{name} must be an int, got {value!r}.")
            if not 0 <= value <= 255:
                raise ValueError(f"RGBA.{name} must be within 0..255, got {value}.")

    def __str__(self) -> str:
        return self.to_css()

    def to_css(self) -> str:
        """Return the `rgba(...)` string understood by Chart.js."""

        return f"rgba({self.r}, {self.g}, {self.b}, {self.alpha:.3f})"

    @property
    def alpha(self) -> float:
        """Alpha channel scaled to 0..1."""

        return self.a / 255

    def with_alpha(self, a: int) -> RGBA:
        """Return the same color with a different alpha channel."""

        return RGBA(self.r, self.g, self.b, a)

    @classmethod
    def parse(cls, text: str) -> RGBA:
        """Parse a CSS color produced by `to_css` (or `rgb(...)`/hex notation).

        Args:
            text: Color string such as `rgba(0, 255, 0, 0.784)` or `#00ff00c8`.

        Returns:
            Parsed RGBA value.

        Raises:
            ValueError: When the string is not a supported color notation.
        """

        raw = text.strip()
        match = _RGBA_PATTERN.match(raw)
        if match is not None:
            r, g, b, alpha = match.groups()
            a = 255 if alpha is None else _alpha_to_channel(float(alpha))
            return cls(int(r), int(g), int(b), a)

        match = _HEX_PATTERN.match(raw)
        if match is not None:
            rgb, alpha_hex = match.groups()
            a = 255 if alpha_hex is None else int(alpha_hex, 16)
            return cls(int(rgb[0:2], 16), int(rgb[2:4], 16), int(rgb[4:6], 16), a)

        raise ValueError(f"Unsupported color notation: {text!r}.")


def _alpha_to_channel(alpha: float) -> int:
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"Alpha must be within 0..1, got {alpha}.")
    return round(alpha * 255)


PALETTE: Final[tuple[RGBA, ...]] = (
    RGBA(102, 194, 165, 220),
    RGBA(250, 141, 98, 220),
    RGBA(141, 159, 202, 220),
    RGBA(230, 138, 195, 220),
)
