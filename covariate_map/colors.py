# region Imports
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import numpy as np
from matplotlib import colormaps
from matplotlib.colors import LinearSegmentedColormap, to_hex

from covariate_map import config
# endregion


# region Palettes
def default_palette(steps: int = config.PALETTE_STEPS, name: str = config.PALETTE_NAME) -> Tuple[str, ...]:
    """`steps` evenly spaced colors of a matplotlib colormap, as hex."""
    cmap = colormaps[name]
    return tuple(to_hex(cmap(x)) for x in np.linspace(0.0, 1.0, steps))


def grey(level: float) -> str:
    """Grey of the given lightness in [0, 1] (0 = black)."""
    g = float(np.clip(level, 0.0, 1.0))
    return to_hex((g, g, g))
# endregion


# region Color Scale
class ColorScale:
    """
    Continuous mapping of values in [vmin, vmax] to colors, interpolated
    linearly between the palette stops. NaN and out-of-domain values are
    fully transparent. A zero-width domain maps to the first palette color.
    """
    def __init__(self, vmin: float, vmax: float, palette: Optional[Sequence[str]] = None):
        vmin, vmax = float(vmin), float(vmax)
        if not (np.isfinite(vmin) and np.isfinite(vmax)):
            raise ValueError(f"Color scale domain must be finite, got [{vmin}, {vmax}].")
        if vmax < vmin:
            vmin, vmax = vmax, vmin
        self.vmin = vmin
        self.vmax = vmax
        self.palette = tuple(palette) if palette is not None else default_palette()
        if len(self.palette) < 1:
            raise ValueError("Palette must contain at least one color.")
        stops = self.palette if len(self.palette) > 1 else self.palette * 2
        self._cmap = LinearSegmentedColormap.from_list("covariate", list(stops))

    @property
    def domain(self) -> Tuple[float, float]:
        return self.vmin, self.vmax

    def _normalize(self, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        v = np.asarray(values, dtype=np.float64)
        inside = np.isfinite(v) & (v >= self.vmin) & (v <= self.vmax)
        span = self.vmax - self.vmin
        if span > 0:
            t = np.where(inside, (v - self.vmin) / span, 0.0)
        else:
            t = np.zeros_like(v)
        return np.clip(t, 0.0, 1.0), inside

    def __call__(self, values) -> np.ndarray:
        """RGBA uint8 array with shape values.shape + (4,)."""
        t, inside = self._normalize(values)
        rgba = (self._cmap(t) * 255).round().astype(np.uint8)
        rgba[~inside] = 0
        return rgba

    def color_for(self, value: float) -> Optional[str]:
        """Hex color for one value, None when transparent."""
        t, inside = self._normalize(np.array([value]))
        if not inside[0]:
            return None
        return to_hex(self._cmap(float(t[0])))
# endregion


# region Legend
@dataclass(frozen=True)
class LegendEntry:
    value: float
    color: str


def legend_values(vmin: float, vmax: float, n: int = config.PALETTE_STEPS) -> Tuple[float, ...]:
    vals = np.round(np.linspace(float(vmin), float(vmax), n), config.LEGEND_DIGITS)
    return tuple(float(v) for v in vals)


def build_legend(scale: ColorScale, n: int = config.PALETTE_STEPS) -> Tuple[LegendEntry, ...]:
    entries = []
    for v in legend_values(scale.vmin, scale.vmax, n):
        # rounding can push the end values just outside the domain
        c = scale.color_for(min(max(v, scale.vmin), scale.vmax))
        entries.append(LegendEntry(value=v, color=c))
    return tuple(entries)
# endregion
