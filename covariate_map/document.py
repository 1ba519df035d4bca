# document.py
# -----------
# Immutable description of a composed covariate map. Nothing here talks to a
# rendering library; covariate_map.render turns a MapDocument into a page.

from __future__ import annotations
import base64
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from covariate_map.colors import LegendEntry

LatLonBounds = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass(frozen=True)
class BaseLayer:
    name: str
    tiles: str
    attribution: str


@dataclass(frozen=True)
class RasterOverlay:
    """PNG (Web Mercator pixels) stretched over `bounds` ((south, west), (north, east))."""
    name: str
    png: bytes
    bounds: LatLonBounds
    shape: Tuple[int, int]
    opacity: float

    @property
    def nbytes(self) -> int:
        return len(self.png)

    @property
    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")


@dataclass(frozen=True)
class MarkerGroup:
    name: str
    category: str
    points: Tuple[Tuple[float, float], ...]  # (lon, lat)
    fill_color: str
    border_color: str
    radius: float
    weight: float
    opacity: float = 1.0
    fill_opacity: float = 1.0


Overlay = Union[RasterOverlay, MarkerGroup]


@dataclass(frozen=True)
class Legend:
    title: str
    entries: Tuple[LegendEntry, ...]
    domain: Tuple[float, float]
    opacity: float


@dataclass(frozen=True)
class LayerControl:
    position: str
    base_groups: Tuple[str, ...]
    overlay_groups: Tuple[str, ...]


@dataclass(frozen=True)
class MapDocument:
    base_layers: Tuple[BaseLayer, ...]
    overlays: Tuple[Overlay, ...]
    legend: Legend
    layer_control: LayerControl
    bounds: LatLonBounds

    @property
    def overlay_names(self) -> Tuple[str, ...]:
        return tuple(o.name for o in self.overlays)

    @property
    def raster(self) -> Optional[RasterOverlay]:
        for o in self.overlays:
            if isinstance(o, RasterOverlay):
                return o
        return None

    @property
    def marker_groups(self) -> Tuple[MarkerGroup, ...]:
        return tuple(o for o in self.overlays if isinstance(o, MarkerGroup))
