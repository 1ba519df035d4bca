# models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple
import numpy as np
from rasterio.transform import array_bounds

from covariate_map import config


@dataclass
class RasterBand:
    """
    data:      (H,W) float grid, NaN = no data
    transform: affine pixel -> CRS mapping
    crs:       rasterio CRS, or None when undefined
    """
    data: np.ndarray
    transform: object
    crs: Optional[object]
    name: str
    nodata: Optional[float] = None

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(left, bottom, right, top) in the band's own CRS."""
        H, W = self.data.shape
        west, south, east, north = array_bounds(H, W, self.transform)
        return float(west), float(south), float(east), float(north)

    @property
    def value_range(self) -> Tuple[float, float]:
        valid = self.data[np.isfinite(self.data)]
        if valid.size == 0:
            return float("nan"), float("nan")
        return float(valid.min()), float(valid.max())


@dataclass
class RasterStack:
    """Multi-band raster held in memory, shape (bands, H, W)."""
    data: np.ndarray
    transform: object
    crs: Optional[object]
    names: Sequence[str] = ()
    nodata: Optional[float] = None

    def __post_init__(self):
        arr = np.asarray(self.data)
        if arr.ndim == 2:
            arr = arr[np.newaxis, ...]
        if arr.ndim != 3:
            raise ValueError(f"Raster data must be 2-D or 3-D, got shape {arr.shape}.")
        self.data = arr
        names = tuple(str(n) for n in self.names)
        if not names:
            names = tuple(f"layer.{i + 1}" for i in range(arr.shape[0]))
        if len(names) != arr.shape[0]:
            raise ValueError(
                f"Got {len(names)} band names for {arr.shape[0]} bands."
            )
        self.names = names

    @property
    def count(self) -> int:
        return int(self.data.shape[0])


@dataclass
class MapOptions:
    max_bytes: int = config.DEFAULT_MAX_BYTES
    overlay_opacity: float = config.OVERLAY_OPACITY
    legend_opacity: float = config.LEGEND_OPACITY
    marker_radius: float = config.MARKER_RADIUS
    marker_weight: float = config.MARKER_WEIGHT
    marker_border: str = config.MARKER_BORDER
    category_fill: Dict[str, str] = field(default_factory=lambda: dict(config.CATEGORY_FILL))
    layer_control_position: str = config.LAYER_CONTROL_POSITION
