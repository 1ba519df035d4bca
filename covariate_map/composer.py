# composer.py
# -----------
# Assembles a MapDocument from a Web Mercator band, a color scale and the
# model's training data.
#
# Exposes:
#   - partition_observations(data)   (category, points) in drawing order
#   - compose_map(band, data, scale, options)

from __future__ import annotations
import logging
from typing import List, Optional, Tuple
import numpy as np
import pandas as pd

from covariate_map import config
from covariate_map.colors import ColorScale, build_legend
from covariate_map.document import (
    BaseLayer, Legend, LayerControl, MapDocument, MarkerGroup, RasterOverlay,
)
from covariate_map.imaging import fit_to_budget
from covariate_map.models import MapOptions, RasterBand
from covariate_map.projection import latlon_bounds

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("lon", "lat", "type")


# region Observations
def partition_observations(data) -> List[Tuple[str, Tuple[Tuple[float, float], ...]]]:
    """
    Split training rows by `type`, in the fixed order background, absence,
    presence. Categories without a usable row are left out; rows of any
    other type are ignored.
    """
    if data is None:
        return []
    df = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            raise KeyError(f"Training data is missing the '{col}' column.")

    types = df["type"].astype(str)
    coords = df[["lon", "lat"]].apply(pd.to_numeric, errors="coerce")

    groups = []
    for category in config.CATEGORY_ORDER:
        rows = coords[(types == category).to_numpy()]
        ok = np.isfinite(rows.to_numpy(dtype=np.float64)).all(axis=1)
        if (~ok).any():
            logger.warning("Dropping %d %s row(s) with missing coordinates", int((~ok).sum()), category)
        rows = rows[ok]
        if len(rows) == 0:
            continue
        points = tuple((float(lon), float(lat)) for lon, lat in rows.itertuples(index=False, name=None))
        groups.append((category, points))
    return groups
# endregion


# region Composition
def _base_layers() -> Tuple[BaseLayer, ...]:
    return tuple(BaseLayer(name=n, tiles=t, attribution=a) for n, t, a in config.BASE_LAYERS)


def compose_map(
    band: RasterBand,
    data,
    scale: ColorScale,
    options: Optional[MapOptions] = None,
) -> MapDocument:
    """
    Build the map document for an already reprojected `band`.
    The overlay PNG is capped at options.max_bytes before anything is built.
    """
    options = options or MapOptions()

    png, shape = fit_to_budget(scale(band.data), options.max_bytes)
    bounds = latlon_bounds(band)
    raster = RasterOverlay(
        name=band.name,
        png=png,
        bounds=bounds,
        shape=shape,
        opacity=options.overlay_opacity,
    )
    logger.debug("Raster overlay '%s': %dx%d, %d bytes", band.name, shape[1], shape[0], len(png))

    legend = Legend(
        title=band.name,
        entries=build_legend(scale),
        domain=scale.domain,
        opacity=options.legend_opacity,
    )

    overlays = [raster]
    for category, points in partition_observations(data):
        overlays.append(MarkerGroup(
            name=f"{category} data",
            category=category,
            points=points,
            fill_color=options.category_fill[category],
            border_color=options.marker_border,
            radius=options.marker_radius,
            weight=options.marker_weight,
        ))

    base = _base_layers()
    control = LayerControl(
        position=options.layer_control_position,
        base_groups=tuple(b.name for b in base),
        overlay_groups=tuple(o.name for o in overlays),
    )
    return MapDocument(
        base_layers=base,
        overlays=tuple(overlays),
        legend=legend,
        layer_control=control,
        bounds=bounds,
    )
# endregion
