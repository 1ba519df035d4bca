# projection.py
# -------------
# Reprojects a single RasterBand onto the Web Mercator grid used by web-map
# tiles, so the overlay lines up pixel-for-pixel with the base layers.
#
# Warnings raised by GDAL/PROJ while warping (antimeridian / pole distortion,
# edge clipping) are expected and are discarded here; only real failures
# surface, as ProjectionError.

from __future__ import annotations
import logging
import warnings
from typing import Tuple
import numpy as np
from pyproj import Transformer
from rasterio.crs import CRS
from rasterio.enums import Resampling
from rasterio.transform import from_bounds
from rasterio.warp import reproject, transform_bounds

from covariate_map import config
from covariate_map.errors import ProjectionError
from covariate_map.models import RasterBand

logger = logging.getLogger(__name__)


# region Helpers
def _check_extent(band: RasterBand) -> Tuple[float, float, float, float]:
    left, bottom, right, top = band.bounds
    if not np.all(np.isfinite([left, bottom, right, top])):
        raise ProjectionError(f"Band '{band.name}' has a non-finite extent.")
    if right <= left or top <= bottom:
        raise ProjectionError(
            f"Band '{band.name}' has a degenerate extent "
            f"({left}, {bottom}, {right}, {top})."
        )
    return left, bottom, right, top


def _to_crs(value) -> CRS:
    if value is None:
        raise ProjectionError("Source CRS is undefined.")
    try:
        return CRS.from_user_input(value)
    except Exception as e:
        raise ProjectionError(f"Unrecognised CRS {value!r}: {e}") from e


def _is_web_mercator(crs: CRS) -> bool:
    return crs.to_epsg() == 3857


def _clip_to_mercator(band: RasterBand, src: CRS, left, bottom, right, top):
    """Drop the polar caps Web Mercator cannot represent (lat beyond ~85.05)."""
    if not src.is_geographic:
        return left, bottom, right, top
    lim = config.MERCATOR_LAT_LIMIT
    bottom, top = max(bottom, -lim), min(top, lim)
    if top <= bottom:
        raise ProjectionError(f"Band '{band.name}' lies entirely beyond the Web Mercator latitude limit.")
    return left, bottom, right, top


def _destination_grid(band: RasterBand, dst_bounds) -> Tuple[object, int, int]:
    """
    Grid over dst_bounds with as many columns as the source and square
    pixels, so the x resolution follows the source cell size.
    """
    xmin, ymin, xmax, ymax = dst_bounds
    if xmax <= xmin or ymax <= ymin:
        raise ProjectionError(f"Could not compute a destination grid for '{band.name}'.")
    W = band.shape[1]
    res = (xmax - xmin) / W
    H = max(1, int(round((ymax - ymin) / res)))
    return from_bounds(xmin, ymin, xmax, ymax, W, H), W, H
# endregion


# region Reprojection
def project_band(
    band: RasterBand,
    dst_crs=config.WEB_MERCATOR,
    resampling: Resampling = Resampling.bilinear,
) -> RasterBand:
    """
    Reproject `band` to `dst_crs`.

    The destination extent is the transformed footprint of the source corners
    (densified along the edges), limited to the valid Web Mercator world when
    projecting there; the destination keeps the source column count. Cells
    outside the source footprint are NaN.
    """
    if band.crs is None:
        raise ProjectionError(f"Band '{band.name}' has no CRS; cannot reproject.")
    src = _to_crs(band.crs)
    dst = _to_crs(dst_crs)
    left, bottom, right, top = _check_extent(band)
    if _is_web_mercator(dst):
        left, bottom, right, top = _clip_to_mercator(band, src, left, bottom, right, top)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")

            dst_bounds = transform_bounds(src, dst, left, bottom, right, top, densify_pts=21)
            if not np.all(np.isfinite(dst_bounds)):
                raise ProjectionError(
                    f"Extent of '{band.name}' cannot be expressed in {dst.to_string()}."
                )
            if _is_web_mercator(dst):
                half = config.MERCATOR_HALF_WORLD
                dst_bounds = tuple(float(np.clip(v, -half, half)) for v in dst_bounds)

            dst_transform, dst_w, dst_h = _destination_grid(band, dst_bounds)

            out = np.full((dst_h, dst_w), np.nan, dtype=np.float64)
            reproject(
                source=np.ascontiguousarray(band.data, dtype=np.float64),
                destination=out,
                src_transform=band.transform,
                src_crs=src,
                dst_transform=dst_transform,
                dst_crs=dst,
                resampling=resampling,
                src_nodata=np.nan,
                dst_nodata=np.nan,
            )
    except ProjectionError:
        raise
    except Exception as e:
        raise ProjectionError(f"Reprojection of '{band.name}' failed: {e}") from e

    if caught:
        logger.debug("Reprojection diagnostics suppressed: %d warning(s)", len(caught))
    logger.debug(
        "Projected '%s' %s -> %s grid %dx%d", band.name, src.to_string(), dst.to_string(), dst_w, dst_h
    )

    return RasterBand(
        data=out,
        transform=dst_transform,
        crs=dst,
        name=band.name,
        nodata=band.nodata,
    )
# endregion


# region Lon/Lat Bounds
def latlon_bounds(band: RasterBand) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Band extent as ((south, west), (north, east)) in WGS84 degrees."""
    src = _to_crs(band.crs)
    left, bottom, right, top = _check_extent(band)
    to_wgs84 = Transformer.from_crs(src, CRS.from_user_input(config.WGS84), always_xy=True)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        west, south, east, north = to_wgs84.transform_bounds(left, bottom, right, top)
    return (float(south), float(west)), (float(north), float(east))
# endregion
