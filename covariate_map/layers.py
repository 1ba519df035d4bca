# layers.py
import logging
import numbers
import numpy as np

from covariate_map.errors import InvalidIndex
from covariate_map.models import RasterBand, RasterStack

logger = logging.getLogger(__name__)


def select_layer(stack: RasterStack, which: int = 1) -> RasterBand:
    """Return band `which` (1-based) of the stack, nodata cells as NaN."""
    if isinstance(which, bool) or not isinstance(which, numbers.Integral):
        raise InvalidIndex(f"Band index must be an integer, got {which!r}.")
    which = int(which)
    if not 1 <= which <= stack.count:
        raise InvalidIndex(
            f"Band index {which} out of range for a raster with {stack.count} band(s)."
        )

    arr = stack.data[which - 1].astype(np.float64)
    nodata = stack.nodata
    if nodata is not None and not np.isnan(nodata):
        arr = np.where(arr == nodata, np.nan, arr)

    name = stack.names[which - 1]
    logger.debug("Selected band %d (%s), shape %s", which, name, arr.shape)
    return RasterBand(
        data=arr,
        transform=stack.transform,
        crs=stack.crs,
        name=name,
        nodata=nodata,
    )
