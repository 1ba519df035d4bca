# errors.py
class CovariateMapError(Exception):
    """Base class for failures while building a covariate map."""


class InvalidIndex(CovariateMapError, IndexError):
    """Requested band index is outside the raster."""


class ProjectionError(CovariateMapError, ValueError):
    """Band cannot be reprojected (undefined CRS, degenerate extent, ...)."""


class SizeBudgetViolation(CovariateMapError, RuntimeError):
    """Overlay image cannot be made to fit the byte budget."""
