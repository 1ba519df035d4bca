from covariate_map.colors import ColorScale, LegendEntry, build_legend, legend_values
from covariate_map.composer import compose_map, partition_observations
from covariate_map.document import MapDocument
from covariate_map.errors import (
    CovariateMapError, InvalidIndex, ProjectionError, SizeBudgetViolation,
)
from covariate_map.layers import select_layer
from covariate_map.models import MapOptions, RasterBand, RasterStack
from covariate_map.plugin import (
    InteractiveCovariateMap, build_document, interactive_covariate_map,
)
from covariate_map.projection import latlon_bounds, project_band
from covariate_map.render import FoliumBackend, HtmlFileRenderer, NotebookRenderer, render_html

__all__ = [
    "ColorScale", "LegendEntry", "build_legend", "legend_values",
    "compose_map", "partition_observations", "MapDocument",
    "CovariateMapError", "InvalidIndex", "ProjectionError", "SizeBudgetViolation",
    "select_layer", "MapOptions", "RasterBand", "RasterStack",
    "InteractiveCovariateMap", "build_document", "interactive_covariate_map",
    "latlon_bounds", "project_band",
    "FoliumBackend", "HtmlFileRenderer", "NotebookRenderer", "render_html",
]
