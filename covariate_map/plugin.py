# plugin.py
# ---------
# Output module: InteractiveCovariateMap.
#
# Zoomable, scrollable map of one covariate band with the model's training
# points on top. Capabilities (projector, palette, renderer) are injected at
# construction time; calling the instance runs
#   select -> project -> color scale -> compose -> render
# and returns None. Any stage failure propagates before anything is rendered.

from __future__ import annotations
import logging
from typing import Callable, Optional, Sequence

from covariate_map.colors import ColorScale
from covariate_map.composer import compose_map
from covariate_map.document import MapDocument
from covariate_map.layers import select_layer
from covariate_map.models import MapOptions, RasterBand, RasterStack
from covariate_map.projection import project_band
from covariate_map.render import NotebookRenderer

logger = logging.getLogger(__name__)

Renderer = Callable[[MapDocument], None]
Projector = Callable[[RasterBand], RasterBand]


def training_data(model):
    """The training table of a model result (attribute or mapping key `data`)."""
    if hasattr(model, "data"):
        return model.data
    if isinstance(model, dict) and "data" in model:
        return model["data"]
    raise KeyError("Model result has no 'data' table.")


class InteractiveCovariateMap:
    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        projector: Projector = project_band,
        palette: Optional[Sequence[str]] = None,
        options: Optional[MapOptions] = None,
    ):
        self.renderer = renderer if renderer is not None else NotebookRenderer()
        self.projector = projector
        self.palette = palette
        self.options = options or MapOptions()

    def build_document(self, model, ras: RasterStack, which: int = 1,
                       max_bytes: Optional[int] = None) -> MapDocument:
        band = select_layer(ras, which)
        projected = self.projector(band)

        # scale over the source values; bilinear warping never leaves this range
        vmin, vmax = band.value_range
        scale = ColorScale(vmin, vmax, palette=self.palette)

        options = self.options
        if max_bytes is not None:
            options = MapOptions(**{**vars(options), "max_bytes": int(max_bytes)})
        return compose_map(projected, training_data(model), scale, options)

    def __call__(self, model, ras: RasterStack, which: int = 1,
                 max_bytes: Optional[int] = None) -> None:
        doc = self.build_document(model, ras, which=which, max_bytes=max_bytes)
        logger.debug("Rendering covariate map with overlays %s", doc.overlay_names)
        self.renderer(doc)
        return None


def build_document(model, ras: RasterStack, which: int = 1,
                   max_bytes: Optional[int] = None) -> MapDocument:
    return InteractiveCovariateMap(renderer=_no_render).build_document(
        model, ras, which=which, max_bytes=max_bytes)


def interactive_covariate_map(model, ras: RasterStack, which: int = 1,
                              max_bytes: Optional[int] = None,
                              renderer: Optional[Renderer] = None) -> None:
    InteractiveCovariateMap(renderer=renderer)(model, ras, which=which, max_bytes=max_bytes)


def _no_render(doc: MapDocument) -> None:
    pass
