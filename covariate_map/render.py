# region Header
"""
render.py: turns a MapDocument into a Leaflet page (folium) and emits it.

Renderers are plain callables taking a MapDocument:
  - HtmlFileRenderer(path)   writes a standalone HTML file
  - NotebookRenderer()       displays inline in Jupyter, else opens a browser
"""
# endregion

# region Imports
from __future__ import annotations
import logging
import os
import tempfile
import webbrowser
from typing import Optional
import folium
from branca.colormap import LinearColormap
from matplotlib.colors import to_rgba

from covariate_map.document import MapDocument, MarkerGroup, RasterOverlay
try:
    from IPython.display import display
    HAVE_IPYTHON = True
except ImportError:
    HAVE_IPYTHON = False
# endregion

logger = logging.getLogger(__name__)


# region Folium Backend
class FoliumBackend:
    """Builds a folium.Map from a MapDocument."""

    def __init__(self, collapsed_control: bool = False, control_scale: bool = True):
        self.collapsed_control = collapsed_control
        self.control_scale = control_scale

    def build(self, doc: MapDocument) -> folium.Map:
        m = folium.Map(tiles=None, control_scale=self.control_scale)

        # base maps: first one visible
        for i, base in enumerate(doc.base_layers):
            folium.TileLayer(
                tiles=base.tiles,
                attr=base.attribution,
                name=base.name,
                overlay=False,
                control=True,
                show=(i == 0),
            ).add_to(m)

        for overlay in doc.overlays:
            group = folium.FeatureGroup(name=overlay.name, overlay=True, control=True, show=True)
            if isinstance(overlay, RasterOverlay):
                self._add_raster(group, overlay)
            elif isinstance(overlay, MarkerGroup):
                self._add_markers(group, overlay)
            group.add_to(m)

        self.legend(doc).add_to(m)

        folium.LayerControl(
            position=doc.layer_control.position,
            collapsed=self.collapsed_control,
        ).add_to(m)

        (south, west), (north, east) = doc.bounds
        m.fit_bounds([[south, west], [north, east]])
        return m

    def _add_raster(self, group: folium.FeatureGroup, overlay: RasterOverlay) -> None:
        (south, west), (north, east) = overlay.bounds
        folium.raster_layers.ImageOverlay(
            image=overlay.data_url,
            bounds=[[south, west], [north, east]],
            opacity=overlay.opacity,
            name=overlay.name,
            interactive=False,
            cross_origin=False,
        ).add_to(group)

    def _add_markers(self, group: folium.FeatureGroup, markers: MarkerGroup) -> None:
        for lon, lat in markers.points:
            folium.CircleMarker(
                location=[lat, lon],
                radius=markers.radius,
                color=markers.border_color,
                weight=markers.weight,
                opacity=markers.opacity,
                fill=True,
                fill_color=markers.fill_color,
                fill_opacity=markers.fill_opacity,
            ).add_to(group)

    @staticmethod
    def legend(doc: MapDocument) -> LinearColormap:
        legend = doc.legend
        alpha = legend.opacity
        vmin, vmax = legend.domain
        colors = [to_rgba(e.color or "#00000000", alpha=alpha) for e in legend.entries]
        if vmax <= vmin:
            # branca needs a non-empty range to draw its ticks
            return LinearColormap([colors[0], colors[0]], vmin=vmin - 0.5, vmax=vmax + 0.5,
                                  caption=legend.title)
        return LinearColormap(colors, vmin=vmin, vmax=vmax, caption=legend.title)


def render_html(doc: MapDocument, backend: Optional[FoliumBackend] = None) -> str:
    backend = backend or FoliumBackend()
    return backend.build(doc).get_root().render()
# endregion


# region Renderers
class HtmlFileRenderer:
    def __init__(self, path: str, backend: Optional[FoliumBackend] = None):
        self.path = path
        self.backend = backend or FoliumBackend()

    def __call__(self, doc: MapDocument) -> None:
        out_dir = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(out_dir, exist_ok=True)
        self.backend.build(doc).save(self.path)
        logger.info("Wrote covariate map (%d overlays) to %s", len(doc.overlays), self.path)


class NotebookRenderer:
    """Inline display when running under IPython, else a browser tab."""

    def __init__(self, backend: Optional[FoliumBackend] = None):
        self.backend = backend or FoliumBackend()

    def __call__(self, doc: MapDocument) -> None:
        m = self.backend.build(doc)
        if HAVE_IPYTHON and _in_ipython():
            display(m)
            return
        fd, path = tempfile.mkstemp(suffix=".html", prefix="covariate_map_")
        os.close(fd)
        m.save(path)
        logger.info("Opening covariate map %s", path)
        webbrowser.open("file://" + path)


def _in_ipython() -> bool:
    from IPython import get_ipython
    return get_ipython() is not None
# endregion
