import folium
import pytest
from branca.colormap import LinearColormap

from covariate_map.plugin import build_document
from covariate_map.render import FoliumBackend, HtmlFileRenderer, render_html
from covariate_map.server import preview_app


@pytest.fixture
def doc(model, stack):
    return build_document(model, stack, which=2)


def children(element):
    return list(element._children.values())


class TestFoliumBackend:

    def test_base_layers(self, doc):
        m = FoliumBackend().build(doc)
        tiles = [c for c in children(m) if isinstance(c, folium.TileLayer)]
        assert [t.layer_name for t in tiles] == ["OpenStreetMap", "Esri.WorldImagery"]
        assert all(not t.overlay for t in tiles)

    def test_overlay_groups(self, doc):
        m = FoliumBackend().build(doc)
        groups = [c for c in children(m) if isinstance(c, folium.FeatureGroup)]
        assert [g.layer_name for g in groups] == ["rainfall", "background data", "presence data"]
        raster_group, background, presence = groups
        assert any(isinstance(c, folium.raster_layers.ImageOverlay) for c in children(raster_group))
        assert sum(isinstance(c, folium.CircleMarker) for c in children(background)) == 2
        assert sum(isinstance(c, folium.CircleMarker) for c in children(presence)) == 4

    def test_legend_and_control(self, doc):
        m = FoliumBackend().build(doc)
        legends = [c for c in children(m) if isinstance(c, LinearColormap)]
        assert len(legends) == 1
        assert legends[0].caption == "rainfall"
        controls = [c for c in children(m) if isinstance(c, folium.LayerControl)]
        assert len(controls) == 1

    def test_html(self, doc):
        html = render_html(doc)
        assert "rainfall" in html
        assert "presence data" in html
        assert "data:image/png;base64," in html
        assert "server.arcgisonline.com" in html


class TestRenderers:

    def test_html_file(self, doc, tmp_path):
        out = tmp_path / "maps" / "covariate.html"
        HtmlFileRenderer(str(out))(doc)
        text = out.read_text(encoding="utf-8")
        assert "rainfall" in text
        assert "background data" in text


class TestPreviewApp:

    def test_routes(self, doc):
        client = preview_app(doc).test_client()

        page = client.get("/")
        assert page.status_code == 200
        assert page.headers["Content-Type"].startswith("text/html")
        assert b"rainfall" in page.data

        png = client.get("/overlay.png")
        assert png.status_code == 200
        assert png.headers["Content-Type"] == "image/png"
        assert png.data == doc.raster.png

        summary = client.get("/document").get_json()
        assert summary["overlays"] == ["rainfall", "background data", "presence data"]
        assert summary["base_layers"] == ["OpenStreetMap", "Esri.WorldImagery"]
        assert summary["legend"]["title"] == "rainfall"
        assert len(summary["legend"]["values"]) == 10


class TestNotebookRenderer:

    def test_notebook_renderer_falls_back_to_browser(self, doc, monkeypatch):
        import covariate_map.render as render

        opened = []
        monkeypatch.setattr(render, "HAVE_IPYTHON", False)
        monkeypatch.setattr(render.webbrowser, "open", opened.append)
        render.NotebookRenderer()(doc)
        assert len(opened) == 1
        assert opened[0].startswith("file://") and opened[0].endswith(".html")
