# server.py — local Flask preview of a composed covariate map
# deps: pip install flask folium

from __future__ import annotations
import logging
from typing import Optional
from flask import Flask, jsonify, make_response

from covariate_map.document import MapDocument
from covariate_map.render import FoliumBackend, render_html

logger = logging.getLogger(__name__)


def preview_app(doc: MapDocument, backend: Optional[FoliumBackend] = None) -> Flask:
    """Flask app serving the page at / and the raw overlay at /overlay.png."""
    app = Flask(__name__)
    page = render_html(doc, backend)

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,OPTIONS"
        return resp

    @app.route("/", methods=["GET"])
    def root():
        resp = make_response(page)
        resp.headers["Content-Type"] = "text/html; charset=utf-8"
        return resp

    @app.route("/overlay.png", methods=["GET"])
    def overlay_png():
        raster = doc.raster
        if raster is None:
            return jsonify({"error": "document has no raster overlay"}), 404
        resp = make_response(raster.png)
        resp.headers["Content-Type"] = "image/png"
        return resp

    @app.route("/document", methods=["GET"])
    def document():
        (south, west), (north, east) = doc.bounds
        return jsonify({
            "base_layers": list(doc.layer_control.base_groups),
            "overlays": list(doc.layer_control.overlay_groups),
            "legend": {
                "title": doc.legend.title,
                "values": [e.value for e in doc.legend.entries],
                "colors": [e.color for e in doc.legend.entries],
            },
            "bounds": [[south, west], [north, east]],
        })

    return app


def serve_preview(doc: MapDocument, host: str = "127.0.0.1", port: int = 8081,
                  backend: Optional[FoliumBackend] = None) -> None:
    app = preview_app(doc, backend)
    logger.info("Serving covariate map preview on http://%s:%d/", host, port)
    app.run(host=host, port=port, threaded=True)


class PreviewServerRenderer:
    """Renderer that blocks serving the map until the server is stopped."""

    def __init__(self, host: str = "127.0.0.1", port: int = 8081,
                 backend: Optional[FoliumBackend] = None):
        self.host = host
        self.port = port
        self.backend = backend

    def __call__(self, doc: MapDocument) -> None:
        serve_preview(doc, self.host, self.port, self.backend)
