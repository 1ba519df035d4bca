# config.py
WEB_MERCATOR = "EPSG:3857"
WGS84 = "EPSG:4326"

# Web Mercator world edge: latitude limit and half width in metres
MERCATOR_LAT_LIMIT = 85.0511287798066
MERCATOR_HALF_WORLD = 20037508.342789244

# Encoded overlay size limit (PNG bytes, before base64)
DEFAULT_MAX_BYTES = 4_200_000
# Each downsampling pass aims a little under the budget
BUDGET_SHRINK = 0.9

PALETTE_NAME = "viridis"
PALETTE_STEPS = 10
LEGEND_DIGITS = 3

OVERLAY_OPACITY = 0.8
LEGEND_OPACITY = 0.8

MARKER_RADIUS = 5
MARKER_WEIGHT = 1
MARKER_BORDER = "#666666"  # grey(0.4)

# Later groups draw on top of earlier ones.
# Fills are grey(1, 0, 0.2) over the sorted levels absence, background, presence.
CATEGORY_ORDER = ("background", "absence", "presence")
CATEGORY_FILL = {
    "absence": "#FFFFFF",
    "background": "#000000",
    "presence": "#333333",
}

BASE_LAYERS = (
    ("OpenStreetMap",
     "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
     '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'),
    ("Esri.WorldImagery",
     "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
     "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
     "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"),
)
LAYER_CONTROL_POSITION = "topleft"
