import numpy as np
import pandas as pd
import pytest
from rasterio.crs import CRS
from rasterio.transform import from_origin

from covariate_map.models import RasterStack


class ModelResult:
    def __init__(self, data):
        self.data = data
        self.model = None


@pytest.fixture
def stack():
    """Two bands over lon 5..8, lat 50..52 at 0.1 degree."""
    H, W = 20, 30
    blocks = np.where(np.arange(W)[np.newaxis, :] < W // 2, 1.0, 5.0) * np.ones((H, 1))
    ramp = np.tile(np.linspace(0.0, 10.0, W), (H, 1))
    return RasterStack(
        data=np.stack([blocks, ramp]),
        transform=from_origin(5.0, 52.0, 0.1, 0.1),
        crs=CRS.from_epsg(4326),
        names=("temperature", "rainfall"),
    )


@pytest.fixture
def training():
    rng = np.random.default_rng(0)
    rows = (
        [("presence", 5.5 + 0.1 * i, 50.5 + 0.1 * i) for i in range(4)]
        + [("background", 7.0 + 0.1 * i, 51.0) for i in range(2)]
    )
    order = rng.permutation(len(rows))
    rows = [rows[i] for i in order]
    return pd.DataFrame({
        "type": [r[0] for r in rows],
        "lon": [r[1] for r in rows],
        "lat": [r[2] for r in rows],
    })


@pytest.fixture
def model(training):
    return ModelResult(training)
