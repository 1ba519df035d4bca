# imaging.py
import io
import logging
import math
from typing import Tuple
import numpy as np
from PIL import Image

from covariate_map import config
from covariate_map.errors import SizeBudgetViolation

logger = logging.getLogger(__name__)


def encode_png(rgba: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8), "RGBA").save(buf, "PNG", optimize=True)
    return buf.getvalue()


def fit_to_budget(rgba: np.ndarray, max_bytes: int = config.DEFAULT_MAX_BYTES) -> Tuple[bytes, Tuple[int, int]]:
    """
    PNG-encode an (H,W,4) image, downsampling until the encoding is at most
    `max_bytes`. Returns (png_bytes, (H_out, W_out)).

    Nearest-neighbour resampling keeps transparent cells transparent and
    every visible pixel on a color the scale actually produces.
    """
    max_bytes = int(max_bytes)
    if max_bytes <= 0:
        raise SizeBudgetViolation(f"Byte budget must be positive, got {max_bytes}.")

    img = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8), "RGBA")
    png = encode_png(np.asarray(img))
    while len(png) > max_bytes:
        W, H = img.size
        if W == 1 and H == 1:
            raise SizeBudgetViolation(
                f"Overlay needs {len(png)} bytes even at 1x1; budget is {max_bytes}."
            )
        scale = math.sqrt(max_bytes / float(len(png))) * config.BUDGET_SHRINK
        W_new = max(1, min(W - 1, int(W * scale))) if W > 1 else 1
        H_new = max(1, min(H - 1, int(H * scale))) if H > 1 else 1
        logger.debug("Overlay %dx%d is %d bytes > %d; resizing to %dx%d",
                     W, H, len(png), max_bytes, W_new, H_new)
        img = img.resize((W_new, H_new), Image.Resampling.NEAREST)
        png = encode_png(np.asarray(img))

    W, H = img.size
    return png, (H, W)
