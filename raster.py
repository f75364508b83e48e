"""Decoding uploads into rasters, encoding results and drawing the crop preview."""

import logging
import os
from io import BytesIO

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from geometry import to_quad

logger = logging.getLogger(__name__)


def load_image(data, max_side=2048):
    """ Decode bytes, a file-like object or a path into an RGBA uint8 raster.

    Images whose longer side exceeds max_side are scaled down, keeping the
    aspect ratio.
    """
    if isinstance(data, (bytes, bytearray)):
        data = BytesIO(data)
    elif isinstance(data, os.PathLike):
        data = os.fspath(data)
    try:
        with Image.open(data) as image:
            image = ImageOps.exif_transpose(image)
            img = np.array(image.convert("RGBA"))
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Could not decode image: {e}") from e

    height, width = img.shape[:2]
    longest = max(width, height)
    if max_side and longest > max_side:
        scale = max_side / float(longest)
        size = (max(1, round(width * scale)), max(1, round(height * scale)))
        logger.info("Downscaling upload from %dx%d to %dx%d", width, height, *size)
        img = cv2.resize(img, size, interpolation=cv2.INTER_AREA)
    return img


def encode_image(img, fmt="JPEG", quality=95):
    """ Encode a raster with Pillow. JPEG output drops the alpha channel. """
    image = Image.fromarray(np.ascontiguousarray(img))
    fmt = fmt.upper()
    if fmt in ("JPEG", "JPG"):
        fmt = "JPEG"
        if image.mode != "RGB":
            image = image.convert("RGB")
    buffer = BytesIO()
    if fmt == "JPEG":
        image.save(buffer, format=fmt, quality=int(quality))
    else:
        image.save(buffer, format=fmt)
    return buffer.getvalue()


def _to_rgb(img):
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_RGBA2RGB)
    return img.copy()


# Preview of the selection: darken outside the quad, outline it, number the handles
def draw_selection(img, corners, color=(34, 197, 94), shade=0.5, radius=None):
    preview = _to_rgb(np.asarray(img))
    quad = to_quad(corners)
    pts = np.array([[round(p.x), round(p.y)] for p in quad], dtype=np.int32)

    mask = np.zeros(preview.shape[:2], dtype=np.uint8)
    cv2.fillPoly(mask, [pts], 255)
    outside = mask == 0
    preview[outside] = (preview[outside] * (1.0 - shade)).astype(np.uint8)

    height, width = preview.shape[:2]
    thickness = max(1, round(max(width, height) / 300))
    if radius is None:
        radius = max(4, round(max(width, height) / 60))
    cv2.polylines(preview, [pts], True, color, thickness, cv2.LINE_AA)

    for i, (x, y) in enumerate(pts):
        cv2.circle(preview, (int(x), int(y)), radius, (255, 255, 255), -1, cv2.LINE_AA)
        cv2.circle(preview, (int(x), int(y)), radius, (21, 128, 61), thickness, cv2.LINE_AA)
        cv2.putText(preview, str(i + 1), (int(x) - radius // 3, int(y) + radius // 3),
                    cv2.FONT_HERSHEY_SIMPLEX, radius / 25.0, (0, 0, 0), max(1, thickness // 2), cv2.LINE_AA)
    return preview
