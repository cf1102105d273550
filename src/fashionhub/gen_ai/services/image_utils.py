#
# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Image helpers - data URLs, Gemini parts and canvas preprocessing
"""

import base64
import io
import logging
from typing import Optional, Tuple
from urllib.parse import urlparse

import requests
from google.genai import types
from PIL import Image
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"


class InputImage(BaseModel):
    """An uploaded image. `base64` may be a raw payload or a full data URL."""

    base64: str = Field(..., description="Base64 payload or data URL")
    mime_type: str = Field(DEFAULT_MIME_TYPE, alias="mimeType", description="MIME type of the image")

    model_config = {"populate_by_name": True}

    def to_part(self) -> types.Part:
        mime_type, payload = split_data_url(self.base64, self.mime_type)
        return types.Part.from_bytes(data=decode_base64(payload), mime_type=mime_type)

    def to_data_url(self) -> str:
        mime_type, payload = split_data_url(self.base64, self.mime_type)
        return to_data_url(payload, mime_type)


def split_data_url(value: str, default_mime_type: str = DEFAULT_MIME_TYPE) -> Tuple[str, str]:
    """
    Split a data URL into its MIME type and base64 payload.

    Raw base64 is returned unchanged with the default MIME type.
    """
    if "base64," not in value:
        return default_mime_type, value
    header, payload = value.split("base64,", 1)
    mime_type = default_mime_type
    if header.startswith("data:"):
        mime_type = header[len("data:"):].rstrip(";") or default_mime_type
    return mime_type, payload


def strip_data_url(value: str) -> str:
    return split_data_url(value)[1]


def to_data_url(payload: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{payload}"


def decode_base64(payload: str) -> bytes:
    """Decode base64, tolerating missing padding."""
    missing_padding = len(payload) % 4
    if missing_padding:
        payload += "=" * (4 - missing_padding)
    return base64.b64decode(payload)


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def fetch_image_bytes(image_url: str) -> bytes:
    """Fetch image bytes from an http(s) or gs:// URL."""
    parsed_url = urlparse(image_url)

    # gs:// objects are read through the public endpoint
    if parsed_url.scheme == "gs":
        bucket = parsed_url.netloc
        object_path = parsed_url.path.lstrip("/")
        url = f"https://storage.googleapis.com/{bucket}/{object_path}"
    else:
        url = image_url

    response = requests.get(url, timeout=10)
    if response.status_code != 200:
        raise ValueError(f"Failed to fetch image from {url}: {response.status_code}")
    return response.content


def load_image(source: str, mime_type: str = DEFAULT_MIME_TYPE) -> Tuple[bytes, str]:
    """
    Resolve an image reference to raw bytes.

    Args:
        source: Data URL, raw base64 payload, or http(s)/gs URL.
        mime_type: MIME type used when the source does not carry one.

    Returns:
        Tuple of (image bytes, MIME type).
    """
    if source.startswith(("http://", "https://", "gs://")):
        logger.info(f"Fetching image from {source[:100]}")
        return fetch_image_bytes(source), mime_type
    detected_mime, payload = split_data_url(source, mime_type)
    return decode_base64(payload), detected_mime


def image_part(source: str, mime_type: str = DEFAULT_MIME_TYPE) -> types.Part:
    data, detected_mime = load_image(source, mime_type)
    return types.Part.from_bytes(data=data, mime_type=detected_mime)


def _open_rgb(image_bytes: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(image_bytes))
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def fit_to_canvas(
    image_bytes: bytes,
    width: int,
    height: int,
    fill: str = "#111827",
    format: str = "JPEG",
) -> bytes:
    """
    Fit an image inside a width x height canvas, keeping its aspect ratio.

    The free area is filled with `fill` (letterbox or pillarbox).

    Args:
        image_bytes: Original image bytes.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        fill: Canvas colour.
        format: Output format passed to PIL.

    Returns:
        Encoded canvas bytes.
    """
    img = _open_rgb(image_bytes)
    ratio = min(width / img.width, height / img.height)
    new_size = (max(1, round(img.width * ratio)), max(1, round(img.height * ratio)))
    img = img.resize(new_size, Image.Resampling.LANCZOS)

    canvas = Image.new("RGB", (width, height), fill)
    offset = ((width - new_size[0]) // 2, (height - new_size[1]) // 2)
    canvas.paste(img, offset)

    output_buffer = io.BytesIO()
    if format.upper() == "JPEG":
        canvas.save(output_buffer, format="JPEG", quality=95)
    else:
        canvas.save(output_buffer, format=format)
    return output_buffer.getvalue()


def pad_to_square(image_bytes: bytes, size: int = 1400, fill: str = "#000000") -> bytes:
    """Center an image on a black square canvas so the model outpaints the bars."""
    return fit_to_canvas(image_bytes, size, size, fill=fill, format="JPEG")


def resize_image(
    image_bytes: bytes,
    width: Optional[int] = None,
    height: Optional[int] = None,
    scale: Optional[float] = None,
) -> bytes:
    """
    Resize an image to an explicit size, a single dimension, or a scale factor.

    A single dimension keeps the aspect ratio. Output is PNG.
    """
    img = Image.open(io.BytesIO(image_bytes))

    if scale is not None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        new_size = (round(img.width * scale), round(img.height * scale))
    elif width and height:
        new_size = (width, height)
    elif width:
        new_size = (width, round(img.height * width / img.width))
    elif height:
        new_size = (round(img.width * height / img.height), height)
    else:
        raise ValueError("Provide width, height or scale")

    if new_size[0] <= 0 or new_size[1] <= 0:
        raise ValueError(f"Invalid target size: {new_size}")

    img = img.resize(new_size, Image.Resampling.LANCZOS)
    output_buffer = io.BytesIO()
    img.save(output_buffer, format="PNG")
    return output_buffer.getvalue()
