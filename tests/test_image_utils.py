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


import io
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from fashionhub.gen_ai.services.image_utils import (
    InputImage,
    decode_base64,
    fetch_image_bytes,
    fit_to_canvas,
    load_image,
    pad_to_square,
    resize_image,
    split_data_url,
    strip_data_url,
)
from conftest import data_url, png_bytes


def _size(raw: bytes):
    return Image.open(io.BytesIO(raw)).size


def test_split_data_url_reads_mime_type():
    assert split_data_url("data:image/jpeg;base64,AAAA") == ("image/jpeg", "AAAA")


def test_split_data_url_passes_raw_base64_through():
    assert split_data_url("AAAA", "image/webp") == ("image/webp", "AAAA")
    assert strip_data_url("data:image/png;base64,QUJD") == "QUJD"


def test_decode_base64_tolerates_missing_padding():
    assert decode_base64("QUI") == b"AB"


def test_input_image_accepts_camel_case_and_data_urls(sample_png):
    image = InputImage.model_validate({"base64": data_url(sample_png, "image/jpeg"), "mimeType": "image/png"})
    part = image.to_part()
    # the data URL header wins over the declared type
    assert part.inline_data.mime_type == "image/jpeg"
    assert part.inline_data.data == sample_png
    assert image.to_data_url() == data_url(sample_png, "image/jpeg")


def test_load_image_from_data_url(sample_png, sample_data_url):
    assert load_image(sample_data_url) == (sample_png, "image/png")


def test_fetch_image_bytes_rewrites_gs_urls():
    response = MagicMock(status_code=200, content=b"bytes")
    with patch("fashionhub.gen_ai.services.image_utils.requests.get", return_value=response) as get:
        assert fetch_image_bytes("gs://bucket/facesw/a.png") == b"bytes"
    get.assert_called_once_with("https://storage.googleapis.com/bucket/facesw/a.png", timeout=10)


def test_fetch_image_bytes_raises_on_http_error():
    with patch(
        "fashionhub.gen_ai.services.image_utils.requests.get", return_value=MagicMock(status_code=404, content=b"")
    ):
        with pytest.raises(ValueError, match="404"):
            fetch_image_bytes("https://example.com/missing.png")


def test_fit_to_canvas_letterboxes_to_exact_size():
    wide = png_bytes(200, 100)
    out = fit_to_canvas(wide, 300, 300)
    img = Image.open(io.BytesIO(out))
    assert img.size == (300, 300)
    assert img.format == "JPEG"


def test_pad_to_square_uses_requested_size():
    assert _size(pad_to_square(png_bytes(40, 80), size=120)) == (120, 120)


def test_resize_image_keeps_aspect_for_single_dimension():
    assert _size(resize_image(png_bytes(200, 100), width=100)) == (100, 50)
    assert _size(resize_image(png_bytes(200, 100), height=25)) == (50, 25)


def test_resize_image_by_scale_and_explicit_size():
    assert _size(resize_image(png_bytes(200, 100), scale=0.5)) == (100, 50)
    assert _size(resize_image(png_bytes(200, 100), width=30, height=40)) == (30, 40)


@pytest.mark.parametrize("kwargs", [{}, {"scale": 0}, {"scale": -1.0}])
def test_resize_image_rejects_invalid_targets(kwargs):
    with pytest.raises(ValueError):
        resize_image(png_bytes(), **kwargs)
