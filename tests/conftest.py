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
Shared fixtures: a GenAIClient whose SDK client is a mock, and tiny real images.
"""

import base64
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types
from PIL import Image

from fashionhub.gen_ai.services.genai_client import GenAIClient
from fashionhub.gen_ai.services.image_utils import InputImage


def png_bytes(width: int = 8, height: int = 6, color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def data_url(raw: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"


def image_response(data: bytes = b"generated-image", mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part.from_bytes(data=data, mime_type=mime_type)])
            )
        ]
    )


def text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part.from_text(text=text)]))]
    )


def generated_url(data: bytes = b"generated-image", mime_type: str = "image/png") -> str:
    return data_url(data, mime_type)


@pytest.fixture
def sdk():
    """Stand-in for google.genai.Client; configure sdk.aio.models.generate_content per test."""
    fake = MagicMock()
    fake.aio.models.generate_content = AsyncMock(return_value=image_response())
    return fake


@pytest.fixture
def genai_client(sdk):
    return GenAIClient(project_id="test-project", location="us-central1", client=sdk)


@pytest.fixture
def sample_png():
    return png_bytes()


@pytest.fixture
def sample_image(sample_png):
    return InputImage(base64=base64.b64encode(sample_png).decode("ascii"), mime_type="image/png")


@pytest.fixture
def sample_data_url(sample_png):
    return data_url(sample_png)
