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


from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from fashionhub.gen_ai.services.genai_client import (
    GenerationError,
    clean_json,
    extract_image_data_url,
)
from conftest import generated_url, image_response, text_response


def test_clean_json_strips_fences_and_surrounding_text():
    raw = 'Here you go:\n```json\n{"productName": "Derby", "color": "Black"}\n```\nThanks'
    assert clean_json(raw) == '{"productName": "Derby", "color": "Black"}'


def test_clean_json_without_object_returns_stripped_text():
    assert clean_json("```\nnot json\n```") == "not json"


def test_extract_image_data_url_encodes_inline_bytes():
    response = image_response(b"\x89PNGdata", "image/jpeg")
    assert extract_image_data_url(response) == generated_url(b"\x89PNGdata", "image/jpeg")


def test_extract_image_data_url_skips_text_parts():
    response = types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part.from_text(text="Here is your image"),
                        types.Part.from_bytes(data=b"img", mime_type="image/png"),
                    ],
                )
            )
        ]
    )
    assert extract_image_data_url(response) == generated_url(b"img")


def test_extract_image_data_url_reports_model_text_when_no_image():
    with pytest.raises(GenerationError, match="I cannot draw that"):
        extract_image_data_url(text_response("I cannot draw that"))


def test_extract_image_data_url_raises_on_blocked_prompt():
    response = MagicMock()
    response.prompt_feedback.block_reason = "SAFETY"
    with pytest.raises(GenerationError, match="blocked"):
        extract_image_data_url(response)


@pytest.mark.asyncio
async def test_generate_text_joins_text_parts(genai_client, sdk):
    sdk.aio.models.generate_content = AsyncMock(return_value=text_response("hello"))

    text = await genai_client.generate_text("prompt", model="gemini-2.0-flash-001", temperature=0.7)

    assert text == "hello"
    kwargs = sdk.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.0-flash-001"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].temperature == 0.7


@pytest.mark.asyncio
async def test_generate_image_requests_image_modality_and_size(genai_client, sdk):
    url = await genai_client.generate_image(
        [types.Part.from_text(text="draw")], model="gemini-3-pro-image-preview", aspect_ratio="9:16", image_size="2K"
    )

    assert url == generated_url()
    config = sdk.aio.models.generate_content.call_args.kwargs["config"]
    assert config.response_modalities == ["TEXT", "IMAGE"]
    assert config.image_config.aspect_ratio == "9:16"
    assert config.image_config.image_size == "2K"


@pytest.mark.asyncio
async def test_generate_image_without_size_sends_no_image_config(genai_client, sdk):
    await genai_client.generate_image([types.Part.from_text(text="draw")], model="m")
    assert sdk.aio.models.generate_content.call_args.kwargs["config"].image_config is None
