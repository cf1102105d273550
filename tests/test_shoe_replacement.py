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
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from fashionhub.gen_ai.services.shoe_replacement_service import (
    CANVAS_SIZE,
    MAX_REFERENCE_IMAGES,
    REPLACEMENT_INSTRUCTION,
    VFX_PROMPT,
    ColorSettings,
    ShoeReplacementService,
    build_campaign_prompt,
)
from conftest import generated_url, image_response


def test_campaign_prompt_includes_only_set_colors():
    prompt = build_campaign_prompt(ColorSettings(outer="navy", socks="white"))
    assert "Change the Outerwear/Coat color to navy." in prompt
    assert "Change the Socks color to white." in prompt
    assert "Pants/Trousers" not in prompt
    assert "[ADDITIONAL CLOTHING EDITS]" not in build_campaign_prompt()


@pytest.mark.asyncio
async def test_replace_shoes_pads_source_and_caps_references(genai_client, sdk, sample_data_url):
    url = await ShoeReplacementService(genai_client).replace_shoes(sample_data_url, [sample_data_url] * 4)

    assert url == generated_url()
    contents = sdk.aio.models.generate_content.call_args.kwargs["contents"]
    assert contents[0].text == REPLACEMENT_INSTRUCTION
    assert contents[-1].text == VFX_PROMPT
    assert len(contents) == 2 + MAX_REFERENCE_IMAGES + 1

    padded = Image.open(io.BytesIO(contents[1].inline_data.data))
    assert padded.size == (CANVAS_SIZE, CANVAS_SIZE)
    assert contents[1].inline_data.mime_type == "image/jpeg"


@pytest.mark.asyncio
async def test_replace_shoes_requires_product(genai_client, sample_data_url):
    with pytest.raises(ValueError):
        await ShoeReplacementService(genai_client).replace_shoes(sample_data_url, [])


@pytest.mark.asyncio
async def test_batch_replace_reports_errors_per_image(genai_client, sdk, sample_data_url):
    sdk.aio.models.generate_content = AsyncMock(side_effect=[image_response(b"ok"), RuntimeError("safety")])
    progress = []

    results = await ShoeReplacementService(genai_client).batch_replace(
        [sample_data_url, sample_data_url], sample_data_url, on_progress=lambda i, n: progress.append((i, n))
    )

    assert results[0].result == generated_url(b"ok")
    assert results[0].error is None
    assert results[1].result is None
    assert results[1].error == "safety"
    assert progress == [(1, 2), (2, 2)]


@pytest.mark.asyncio
async def test_campaign_sends_every_product_image(genai_client, sdk, sample_data_url):
    await ShoeReplacementService(genai_client).generate_campaign_image(
        sample_data_url, [sample_data_url] * 3, ColorSettings(pants="black")
    )
    contents = sdk.aio.models.generate_content.call_args.kwargs["contents"]
    assert len(contents) == 2 + 3 + 1
    assert "Change the Pants/Trousers color to black." in contents[-1].text


@pytest.mark.asyncio
async def test_change_pose(genai_client, sdk, sample_data_url):
    await ShoeReplacementService(genai_client).change_pose(sample_data_url, "Legs crossed")
    kwargs = sdk.aio.models.generate_content.call_args.kwargs
    assert '"Legs crossed"' in kwargs["contents"][1].text
    assert kwargs["config"].image_config.aspect_ratio == "3:4"

    with pytest.raises(ValueError):
        await ShoeReplacementService(genai_client).change_pose(sample_data_url, "  ")
