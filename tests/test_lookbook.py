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


from unittest.mock import AsyncMock

import pytest

from fashionhub.gen_ai.services.lookbook_service import (
    CANDIDATE_POSES,
    DIGITAL_FILTER,
    FILM_FILTER,
    MAX_PRODUCT_IMAGES,
    LookbookService,
    build_candidate_prompt,
    build_lookbook_shots,
)
from conftest import generated_url, image_response


def test_candidate_prompt_uses_gender_term():
    assert "FEMALE model, 25 years old, Korean" in build_candidate_prompt("w", "25", "Korean", CANDIDATE_POSES[0])
    assert "MALE model" in build_candidate_prompt("m", "30", "White", CANDIDATE_POSES[1])


def test_lookbook_shots_are_three_full_body_then_three_detail():
    shots = build_lookbook_shots("m", use_filter=False)
    assert [(t, i) for t, i, _ in shots] == [
        ("model", 0), ("model", 1), ("model", 2), ("detail", 0), ("detail", 1), ("detail", 2),
    ]
    assert "[SHOT 4] DETAIL KNEE-DOWN" in shots[3][2]
    assert all(DIGITAL_FILTER in prompt for _, _, prompt in shots)
    assert FILM_FILTER in build_lookbook_shots("w", use_filter=True)[0][2]


@pytest.mark.asyncio
async def test_generate_candidates_reports_progress_and_skips_failures(genai_client, sdk, sample_data_url):
    sdk.aio.models.generate_content = AsyncMock(
        side_effect=[image_response(b"1"), RuntimeError("boom"), image_response(b"3"), image_response(b"4"), image_response(b"5")]
    )
    messages = []

    candidates = await LookbookService(genai_client).generate_candidates(
        "w", "25", "Korean", sample_data_url, on_progress=messages.append
    )

    assert candidates == [generated_url(b"1"), generated_url(b"3"), generated_url(b"4"), generated_url(b"5")]
    assert len(messages) == len(CANDIDATE_POSES)
    config = sdk.aio.models.generate_content.call_args.kwargs["config"]
    assert config.image_config.aspect_ratio == "3:4"


@pytest.mark.asyncio
async def test_generate_lookbook_tags_shots_at_generation_time(genai_client, sdk, sample_data_url, sample_image):
    sdk.aio.models.generate_content = AsyncMock(
        side_effect=[
            image_response(b"m0"),
            RuntimeError("blocked"),
            image_response(b"m2"),
            image_response(b"d0"),
            image_response(b"d1"),
            image_response(b"d2"),
        ]
    )

    images = await LookbookService(genai_client).generate_lookbook(
        sample_data_url, [sample_image] * 6, bg_image=sample_image, gender="w"
    )

    assert [(image.type, image.index) for image in images] == [
        ("model", 0), ("model", 2), ("detail", 0), ("detail", 1), ("detail", 2),
    ]
    assert images[1].url == generated_url(b"m2")
    kwargs = sdk.aio.models.generate_content.call_args.kwargs
    # candidate + capped product images + background + prompt
    assert len(kwargs["contents"]) == 1 + MAX_PRODUCT_IMAGES + 1 + 1
    assert kwargs["config"].image_config.aspect_ratio == "9:16"
    assert kwargs["config"].image_config.image_size == "2K"


@pytest.mark.asyncio
async def test_generate_lookbook_requires_product_images(genai_client, sample_data_url):
    with pytest.raises(ValueError):
        await LookbookService(genai_client).generate_lookbook(sample_data_url, [])
