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

from fashionhub.gen_ai.services.pose_library import POSE_LIBRARY
from fashionhub.gen_ai.services.pose_service import PoseService, build_pose_prompt, get_available_poses
from conftest import generated_url, image_response, text_response


def test_every_library_has_ten_unique_poses():
    for poses in POSE_LIBRARY.values():
        assert len(poses) == 10
        assert len({pose.id for pose in poses}) == 10


def test_available_poses_skip_used_ids():
    library = POSE_LIBRARY[("MALE", "closeup")]
    available = get_available_poses("MALE", "closeup", {library[0].id, library[2].id})
    assert [pose.id for pose in available] == [pose.id for pose in library if pose.id not in {library[0].id, library[2].id}]


def test_pose_prompt_mentions_frame_and_gender():
    pose = POSE_LIBRARY[("FEMALE", "closeup")][0]
    prompt = build_pose_prompt(pose, "FEMALE", "closeup")
    assert "CLOSE-UP" in prompt
    assert "FEMALE" in prompt
    assert pose.description in prompt


@pytest.mark.asyncio
@pytest.mark.parametrize("answer,expected", [("FEMALE", "FEMALE"), (" male\n", "MALE"), ("unsure", "FEMALE")])
async def test_detect_gender(genai_client, sdk, sample_data_url, answer, expected):
    sdk.aio.models.generate_content = AsyncMock(return_value=text_response(answer))
    assert await PoseService(genai_client).detect_gender(sample_data_url) == expected


@pytest.mark.asyncio
async def test_detect_gender_defaults_to_female_on_error(genai_client, sdk, sample_data_url):
    sdk.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("down"))
    assert await PoseService(genai_client).detect_gender(sample_data_url) == "FEMALE"


@pytest.mark.asyncio
async def test_pose_batch_marks_only_successful_poses_used(genai_client, sdk, sample_data_url):
    sdk.aio.models.generate_content = AsyncMock(
        side_effect=[image_response(b"a"), RuntimeError("fail"), image_response(b"c")]
    )
    progress = []
    library = POSE_LIBRARY[("MALE", "full")]

    results, used = await PoseService(genai_client).generate_pose_batch(
        sample_data_url, 3, "full", used_pose_ids={"previous"}, gender="MALE",
        on_progress=lambda current, total, result: progress.append((current, total)),
    )

    assert [r.pose_id for r in results] == [library[0].id, library[2].id]
    assert results[0].image_url == generated_url(b"a")
    assert used == {"previous", library[0].id, library[2].id}
    assert progress == [(1, 3), (3, 3)]
    assert sdk.aio.models.generate_content.call_args.kwargs["config"].image_config.aspect_ratio == "4:3"


@pytest.mark.asyncio
async def test_pose_batch_detects_gender_when_missing(genai_client, sdk, sample_data_url):
    sdk.aio.models.generate_content = AsyncMock(side_effect=[text_response("MALE"), image_response()])
    results, _ = await PoseService(genai_client).generate_pose_batch(sample_data_url, 1, "closeup")
    assert results[0].pose_id == POSE_LIBRARY[("MALE", "closeup")][0].id


@pytest.mark.asyncio
async def test_pose_batch_fails_when_library_exhausted(genai_client, sample_data_url):
    used = {pose.id for pose in POSE_LIBRARY[("FEMALE", "full")]}
    with pytest.raises(ValueError, match="No poses left"):
        await PoseService(genai_client).generate_pose_batch(
            sample_data_url, 2, "full", used_pose_ids=used, gender="FEMALE"
        )


@pytest.mark.asyncio
async def test_pose_batch_accepts_a_generator_of_used_ids(genai_client, sdk, sample_data_url):
    library = POSE_LIBRARY[("FEMALE", "full")]
    used = (pose.id for pose in library[:2])

    results, new_used = await PoseService(genai_client).generate_pose_batch(
        sample_data_url, 1, "full", used_pose_ids=used, gender="FEMALE"
    )

    assert results[0].pose_id == library[2].id
    assert new_used == {library[0].id, library[1].id, library[2].id}
