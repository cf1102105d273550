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
Pose Service - re-poses a model photo while keeping face, outfit, shoes and set
"""

import logging
from typing import Callable, Iterable, List, Literal, Optional, Set, Tuple

from google.genai import types
from pydantic import BaseModel

from .genai_client import GenAIClient
from .image_utils import image_part
from .pose_library import POSE_LIBRARY, Pose

logger = logging.getLogger(__name__)

Gender = Literal["MALE", "FEMALE"]
ShotType = Literal["full", "closeup"]

GENDER_DETECTION_PROMPT = """Analyze this image and determine if the fashion model is MALE or FEMALE.
Look at the body shape, clothing style, and overall appearance.
Respond with ONLY one word: "MALE" or "FEMALE"."""


class PoseGenerationResult(BaseModel):
    image_url: str
    pose_id: str
    pose_description: str


def get_available_poses(gender: Gender, shot_type: ShotType, used_pose_ids: Iterable[str] = ()) -> List[Pose]:
    """Poses of the given library that have not been used yet, in library order."""
    used = set(used_pose_ids)
    library = POSE_LIBRARY[(gender, shot_type)]
    return [pose for pose in library if pose.id not in used]


def build_pose_prompt(pose: Pose, gender: Gender, shot_type: ShotType) -> str:
    if shot_type == "closeup":
        frame_note = (
            "[FRAME] This is a CLOSE-UP shot focusing on the lower body (waist down to feet). "
            "Emphasize ankle articulation and ground interaction."
        )
    else:
        frame_note = "[FRAME] This is a FULL-BODY shot. Show the entire figure from head to toe."

    if gender == "FEMALE":
        gender_note = "Model is FEMALE. Maintain feminine proportions and body language."
    else:
        gender_note = "Model is MALE. Emphasize wide stance and grounded weight distribution."

    return f"""
[TASK: FASHION MODEL POSE VARIATION]
Input: A photo of a fashion model wearing specific clothing and shoes.

[CRITICAL RULES - MUST FOLLOW EXACTLY]
1. **IDENTITY LOCK**: Keep the model's FACE 100% IDENTICAL. Same facial features, expression quality.
2. **OUTFIT LOCK**: Keep ALL CLOTHING EXACTLY THE SAME - pants/bottoms fit, color, texture, wrinkles pattern.
3. **SHOES LOCK**: Keep the SHOES 100% IDENTICAL - model, color, condition, lacing style.
4. **BACKGROUND LOCK**: Keep the BACKGROUND 100% IDENTICAL - same studio/location, lighting, color.
5. **ONLY CHANGE POSE**: Apply the new pose described below while preserving everything else.

{frame_note}

{gender_note}

[NEW POSE TO APPLY]
{pose.description}

[STYLE]
- High-end fashion photography
- Professional studio lighting
- 8K resolution, photorealistic
- Magazine quality editorial shot

[AVOID]
- Changing the model's face identity
- Changing clothing style, fit, or color
- Changing shoe appearance
- Changing background
- Adding or removing accessories
- Blurry or distorted output
"""


class PoseService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-3-pro-image-preview"):
        self.genai_client = genai_client
        self.model = model

    async def detect_gender(self, image: str) -> Gender:
        """Ask the model whether the photo shows a male or female model. Defaults to FEMALE."""
        try:
            text = await self.genai_client.generate_text(
                [image_part(image, "image/jpeg"), types.Part.from_text(text=GENDER_DETECTION_PROMPT)],
                model=self.model,
                max_output_tokens=16,
            )
        except Exception as e:
            logger.error(f"Gender detection failed: {str(e)}")
            return "FEMALE"

        answer = (text or "").strip().upper()
        logger.info(f"Gender detection result: {answer}")
        # FEMALE contains MALE, so it is checked first
        if "FEMALE" in answer:
            return "FEMALE"
        if "MALE" in answer:
            return "MALE"
        return "FEMALE"

    async def generate_pose_variation(
        self, image: str, pose: Pose, gender: Gender, shot_type: ShotType
    ) -> PoseGenerationResult:
        logger.info(f"Generating pose variation: {pose.id}")
        url = await self.genai_client.generate_image(
            [image_part(image, "image/jpeg"), types.Part.from_text(text=build_pose_prompt(pose, gender, shot_type))],
            model=self.model,
            aspect_ratio="3:4" if shot_type == "closeup" else "4:3",
            image_size="1K",
        )
        return PoseGenerationResult(image_url=url, pose_id=pose.id, pose_description=pose.description)

    async def generate_pose_batch(
        self,
        image: str,
        count: int,
        shot_type: ShotType,
        used_pose_ids: Iterable[str] = (),
        gender: Optional[Gender] = None,
        on_progress: Optional[Callable[[int, int, PoseGenerationResult], None]] = None,
    ) -> Tuple[List[PoseGenerationResult], Set[str]]:
        """
        Generate up to `count` new poses of the same model, one at a time.

        Args:
            image: Base model photo.
            count: Number of poses wanted.
            shot_type: "full" or "closeup".
            used_pose_ids: Pose ids already generated for this model.
            gender: Skip detection when the caller already knows it.
            on_progress: Called with (current, total, result) after each success.

        Returns:
            (results, new_used_pose_ids). Only successful poses are marked used.

        Raises:
            ValueError: if every pose of the library is already used.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        if gender is None:
            gender = await self.detect_gender(image)
        logger.info(f"Starting batch pose generation: {count} images, type: {shot_type}, gender: {gender}")

        used = set(used_pose_ids)
        available = get_available_poses(gender, shot_type, used)
        if not available:
            raise ValueError(f"No poses left: every {gender} {shot_type} pose has already been used")

        selected = available[:count]
        results = []
        new_used_pose_ids = set(used)

        for i, pose in enumerate(selected):
            try:
                result = await self.generate_pose_variation(image, pose, gender, shot_type)
            except Exception as e:
                logger.error(f"Failed to generate pose {pose.id}: {str(e)}")
                continue
            results.append(result)
            new_used_pose_ids.add(pose.id)
            if on_progress:
                on_progress(i + 1, len(selected), result)

        logger.info(f"Batch complete: {len(results)}/{len(selected)} successful")
        return results, new_used_pose_ids
