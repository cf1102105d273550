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
Lookbook Service - model candidates and lookbook shots built around one face
"""

import logging
from typing import Callable, List, Literal, Optional

from google.genai import types
from pydantic import BaseModel

from .genai_client import GenAIClient
from .image_utils import InputImage, image_part

logger = logging.getLogger(__name__)

ModelGender = Literal["w", "m"]

MODEL_AGES = [str(age) for age in range(18, 41)]
MODEL_ETHNICITIES = ["Korean", "East Asian", "White", "Black", "Hispanic/Latino", "Middle Eastern", "Mixed race"]

MAX_PRODUCT_IMAGES = 4

CANDIDATE_POSES = [
    "Standing straight, confident pose, fashion model stance",
    "Walking forward, mid-stride, dynamic movement",
    "Leaning against wall, casual relaxed pose",
    "Seated position, legs crossed, elegant posture",
    "Side profile, head slightly turned, professional model pose",
]

FULL_BODY_POSES = {
    "m": [
        "[POSE] Mid-stride walk towards camera. [HANDS] Right hand raised to upper chest level, Left hand in pant pocket.",
        "[POSE] Standing still, angled 45-degrees. [HANDS] Left hand raised touching the chin/jawline.",
        "[POSE] Seated position, one leg extended. [HANDS] Leaning back, both hands behind supporting body.",
    ],
    "w": [
        "[POSE] Standing at a slight 3/4 angle. [HANDS] Both hands loosely clasped together in front of thighs.",
        "[POSE] Standing facing forward, weight shifted to one hip. [HANDS] Left hand raised, fingers running through hair.",
        "[POSE] Mid-walk with one leg forward. [HANDS] Arms naturally swinging.",
    ],
}

DETAIL_POSES = {
    "m": [
        "[FRAME] Knee-down shot. Close-up of shoes and lower legs.",
        "[FRAME] Low-angle ground shot. Focus on footwear from below.",
        "[FRAME] Side profile shot. Detail of shoe design from side angle.",
    ],
    "w": [
        "[FRAME] Dynamic side stride close-up. Capture movement and shoe detail.",
        "[FRAME] Top-down view. Overhead shot showing shoe design.",
        "[FRAME] Seated detail. Close-up of crossed legs and shoes.",
    ],
}

FILM_FILTER = "[FILTER: FILM LOOK] Analog Film Photography, Grain, Vintage aesthetic."
DIGITAL_FILTER = "[FILTER: DIGITAL CLEAN] Ultra-sharp 8K digital quality."


class LookbookImage(BaseModel):
    url: str
    type: Literal["model", "detail"]
    index: int
    prompt: str


def build_candidate_prompt(gender: str, age: str, ethnicity: str, pose: str) -> str:
    gender_term = "FEMALE" if gender == "w" else "MALE"
    return f"""
[TASK: GENERATE MODEL WITH SPECIFIC IDENTITY]
INPUT: Face identity reference image.
GOAL: Generate a full-body fashion model photo with this exact face identity.

[STRICT RULES]
1. IDENTITY LOCK: The face must look exactly like the input face.
2. BODY: Full body {gender_term} model, {age} years old, {ethnicity} features.
3. OUTFIT: Modern casual streetwear or minimal fashion clothing.
4. POSE: {pose}
5. BACKGROUND: Clean studio background, minimal setting.
6. QUALITY: Professional fashion photography, 8K quality.
7. ASPECT RATIO: Vertical portrait (3:4).
"""


def build_lookbook_base_prompt(use_filter: bool) -> str:
    filter_prompt = FILM_FILTER if use_filter else DIGITAL_FILTER
    return f"""
[TASK: FASHION LOOKBOOK PRODUCTION]
Input 1: SELECTED MODEL. Input 2-5: PRODUCT SHOE IMAGES.
RULES:
1. IGNORE THE POSE OF INPUT 1: Create NEW GEOMETRY based on pose instruction.
2. KEEP ATTRIBUTES ONLY: Use Input 1 as reference for Face, Outfit style, overall vibe.
3. PRODUCT IDENTITY LOCK: The generated shoe MUST be identical to input product images.
4. NO SPLIT SCREEN. 9:16 portrait ratio.
{filter_prompt}
"""


def build_lookbook_shots(gender: str, use_filter: bool) -> List[tuple]:
    """Return (type, index, prompt) for the three full-body then three detail shots."""
    key = "w" if gender == "w" else "m"
    base = build_lookbook_base_prompt(use_filter)
    shots = []
    for i, pose in enumerate(FULL_BODY_POSES[key]):
        shots.append(("model", i, f"{base}\n\n[SHOT {i + 1}] FULL-BODY. POSE: {pose}"))
    for i, pose in enumerate(DETAIL_POSES[key]):
        shots.append(("detail", i, f"{base}\n\n[SHOT {i + 4}] DETAIL KNEE-DOWN. POSE: {pose}"))
    return shots


class LookbookService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-3-pro-image-preview"):
        self.genai_client = genai_client
        self.model = model

    async def generate_candidates(
        self,
        gender: ModelGender,
        age: str,
        ethnicity: str,
        face_image: str,
        on_progress: Optional[Callable[[str], None]] = None,
    ) -> List[str]:
        """
        Generate full-body model candidates that keep the given face.

        Calls run one after another; a failed pose is logged and skipped.

        Args:
            gender: "w" or "m".
            age: Model age.
            ethnicity: Ethnicity description.
            face_image: Face reference as data URL, base64 or URL.
            on_progress: Optional callback receiving progress messages.

        Returns:
            Data URLs of the candidates that succeeded.
        """
        face = image_part(face_image)
        candidates = []

        for i, pose in enumerate(CANDIDATE_POSES):
            if on_progress:
                on_progress(f"Generating candidate {i + 1}/{len(CANDIDATE_POSES)}")
            try:
                prompt = build_candidate_prompt(gender, age, ethnicity, pose)
                url = await self.genai_client.generate_image(
                    [face, types.Part.from_text(text=prompt)],
                    model=self.model,
                    aspect_ratio="3:4",
                    image_size="1K",
                )
                candidates.append(url)
            except Exception as e:
                logger.error(f"Candidate {i} generation error: {str(e)}")

        logger.info(f"Generated {len(candidates)}/{len(CANDIDATE_POSES)} candidates")
        return candidates

    async def generate_lookbook(
        self,
        candidate_image: str,
        product_images: List[InputImage],
        bg_image: Optional[InputImage] = None,
        gender: ModelGender = "w",
        use_filter: bool = False,
        on_progress: Optional[Callable[[str], None]] = None,
    ) -> List[LookbookImage]:
        """
        Produce three full-body and three knee-down detail shots.

        Each call receives the candidate, up to four product images and the
        optional background. Shots are tagged at generation time, so a failed
        shot never shifts the type of the ones after it.

        Returns:
            Successful shots in shot order.
        """
        if not product_images:
            raise ValueError("At least one product image is required")

        parts = [image_part(candidate_image)]
        parts.extend(image.to_part() for image in product_images[:MAX_PRODUCT_IMAGES])
        if bg_image is not None:
            parts.append(bg_image.to_part())

        shots = build_lookbook_shots(gender, use_filter)
        images = []
        for shot_number, (shot_type, index, prompt) in enumerate(shots, start=1):
            if on_progress:
                on_progress(f"Generating lookbook shot {shot_number}/{len(shots)} ({shot_type})")
            try:
                url = await self.genai_client.generate_image(
                    parts + [types.Part.from_text(text=prompt)],
                    model=self.model,
                    aspect_ratio="9:16",
                    image_size="2K",
                )
                images.append(LookbookImage(url=url, type=shot_type, index=index, prompt=prompt))
            except Exception as e:
                logger.error(f"Lookbook {shot_type} shot {index} error: {str(e)}")

        logger.info(f"Lookbook complete: {len(images)}/{len(shots)} shots")
        return images
