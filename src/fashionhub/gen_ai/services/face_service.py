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
Face Service - generates model face candidates for the lookbook flow
"""

import asyncio
import logging
import re
from typing import List

from google.genai import types

from .genai_client import GenAIClient
from .image_utils import image_part

logger = logging.getLogger(__name__)

RACE_MAPPING = {
    "한국인": "Korean",
    "코리안": "Korean",
    "동아시아인": "East Asian",
    "아시아인": "East Asian",
    "백인": "White",
    "흑인": "Black",
    "히스패닉": "Hispanic/Latino",
    "중동인": "Middle Eastern",
    "혼혈": "Mixed race",
}

HAIR_STYLES = {
    "male": [
        "buzz cut",
        "messy textured hair",
        "slicked back hair",
        "modern mullet/fade",
        "grown out waves",
    ],
    "female": [
        "long straight sleek hair",
        "messy chic bob cut",
        "voluminous wavy hair",
        "tight bun with loose strands",
        "layered cut with texture",
    ],
}

STUDIO_BACKGROUNDS = [
    "Solid pure white studio backdrop",
    "Dark grey textured canvas background",
    "Soft beige seamless paper background",
    "Cool light blue studio background",
    "Warm cream colored studio wall",
]

VIBE_KEYWORDS = {
    "female": "trendy, hip, cool girl aesthetic, street casting model, charismatic, edgy, chic, non-traditional beauty",
    "male": "cool, edgy, streetwear vibe, raw masculinity, intense gaze, modern model, distinctive features",
}

TEXTURE_KEYWORDS = (
    "hyper-realistic skin texture, visible pores, peach fuzz on face, slight skin imperfections, "
    "natural eyebrows, unretouched, raw photograph, film grain, Kodak Portra 400"
)


def normalize_gender(gender: str) -> str:
    """Accept "male"/"female" as well as the lookbook codes "m"/"w"."""
    return "male" if gender.lower() in ("male", "m", "man") else "female"


def map_race(race: str) -> str:
    """Translate Korean race labels; anything else is passed through."""
    if not race:
        return "Korean"
    return RACE_MAPPING.get(race.strip(), race.strip())


_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def age_skin_details(age: str) -> str:
    match = _LEADING_INTEGER.match(str(age))
    if not match:
        return "Realistic skin texture for their age range, visible pores, very light imperfections, no beauty filter."

    numeric_age = int(match.group(1))
    if numeric_age <= 25:
        return "Youthful but textured skin, visible pores, peach fuzz, natural skin unevenness, unretouched, slight imperfections."
    if numeric_age <= 40:
        return "Authentic skin texture, micropores, very faint fine lines, natural skin tone variation, not overly smoothed."
    return "Visible signs of aging, dignified wrinkles, fine lines around eyes and mouth, sunspots."


def build_face_prompt(gender: str, race: str, age: str, index: int) -> str:
    gender_term = normalize_gender(gender)
    hair_styles = HAIR_STYLES[gender_term]
    hair_style = hair_styles[index % len(hair_styles)]
    background = STUDIO_BACKGROUNDS[index % len(STUDIO_BACKGROUNDS)]

    return f"""
[1. SUBJECT]: Extreme close-up portrait of a {age}-year-old {map_race(race)} {gender_term}.
- VIBE: {VIBE_KEYWORDS[gender_term]}.
- REALISM: {TEXTURE_KEYWORDS}. NOT AI-looking, NOT plastic smooth.
- APPEARANCE: Authentic. Slight natural asymmetry allowed.
- CROP: NECK UP ONLY. FOCUS ON FACE FEATURES.
- NO CLOTHES: Bare skin/shoulders only.
- HAIR: {hair_style}.
- DETAILS: {age_skin_details(age)}
[2. BACKGROUND]: {background}. Simple, solid color.
[3. STYLE]: Hip magazine photography, 35mm film style.
- LIGHTING: Direct flash or hard studio lighting.
- COLOR: FULL COLOR ONLY. Vibrant. NO B&W.
"""


UPSCALE_PROMPT = """
[TASK: HIGH-RESOLUTION FACE RESTORATION]
Input: A portrait photo.
1. IDENTITY LOCK: Keep the face 100% identical. Same features, proportions and expression.
2. DETAIL: Increase resolution and recover natural skin texture, pores and hair strands.
3. NO BEAUTIFICATION: Do not smooth skin or change makeup.
4. BACKGROUND: Keep the background and lighting unchanged.
OUTPUT: Generate an IMAGE. Do not output text.
"""


class FaceService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-3-pro-image-preview"):
        self.genai_client = genai_client
        self.model = model

    async def _generate_face(self, gender: str, race: str, age: str, index: int) -> str:
        prompt = build_face_prompt(gender, race, age, index)
        return await self.genai_client.generate_image(
            [types.Part.from_text(text=prompt)],
            model=self.model,
            aspect_ratio="1:1",
            image_size="1K",
        )

    async def generate_face_batch(
        self, gender: str, race: str, age: str, count: int = 5
    ) -> List[str]:
        """
        Generate `count` face portraits concurrently.

        Args:
            gender: "male"/"female" (or "m"/"w").
            race: Race label, Korean labels are translated.
            age: Age as a string.
            count: Number of concurrent generations.

        Returns:
            Data URLs of the faces that succeeded, in request order.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        logger.info(f"Generating {count} faces: {gender}, {race}, {age}")
        results = await asyncio.gather(
            *(self._generate_face(gender, race, age, idx) for idx in range(count)),
            return_exceptions=True,
        )

        faces = []
        for idx, result in enumerate(results):
            if isinstance(result, BaseException):
                logger.error(f"Face {idx} generation error: {str(result)}")
                continue
            faces.append(result)

        logger.info(f"Generated {len(faces)}/{count} faces")
        return faces

    async def upscale_face(self, face_image: str) -> str:
        """Re-render a chosen face at higher detail without changing identity."""
        logger.info("Upscaling face")
        parts = [image_part(face_image), types.Part.from_text(text=UPSCALE_PROMPT)]
        return await self.genai_client.generate_image(
            parts, model=self.model, aspect_ratio="1:1", image_size="2K"
        )
