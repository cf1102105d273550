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
Product Enhancement Service - studio renders and recolors of product shots
"""

import logging
from typing import Callable, Dict, List, Optional

from google.genai import types

from .genai_client import GenAIClient
from .image_utils import InputImage

logger = logging.getLogger(__name__)

EFFECTS = (
    "beautify",
    "studio_minimal_prop",
    "studio_natural_floor",
    "studio_texture_emphasis",
    "studio_cinematic",
    "custom",
)

# Older clients still send "standard"
EFFECT_ALIASES = {"standard": "beautify"}

BEAUTIFY_POSES: Dict[str, str] = {
    "left_profile_single": "측면 (단일)",
    "left_diagonal_single": "45도 사선 (단일)",
    "front_apart_pair": "정면 (한 켤레)",
    "left_diagonal_pair": "45도 사선 (한 켤레)",
    "rear_pair": "후면 (한 켤레)",
    "top_down_instep_pair": "탑뷰 (한 켤레)",
}

SYSTEM_ROLE = """
**SYSTEM ROLE:** You are a "Technical 3D Product Visualization Engine" and "Master Retoucher".
**INPUT:** Raw reference photo of a shoe.
**OUTPUT:** A Photorealistic Commercial Asset (2K Resolution, Factory Fresh).

**[CRITICAL EXECUTION RULES]**
1.  **IDENTITY LOCK (Non-Negotiable):**
    *   The shoe's LOGO, STITCHING, LACE PATTERN, and DESIGN LINES must be a 100% PERFECT CLONE of the reference.
    *   DO NOT hallucinate new features.
2.  **QUANTITY & GEOMETRY:**
    *   "SINGLE" mode = Render EXACTLY ONE shoe. Crop out or erase any partial second shoe.
    *   "PAIR" mode = Render EXACTLY TWO shoes.
    *   **ALIGNMENT:** The object must be visually CENTERED (X=50%, Y=50%).
    *   **HORIZON:** The ground plane must be perfectly flat and horizontal.
3.  **SURFACE RE-SYNTHESIS (CGI MODE):**
    *   Treat the input as a "Geometry Reference Only".
    *   **DO NOT COPY PIXELS.** Re-render the surface to look "Factory Fresh".
    *   Remove all dust, wrinkles, glue marks, and scuffs.
    *   Fix lens distortion.
"""

POSE_LAYOUTS = {
    "left_profile_single": """
**[LAYOUT: SINGLE - LEFT PROFILE]**
*   **QUANTITY:** ONLY 1 SHOE (Left Foot). [NEGATIVE: Pair, Double, Mirror].
*   **ANGLE:** Perfect Side Profile (90 deg). Toe pointing Left.
*   **COMPOSITION:** Horizontal Canvas. Shoe fills 85% width. Dead Center.
""",
    "left_diagonal_single": """
**[LAYOUT: SINGLE - 3/4 ISOMETRIC]**
*   **QUANTITY:** ONLY 1 SHOE (Left Foot). [NEGATIVE: Pair, Second shoe].
*   **ANGLE:** 45-Degree Front-Left view. Best Angle.
*   **COMPOSITION:** Horizontal Canvas. Shoe fills 85% width. Dead Center.
""",
    "front_apart_pair": """
**[LAYOUT: PAIR - FRONT VIEW]**
*   **QUANTITY:** 2 SHOES (Left & Right).
*   **ARRANGEMENT:** Side-by-side. **GAP < 5% (Very Tight)**.
*   **ANGLE:** Direct Front view.
*   **COMPOSITION:** Horizontal Canvas. Pair fills 90% width.
""",
    "rear_pair": """
**[LAYOUT: PAIR - REAR VIEW]**
*   **QUANTITY:** 2 SHOES (Left & Right).
*   **ARRANGEMENT:** Side-by-side, heels aligned. **GAP < 5% (Very Tight)**.
*   **ANGLE:** Direct Rear view.
""",
    "top_down_instep_pair": """
**[LAYOUT: PAIR - HIGH ANGLE]**
*   **ANGLE:** 60-Degree Elevation (Looking down).
*   **CRITICAL:** Hide the deep insole/heel cup. Focus on Laces and Vamp.
*   **ARRANGEMENT:** **GAP < 5% (Very Tight)**.
""",
    "left_diagonal_pair": """
**[LAYOUT: PAIR - DIAGONAL VIEW]**
*   **QUANTITY:** 2 SHOES.
*   **ANGLE:** Both angled 45 degrees left.
*   **ARRANGEMENT:** One slightly forward. **GAP < 5% (Very Tight)**.
""",
}

DEFAULT_LAYOUT = "**LAYOUT:** Standard Commercial Center."

OUTPUT_IMAGE_ONLY = "**OUTPUT:** Generate an IMAGE. Do not output text."

STUDIO_BASE = f"""{SYSTEM_ROLE}
**[TASK: HIGH-END EDITORIAL CAMPAIGN]**
**FORMAT:** Horizontal Landscape (4:3).
**COMPOSITION:** Product fills 85% width. 5% Padding. Perfectly Centered.
"""

STUDIO_SCENES = {
    "studio_minimal_prop": """
**SCENE: "MODERN ARCHITECTURE"**
*   **Background:** Matte Off-White (#F0F0F0) wall, polished concrete floor.
*   **Prop:** Single geometric concrete cube or cylinder. Shoe leaning against it.
*   **Lighting:** Softbox Window Light (Top-Left). Soft, diffused shadows.
*   **Vibe:** Calm, museum-like, sophisticated.
""",
    "studio_natural_floor": """
**SCENE: "URBAN SUNLIGHT"**
*   **Background:** Rough textured pavement or bright concrete.
*   **Lighting:** Hard Sunlight (Direct Sun, 5500K). High contrast.
*   **Shadow:** Cast a "Gobo" shadow (Window frame or Plant leaf) across the floor.
*   **Vibe:** Energetic, organic, summer street.
""",
    "studio_texture_emphasis": """
**SCENE: "DARK MODE DETAIL"**
*   **Background:** Dark Charcoal Grey (#333333) seamless infinity wall.
*   **Lighting:** Low-angle "Raking Light". Grazes the surface to pop texture depth (suede/mesh).
*   **Vibe:** Masculine, technical, heavy, premium.
""",
    "studio_cinematic": """
**SCENE: "FUTURE RUNWAY"**
*   **Background:** Glossy wet black floor.
*   **Atmosphere:** Low-lying fog/mist/dry-ice.
*   **Action:** "Levitation" illusion (Shoe floating slightly above ground).
*   **Lighting:** Top-down "God Ray" spotlight. Rim lighting on edges.
""",
}

BEAUTIFY_RETOUCH = """
**[RETOUCHING & LIGHTING ENGINE]**
1.  **LIGHTING RESET:** Delete original lighting. Use **"Softbox Studio Strobe"**. Even illumination.
2.  **COLOR GRADING:**
    *   **White Balance:** FORCE NEUTRAL (5500K). Remove ALL yellow/orange indoor tints.
    *   **Blacks:** FORCE "JET BLACK" (#050505). Remove brown reflections.
    *   **Whites:** Crisp, clean white. No cream tint.
3.  **BACKGROUND:** PURE WHITE (#FFFFFF). No cast shadows (Floating).
"""

CUSTOM_COMPOSITE = """
**[TASK: COMPOSITE BLENDING]**
*   **Instruction:** Seamlessly integrate the shoe into the provided custom background.
*   **Match:** Perspective, Light direction, and Shadow casting.
*   **Output:** Photorealistic composite.
"""


def normalize_effect(effect: str) -> str:
    """Resolve aliases and reject unknown effects."""
    resolved = EFFECT_ALIASES.get(effect, effect)
    if resolved not in EFFECTS:
        raise ValueError(f"Unknown effect: {effect}")
    return resolved


def build_effect_prompt(effect: str, pose_id: Optional[str] = None) -> str:
    """
    Build the render prompt for an effect.

    Args:
        effect: One of EFFECTS (or an alias).
        pose_id: Beautify layout id; unknown or missing ids use the centred default.

    Returns:
        Prompt text.
    """
    effect = normalize_effect(effect)

    if effect == "beautify":
        layout = POSE_LAYOUTS.get(pose_id or "", DEFAULT_LAYOUT)
        return f"""{SYSTEM_ROLE}
**[TASK: ANTI-GRAVITY ISOLATION RENDER]**

{layout}
{BEAUTIFY_RETOUCH}
{OUTPUT_IMAGE_ONLY}
"""

    if effect in STUDIO_SCENES:
        return f"""{STUDIO_BASE}{STUDIO_SCENES[effect]}
{OUTPUT_IMAGE_ONLY}
"""

    return f"""{SYSTEM_ROLE}{CUSTOM_COMPOSITE}
{OUTPUT_IMAGE_ONLY}
"""


def build_color_change_prompt(color: Optional[str], use_reference: bool) -> str:
    if use_reference:
        color_instruction = "**Target Color:** Extract dominant color from the reference image."
    else:
        color_instruction = f"**Target Color:** HEX {color}."

    return f"""
**SYSTEM ROLE:** Expert Digital Retoucher.
**TASK:** Recolor the UPPER material only.
**CONSTRAINT:** Keep OUTSOLE and LOGO 100% UNTOUCHED.
**OUTPUT FORMAT:** Generate an IMAGE. Do not output text.

**EXECUTION:**
1.  **Masking:** Isolate 'Upper' material.
2.  **Color:** Apply {color_instruction}.
3.  **Realism:** Preserve stitching, grain, and highlights.
4.  **Lighting:** Blend naturally with existing light.
"""


class ProductEnhancementService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-2.0-flash-exp"):
        self.genai_client = genai_client
        self.model = model

    async def apply_effect(
        self,
        images: List[InputImage],
        effect: str,
        pose_id: Optional[str] = None,
        custom_background: Optional[InputImage] = None,
        on_progress: Optional[Callable[[str], None]] = None,
    ) -> str:
        """
        Render product photos with an effect preset.

        Args:
            images: Product photos of the same shoe.
            effect: Effect name.
            pose_id: Layout for the beautify effect.
            custom_background: Background for the custom effect, sent first.
            on_progress: Optional callback receiving progress messages.

        Returns:
            Data URL of the rendered image.
        """
        if not images:
            raise ValueError("At least one product image is required")
        effect = normalize_effect(effect)
        if effect == "custom" and custom_background is None:
            raise ValueError("The custom effect needs a background image")

        def progress(message: str):
            logger.info(message)
            if on_progress:
                on_progress(message)

        progress("Building prompt and scene")
        prompt = build_effect_prompt(effect, pose_id)

        parts = []
        if effect == "custom":
            parts.append(custom_background.to_part())
        parts.extend(image.to_part() for image in images)
        parts.append(types.Part.from_text(text=prompt))

        progress(f"Rendering {effect}" + (f" ({pose_id})" if pose_id else ""))
        url = await self.genai_client.generate_image(parts, model=self.model)
        progress("Done")
        return url

    async def apply_color_change(
        self,
        image: InputImage,
        color: Optional[str] = None,
        color_reference: Optional[InputImage] = None,
    ) -> str:
        """Recolor the upper to a hex colour or to the dominant colour of a reference."""
        if not color and color_reference is None:
            raise ValueError("Either a color or a color reference image is required")

        logger.info(f"Applying color change: {color or 'reference image'}")
        prompt = build_color_change_prompt(color, color_reference is not None)
        parts = [image.to_part(), types.Part.from_text(text=prompt)]
        if color_reference is not None:
            parts.append(color_reference.to_part())
        return await self.genai_client.generate_image(parts, model=self.model)
