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
Shoe Replacement Service - swaps the shoes in model shots for the product
"""

import logging
from typing import Callable, List, Optional

from google.genai import types
from pydantic import BaseModel

from .genai_client import GenAIClient
from .image_utils import image_part, load_image, pad_to_square

logger = logging.getLogger(__name__)

CANVAS_SIZE = 1400
MAX_REFERENCE_IMAGES = 2

VFX_PROMPT = """
[ROLE] Senior 3D Material Artist & VFX Compositor
[TASK] Hyper-Realistic Shoe Replacement with Outpainting

[INPUTS]
- Image 1: TARGET SCENE (Model). Contains BLACK BARS (Void) for Outpainting.
- Image 2+: MASTER PRODUCT (Shoe Reference).

[PHASE 1: MACRO TEXTURE INSPECTION]
1. **LEATHER DNA**: Identify hide type (Full-grain, Suede, Mesh, Canvas).
2. **PORE MAPPING**: Extract pore density and replicate uneven pebble grain exactly.
3. **IMPERFECTIONS**: Capture micro-creases. DO NOT make it look synthetic.
4. **COLOR MATCH**: Extract exact hex codes from the product reference.

[PHASE 2: 3D GEOMETRY LOCK]
1. **EXACT SHAPE MATCH**: The silhouette of the shoe in Image 1 MUST change to match the reference.
2. **OUTSOLE GEOMETRY**: Replicate the tread pattern and midsole stack height.
3. **TOE BOX**: Match the exact roundness/pointedness.
4. **WARPING**: If the product is chunky, warp the model's foot to match.

[PHASE 3: PHOTOREALISTIC COMPOSITING]
1. **STITCHING**: Every thread count must be visible.
2. **LACES**: Replicate the weave pattern of the laces.
3. **LIGHTING**: Apply Scene 1's lighting to the new shoe texture.
4. **SHADOWS**: Maintain consistent shadow direction.

[PHASE 4: SCENE RECONSTRUCTION (OUTPAINTING)]
1. **FILL THE VOID**: The Input Image 1 has BLACK BARS. Treat them as "missing camera view".
2. **EXTEND ENVIRONMENT**: Generate realistic floor and walls to fill the black areas.
3. **SHADOWS**: Cast directional shadows from the model onto the new floor areas.

[STRICT CONSTRAINTS]
- **NO SMOOTHING**: Output must look like a RAW photograph.
- **KEEP MODEL BODY**: Only replace the shoes, keep everything else intact.
- **OUTPUT**: 1:1 Square Image. NO BLACK BARS remaining.
"""

REPLACEMENT_INSTRUCTION = (
    "Perform 3D Geometry Shoe Replacement and Background Extension. "
    "Replace the shoes in Image 1 with the product shoes from the reference images."
)

CLOTHING_LABELS = {
    "outer": "Outerwear/Coat",
    "inner": "Inner Top/Shirt",
    "pants": "Pants/Trousers",
    "socks": "Socks",
}


class ColorSettings(BaseModel):
    outer: Optional[str] = None
    inner: Optional[str] = None
    pants: Optional[str] = None
    socks: Optional[str] = None


class ReplacementResult(BaseModel):
    url: str
    result: Optional[str] = None
    error: Optional[str] = None


def build_campaign_prompt(color_settings: Optional[ColorSettings] = None) -> str:
    clothing_instructions = ""
    if color_settings:
        for field, label in CLOTHING_LABELS.items():
            value = getattr(color_settings, field)
            if value:
                clothing_instructions += f"- Change the {label} color to {value}.\n"

    clothing_block = f"[ADDITIONAL CLOTHING EDITS]\n{clothing_instructions}" if clothing_instructions else ""

    return f"""
[TASK] High-Fidelity Commercial Product Photography (Virtual Try-On)
[MODE] 3D-Like Photorealistic Rendering & Precision Texture Mapping & Outpainting

[CRITICAL: OUTPAINTING / BACKGROUND EXTENSION]
The input image is padded to a 1:1 Square aspect ratio with solid black bars.
**YOU MUST GENERATE REALISTIC BACKGROUND CONTENT** to fill these black areas.
- Extend the floor/ground texture naturally.
- Extend the background wall/environment naturally.
- The final output must be a seamless 1:1 square image with NO visible padding bars.

[INPUT ANALYSIS - SHOES]
Reference Product (Images 2+):
- **Material Physics**: Analyze leather shine, suede matte, mesh transparency.
- **Pattern & Micro-Details**: Capture stitching count, perforation holes, lace texture.
- **Outsole 3D Geometry**: Analyze tread pattern and midsole stack height.

[EXECUTION STEPS]
1. **Shoe Replacement**: Replace model's shoes with Reference Product.
2. **3D Texture Baking**: "Bake" reference textures onto the feet. Look like a 3D render.
3. **Lighting Match**: Match ambient occlusion (shadows) perfectly.
4. **Color Fidelity**: Keep shoe color identical to Reference Product.

{clothing_block}

[STRICT CONSTRAINTS]
- **NO HALLUCINATIONS**: Do not invent details on the SHOES.
- **PRESERVE IDENTITY**: Model's face/skin MUST remain pixel-perfect.
"""


def build_pose_change_prompt(pose_prompt: str) -> str:
    return f"""
[TASK] Precise Local Editing (Inpainting)
[INPUT] Source Image
[INSTRUCTION]
Modify ONLY the position of the model's legs and feet to match this pose: "{pose_prompt}".

[CRITICAL RULES]
1. **BACKGROUND PRESERVATION**: The background, floor, wall, and lighting environment must remain 100% UNCHANGED.
2. **IDENTITY PRESERVATION**: Do not change the model's face, hair, torso, or arms.
3. **SCOPE**: Apply changes strictly to the lower body (legs/shoes) only.
4. **REALISM**: The new leg position must look natural in the *original* space.
"""


class ShoeReplacementService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-2.0-flash-exp"):
        self.genai_client = genai_client
        self.model = model

    def _padded_source_part(self, source_image: str) -> types.Part:
        data, _ = load_image(source_image)
        return types.Part.from_bytes(data=pad_to_square(data, CANVAS_SIZE), mime_type="image/jpeg")

    async def replace_shoes(self, source_image: str, product_images: List[str], pad: bool = True) -> str:
        """
        Replace the shoes worn in a model shot with the product.

        Args:
            source_image: Model shot (data URL, base64 or URL).
            product_images: Product references; only the first two are sent.
            pad: Letterbox the source onto a black square first so the model outpaints.

        Returns:
            Data URL of the edited image.
        """
        if not product_images:
            raise ValueError("At least one product image is required")

        source_part = self._padded_source_part(source_image) if pad else image_part(source_image, "image/jpeg")
        parts = [types.Part.from_text(text=REPLACEMENT_INSTRUCTION), source_part]
        parts.extend(image_part(ref, "image/jpeg") for ref in product_images[:MAX_REFERENCE_IMAGES])
        parts.append(types.Part.from_text(text=VFX_PROMPT))

        logger.info(f"Replacing shoes with {min(len(product_images), MAX_REFERENCE_IMAGES)} reference images")
        return await self.genai_client.generate_image(parts, model=self.model)

    async def batch_replace(
        self,
        source_images: List[str],
        product_image: str,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> List[ReplacementResult]:
        """Replace shoes in several shots one by one. Errors are reported per image."""
        results = []
        for i, source in enumerate(source_images):
            if on_progress:
                on_progress(i + 1, len(source_images))
            try:
                edited = await self.replace_shoes(source, [product_image])
                results.append(ReplacementResult(url=source, result=edited))
            except Exception as e:
                logger.error(f"Shoe replacement failed for image {i + 1}: {str(e)}")
                results.append(ReplacementResult(url=source, error=str(e)))
        return results

    async def generate_campaign_image(
        self,
        source_image: str,
        product_images: List[str],
        color_settings: Optional[ColorSettings] = None,
    ) -> str:
        """Virtual try-on with outpainting and optional clothing colour edits."""
        if not product_images:
            raise ValueError("At least one product image is required")

        parts = [
            types.Part.from_text(text="Edit the image based on references. Output 1:1 square."),
            self._padded_source_part(source_image),
        ]
        parts.extend(image_part(ref, "image/jpeg") for ref in product_images)
        parts.append(types.Part.from_text(text=build_campaign_prompt(color_settings)))

        logger.info(f"Generating campaign image with {len(product_images)} product images")
        return await self.genai_client.generate_image(parts, model=self.model)

    async def change_pose(self, source_image: str, pose_prompt: str) -> str:
        """Move only the legs and feet to a new pose, leaving the rest of the frame."""
        if not pose_prompt or not pose_prompt.strip():
            raise ValueError("A pose description is required")

        parts = [image_part(source_image), types.Part.from_text(text=build_pose_change_prompt(pose_prompt))]
        return await self.genai_client.generate_image(parts, model=self.model, aspect_ratio="3:4")
