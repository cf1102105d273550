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
Product Info Service - reads product copy and specs off product photos
"""

import json
import logging
from typing import Any, Dict, List, Optional

from google.genai import types

from ...detail_page.models import ProductDetailInfo
from .genai_client import GenAIClient, GenerationError, clean_json
from .image_utils import InputImage

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTION_PROMPT = """
럭셔리 브랜드 카피라이터 및 제품 분석가로서 제품 이미지를 분석하여 JSON으로 응답:
{
  "lineName": "라인명 (영문)",
  "productName": "제품명 (영문)",
  "intro": "스타일링 제안: 어떤 룩을 즐겨 입는 사람에게 추천하는지, 어떤 바지나 자켓과 매칭하면 좋은지 제안하는 문구 (한국어)",
  "style": "디자인 설명: 제품의 디자인 컨셉, 쉐입, 제작 방식, 디테일한 특징 (한국어)",
  "techLabel": "기술 라벨 (영문, 예: TECHNOLOGY)",
  "techTitle": "기술명 (영문, 예: CarbonLite)",
  "techDesc": "기술 설명: 소재나 기술의 기능적 장점 (한국어)",
  "color": "컬러 (한국어)",
  "upper": "갑피 소재 (한국어)",
  "lining": "안감 (한국어)",
  "sole": "밑창 (한국어)",
  "insole": "깔창 (한국어)",
  "outsoleHeightCm": "아웃솔 높이 (숫자만)",
  "insoleHeightCm": "인솔 높이 (숫자만)",
  "sizeSpec": "사이즈 범위 (예: 230-280mm)",
  "origin": "원산지 (한국어)",
  "careGuide": "사이즈 가이드: 사이즈 선택 팁 (한국어)",
  "estimatedWidth": "발볼 너비 (예: 10cm)",
  "estimatedLength": "총 길이 (예: 27cm)",
  "estimatedHeight": "총 높이 (예: 12cm)"
}
"""

MATERIAL_LEATHER = "천연가죽"
MATERIAL_SYNTHETIC = "합성피혁"
MATERIAL_OTHER = "기타"

LEATHER_KEYWORDS = ("가죽", "leather", "천연")
SYNTHETIC_KEYWORDS = ("합성", "인조", "pu", "synthetic")

# Technology block copy per material type
MATERIAL_TECH_COPY = {
    MATERIAL_LEATHER: (
        "PREMIUM LEATHER",
        "Natural Leather",
        "최고급 천연 가죽을 사용하여 통기성과 내구성이 뛰어납니다.",
    ),
    MATERIAL_SYNTHETIC: (
        "ADVANCED MATERIAL",
        "Synthetic Premium",
        "고급 합성 소재로 가볍고 관리가 용이합니다.",
    ),
}


def detect_material_type(raw: Dict[str, Any]) -> str:
    """Classify the upper, lining and sole text as leather, synthetic or other."""
    material_text = "".join(str(raw.get(key) or "") for key in ("upper", "lining", "sole")).lower()
    if any(keyword in material_text for keyword in LEATHER_KEYWORDS):
        return MATERIAL_LEATHER
    if any(keyword in material_text for keyword in SYNTHETIC_KEYWORDS):
        return MATERIAL_SYNTHETIC
    return MATERIAL_OTHER


def _text(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_text(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return None if value is None else str(value)


def to_detail_info(raw: Dict[str, Any]) -> ProductDetailInfo:
    """
    Map an extraction result onto the detail page fields.

    The technology block follows the detected material type; "other" keeps
    the synthetic copy, matching what the listing editors expect.
    """
    material_type = detect_material_type(raw)
    tech_label, tech_title, tech_desc = MATERIAL_TECH_COPY.get(
        material_type, MATERIAL_TECH_COPY[MATERIAL_SYNTHETIC]
    )
    return ProductDetailInfo(
        line_name=_text(raw, "lineName"),
        product_name=_text(raw, "productName"),
        color=_text(raw, "color"),
        upper_material=_text(raw, "upper"),
        lining_material=_text(raw, "lining"),
        sole_material=_text(raw, "sole"),
        insole_material=_text(raw, "insole"),
        outsole_height=_text(raw, "outsoleHeightCm"),
        insole_height=_text(raw, "insoleHeightCm"),
        size_spec=_text(raw, "sizeSpec"),
        origin=_text(raw, "origin"),
        intro=_text(raw, "intro"),
        style=_text(raw, "style"),
        tech=_text(raw, "tech"),
        tech_label=tech_label,
        tech_title=tech_title,
        tech_desc=tech_desc,
        care_guide=_optional_text(raw, "careGuide"),
        estimated_width=_optional_text(raw, "estimatedWidth"),
        estimated_length=_optional_text(raw, "estimatedLength"),
        estimated_height=_optional_text(raw, "estimatedHeight"),
    )


class ProductInfoService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-2.0-flash-exp"):
        self.genai_client = genai_client
        self.model = model

    async def extract_product_info(
        self, images: List[InputImage], prompt: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Analyze product images and return the structured product description.

        Args:
            images: Product photos.
            prompt: Optional extraction prompt; defaults to the analyst prompt.

        Returns:
            Parsed JSON object from the model.

        Raises:
            ValueError: if no images are given.
            GenerationError: if the model answers with nothing.
        """
        if not images:
            raise ValueError("At least one product image is required")

        logger.info(f"Extracting product info from {len(images)} images")
        parts = [image.to_part() for image in images]
        parts.append(types.Part.from_text(text=prompt or DEFAULT_EXTRACTION_PROMPT))

        raw_text = await self.genai_client.generate_text(parts, model=self.model)
        if not raw_text or not raw_text.strip():
            raise GenerationError("AI 응답이 비어있습니다.")

        try:
            parsed = json.loads(clean_json(raw_text))
        except json.JSONDecodeError:
            logger.warning(f"Failed to parse response as JSON: {raw_text[:500]}")
            raise GenerationError(f"Failed to parse product info: {raw_text[:100]}")

        if not isinstance(parsed, dict):
            raise GenerationError("Product info response is not a JSON object")

        logger.info(f"Extracted product info for: {parsed.get('productName', 'unknown')}")
        return parsed

    async def extract_detail_info(
        self, images: List[InputImage], prompt: Optional[str] = None
    ) -> ProductDetailInfo:
        raw = await self.extract_product_info(images, prompt)
        return to_detail_info(raw)
