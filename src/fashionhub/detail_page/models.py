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
Data models for detail page assembly
"""

import uuid
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


TextAlign = Literal["left", "center", "right"]


class SectionType(str, Enum):
    TITLE = "title"
    INTRO = "intro"
    TECHNOLOGY = "technology"
    HEIGHT = "height"
    PRODUCT_INFO = "product-info"
    SIZE_CHECK = "size-check"
    PRODUCT_CUTS = "product-cuts"
    MODEL_FOOT = "model-foot"
    MODEL_CUTS = "model-cuts"
    DETAIL_CUTS = "detail-cuts"
    CUSTOM_TEXT = "custom-text"


def new_id() -> str:
    return uuid.uuid4().hex[:9]


class DetailModel(BaseModel):
    """Reads the camelCase keys of the web client as well as the field names."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Section(DetailModel):
    id: str = Field(default_factory=new_id)
    type: SectionType
    title: str
    enabled: bool = True
    icon: str = ""
    content: Optional[str] = None
    text_align: Optional[TextAlign] = None


class ProductDetailInfo(DetailModel):
    """Copy and specs shown on the detail page. Heights are centimetre strings."""

    line_name: str = ""
    product_name: str = ""
    color: str = ""
    upper_material: str = ""
    lining_material: str = ""
    sole_material: str = ""
    insole_material: str = ""
    outsole_height: str = ""
    insole_height: str = ""
    size_spec: str = ""
    origin: str = ""
    intro: str = ""
    style: str = ""
    tech: str = ""
    tech_label: Optional[str] = None
    tech_title: Optional[str] = None
    tech_desc: Optional[str] = None
    care_guide: Optional[str] = None
    estimated_width: Optional[str] = None
    estimated_length: Optional[str] = None
    estimated_height: Optional[str] = None


class ProcessedImage(DetailModel):
    processed: str = Field(..., description="URL or data URL of the finished image")
    original: Optional[str] = None


class ImagePosition(DetailModel):
    x: float = 0
    y: float = 0


class PreviewItem(DetailModel):
    id: str = Field(default_factory=new_id)
    type: Literal["section", "image"]
    section_type: Optional[SectionType] = None
    title: Optional[str] = None
    content: str = ""
    image_url: Optional[str] = None
    height: Optional[int] = Field(None, description="Container height in px")
    image_scale: Optional[float] = Field(None, description="1 = 100%")
    image_position: Optional[ImagePosition] = None
    text_align: Optional[TextAlign] = None
    font_size: Optional[int] = Field(None, description="Text scale in percent, 100 = unchanged", ge=10)
    font_family: Optional[str] = None
