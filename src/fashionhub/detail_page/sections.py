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
Section HTML generators for the product detail page.

Every generator returns an inline-styled HTML fragment so the exported page
renders the same inside marketplace editors that strip <style> blocks.
"""

import html
import logging
import re
from typing import Callable, Dict, List, Optional, Sequence

from .models import ProcessedImage, ProductDetailInfo, Section, SectionType

logger = logging.getLogger(__name__)

DEFAULT_TECH_LABEL = "TECHNOLOGY"
DEFAULT_TECH_TITLE = "CarbonLite"
DEFAULT_TECH_DESC = "과한 반발력은 줄이고, 하루종일 편안한 착화를 위한 COA만의 카본 구조입니다."
DEFAULT_TOTAL_HEIGHT = "5.5"

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def _e(value: Optional[str]) -> str:
    return html.escape(value or "")


def parse_height(value: Optional[str]) -> Optional[float]:
    """Read the leading number of a height string ("3.5", "3.5cm"). None if absent."""
    match = _LEADING_NUMBER.match(value or "")
    if not match:
        return None
    return float(match.group(1))


def total_height(data: ProductDetailInfo) -> str:
    """Outsole plus insole height to one decimal, or the default when not positive."""
    outsole = parse_height(data.outsole_height or "0")
    insole = parse_height(data.insole_height or "0")
    if outsole is None or insole is None:
        return DEFAULT_TOTAL_HEIGHT
    total = outsole + insole
    if total > 0:
        return f"{total:.1f}"
    return DEFAULT_TOTAL_HEIGHT


def get_title_html(data: ProductDetailInfo) -> str:
    return f"""
  <div style="text-align:center; margin-bottom:40px;">
    <div style="font-size:11px; letter-spacing:0.1em; color:#999; text-transform:uppercase; font-weight:700; margin-bottom:12px;">
      {_e(data.line_name)}
    </div>
    <h1 style="font-size:32px; font-weight:800; color:#000; margin:0 0 8px 0;">{_e(data.product_name)}</h1>
    <div style="font-size:14px; color:#555; font-weight:500;">Color: {_e(data.color)}</div>
  </div>"""


def get_intro_html(data: ProductDetailInfo) -> str:
    return f"""
  <div style="text-align:center; max-width:680px; margin:0 auto 48px auto; word-break:keep-all;">
    <p style="font-size:18px; font-weight:600; margin:0 0 16px 0; line-height:1.4;">{_e(data.intro)}</p>
    <p style="font-size:13px; color:#444; line-height:1.7; margin:0 0 16px 0;">{_e(data.style)}</p>
    <p style="font-size:13px; color:#444; line-height:1.7; margin:0;">{_e(data.tech)}</p>
  </div>"""


def get_technology_html(data: ProductDetailInfo) -> str:
    tech_label = data.tech_label or DEFAULT_TECH_LABEL
    tech_title = data.tech_title or DEFAULT_TECH_TITLE
    tech_desc = data.tech_desc or DEFAULT_TECH_DESC

    return f"""
  <div style="background:#f9f9f9; border:1px solid #eee; border-radius:12px; padding:20px 16px; margin-bottom:48px;">
    <table width="100%" border="0" cellspacing="0" cellpadding="0" style="border-collapse:collapse;">
      <tr>
        <td width="140" valign="middle" style="padding-right:24px; border-right:1px solid #e0e0e0;">
          <div style="font-size:10px; font-weight:700; color:#1a2b4c; letter-spacing:0.05em; margin-bottom:6px;">{_e(tech_label)}</div>
          <div style="font-size:18px; font-weight:800; color:#111; line-height:1.2; margin-bottom:4px;">{_e(tech_title)}</div>
        </td>
        <td valign="middle" style="padding-left:24px;">
          <div style="font-size:13px; color:#444; line-height:1.7;">{_e(tech_desc)}</div>
        </td>
      </tr>
    </table>
  </div>"""


def get_height_html(data: ProductDetailInfo) -> str:
    return f"""
  <div style="background:#f8f8f8; border:1px solid #eee; border-radius:12px; padding:20px 8px; margin-bottom:48px;">
    <table width="100%" border="0" cellspacing="0" cellpadding="0" style="border-collapse:collapse; table-layout:fixed;">
      <tr>
        <td align="center" valign="middle">
          <div style="font-size:11px; color:#888; margin-bottom:6px; text-transform:uppercase; font-weight:600;">Outsole</div>
          <div style="font-size:22px; font-weight:700; color:#333;">{_e(data.outsole_height)}cm</div>
        </td>
        <td align="center" valign="middle" width="30" style="font-size:18px; color:#ccc; font-weight:300;">+</td>
        <td align="center" valign="middle">
          <div style="font-size:11px; color:#1a2b4c; margin-bottom:6px; text-transform:uppercase; font-weight:700;">Insole</div>
          <div style="font-size:22px; font-weight:700; color:#1a2b4c;">{_e(data.insole_height)}cm</div>
        </td>
        <td align="center" valign="middle" width="20">
          <div style="width:1px; height:40px; background-color:#ddd; margin:0 auto;"></div>
        </td>
        <td align="center" valign="middle">
          <div style="font-size:13px; color:#555; margin-bottom:6px;">총 키높이 효과</div>
          <div style="font-size:26px; font-weight:800; color:#111;">{total_height(data)}cm</div>
        </td>
      </tr>
    </table>
  </div>"""


_INFO_CELL = "padding:10px 0; border-bottom:1px solid #eee;"


def get_product_info_html(data: ProductDetailInfo) -> str:
    rows = [
        ("Color", data.color),
        ("Upper", data.upper_material),
        ("Lining", data.lining_material),
        ("Sole", data.sole_material),
        ("Insole", data.insole_material),
        ("Size", data.size_spec),
        ("Origin", data.origin),
    ]
    rows_html = []
    for i, (label, value) in enumerate(rows):
        # first label cell fixes the column width
        width = " width:30%;" if i == 0 else ""
        rows_html.append(
            f'      <tr><td style="{_INFO_CELL} color:#555;{width}">{label}</td>'
            f'<td style="{_INFO_CELL} text-align:right;">{_e(value)}</td></tr>'
        )
    body = "\n".join(rows_html)

    return f"""
  <div style="margin-bottom:48px;">
    <div style="font-size:13px; font-weight:700; border-bottom:2px solid #111; padding-bottom:10px; margin-bottom:0;">PRODUCT INFO</div>
    <table width="100%" border="0" cellspacing="0" cellpadding="0" style="border-collapse:collapse; font-size:12px;">
{body}
    </table>
  </div>"""


def get_size_check_html() -> str:
    return """
  <div style="background:#fffbfb; border:1px solid #eee; padding:16px; border-radius:12px; font-size:13px; line-height:1.6;">
    <div style="margin-bottom:16px;">
      <strong style="color:#d32f2f; display:inline-block; margin-bottom:4px; font-size:14px;">⚠️ SIZE CHECK</strong><br>
      <strong>크게 제작된 제품입니다.</strong> 평소 사이즈보다 <span style="text-decoration:underline; font-weight:700;">한 사이즈 작게(Down)</span> 주문해 주세요.
      <span style="color:#888; font-size:12px;">(예: 평소 265 착용 시 👉 260 권장)</span>
    </div>
  </div>"""


def _placeholder(title: str, message: str) -> str:
    return f"""
  <div style="margin-bottom:60px; border:1px dashed #ddd; background:#fafafa; padding:40px; text-align:center; border-radius:8px;">
    <div style="font-size:14px; font-weight:700; color:#999; margin-bottom:8px;">{title}</div>
    <div style="font-size:12px; color:#bbb;">{message}</div>
  </div>"""


def _heading(text: str) -> str:
    return f"""
    <div style="text-align:center; margin-bottom:24px;">
      <h3 style="font-size:20px; font-weight:700; color:#111;">{text}</h3>
    </div>"""


def get_product_cuts_html(processed_images: Sequence[ProcessedImage]) -> str:
    display_images = [p.processed for p in processed_images]

    if not display_images:
        return _placeholder("제품 이미지", "AI가 이미지를 미화하여 이곳에 순차적으로 배치합니다...")

    images_html = "".join(
        f"""
    <div style="margin-bottom:20px;">
      <img src="{html.escape(url, quote=True)}" style="width:100%; height:auto; display:block;" alt="Detail {idx + 1}" />
    </div>
    """
        for idx, url in enumerate(display_images)
    )
    return f"""
  <div style="margin-bottom:60px;">{_heading("PRODUCT DETAIL")}
    {images_html}
  </div>"""


def get_model_foot_html() -> str:
    return _placeholder("모델 착용 컷", "이 영역에는 모델의 발 착용 샷이 배치됩니다.")


def _placeholder_column(heading: str, label: str, aspect: str, background: str) -> str:
    cells = "\n".join(
        f'      <div style="aspect-ratio:{aspect}; background:{background}; display:flex; align-items:center; '
        f'justify-content:center; color:#ccc; font-size:12px;">{label} {i} (Vertical)</div>'
        for i in range(1, 4)
    )
    return f"""
  <div style="margin-bottom:60px;">{_heading(heading)}
    <div style="display:flex; flex-direction:column; gap:10px;">
{cells}
    </div>
  </div>"""


def get_model_cuts_html() -> str:
    return _placeholder_column("MODEL CUTS", "Model Cut", "3/4", "#f0f0f0")


def get_detail_cuts_html() -> str:
    return _placeholder_column("DETAIL HIGHLIGHTS", "Detail", "1/1", "#f5f5f5")


SectionRenderer = Callable[[Section, ProductDetailInfo, Sequence[ProcessedImage]], str]

SECTION_RENDERERS: Dict[SectionType, SectionRenderer] = {
    SectionType.TITLE: lambda s, d, i: get_title_html(d),
    SectionType.INTRO: lambda s, d, i: get_intro_html(d),
    SectionType.TECHNOLOGY: lambda s, d, i: get_technology_html(d),
    SectionType.HEIGHT: lambda s, d, i: get_height_html(d),
    SectionType.PRODUCT_INFO: lambda s, d, i: get_product_info_html(d),
    SectionType.SIZE_CHECK: lambda s, d, i: get_size_check_html(),
    SectionType.PRODUCT_CUTS: lambda s, d, i: get_product_cuts_html(i),
    SectionType.MODEL_FOOT: lambda s, d, i: get_model_foot_html(),
    SectionType.MODEL_CUTS: lambda s, d, i: get_model_cuts_html(),
    SectionType.DETAIL_CUTS: lambda s, d, i: get_detail_cuts_html(),
    # user-authored HTML, emitted as-is
    SectionType.CUSTOM_TEXT: lambda s, d, i: s.content or "",
}


def generate_section_html(
    section: Section,
    data: ProductDetailInfo,
    processed_images: Sequence[ProcessedImage] = (),
) -> str:
    """Render one section. Disabled sections render as an empty string."""
    if not section.enabled:
        return ""
    renderer = SECTION_RENDERERS.get(section.type)
    if renderer is None:
        logger.warning(f"No renderer for section type {section.type}")
        return ""
    return renderer(section, data, processed_images)


def default_sections() -> List[Section]:
    """The standard section order of a new detail page."""
    return [
        Section(id="title", type=SectionType.TITLE, title="타이틀", icon="🏷️"),
        Section(id="intro", type=SectionType.INTRO, title="소개", icon="📝"),
        Section(id="technology", type=SectionType.TECHNOLOGY, title="테크놀로지", icon="⚙️"),
        Section(id="height", type=SectionType.HEIGHT, title="키높이", icon="📏"),
        Section(id="product-info", type=SectionType.PRODUCT_INFO, title="제품 정보", icon="📋"),
        Section(id="size-check", type=SectionType.SIZE_CHECK, title="사이즈 체크", icon="⚠️"),
        Section(id="product-cuts", type=SectionType.PRODUCT_CUTS, title="제품 컷", icon="👟"),
        Section(id="model-foot", type=SectionType.MODEL_FOOT, title="모델 착용 컷", icon="🦶"),
        Section(id="model-cuts", type=SectionType.MODEL_CUTS, title="모델 컷", icon="🧍"),
        Section(id="detail-cuts", type=SectionType.DETAIL_CUTS, title="디테일 컷", icon="🔍"),
    ]


def reorder_sections(sections: Sequence[Section], from_index: int, to_index: int) -> List[Section]:
    """
    Move the section at from_index so it ends up at to_index.

    Returns a new list; the input is left untouched.

    Raises:
        IndexError: if either index is outside the list.
    """
    count = len(sections)
    if not 0 <= from_index < count or not 0 <= to_index < count:
        raise IndexError(f"Section index out of range (from={from_index}, to={to_index}, size={count})")
    reordered = list(sections)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return reordered


def _find_index(sections: Sequence[Section], section_id: str) -> int:
    for index, section in enumerate(sections):
        if section.id == section_id:
            return index
    raise LookupError(f"Section {section_id} not found")


def toggle_section(sections: Sequence[Section], section_id: str) -> List[Section]:
    index = _find_index(sections, section_id)
    toggled = list(sections)
    toggled[index] = toggled[index].model_copy(update={"enabled": not toggled[index].enabled})
    return toggled


def add_custom_text(
    sections: Sequence[Section],
    content: str,
    title: str = "Custom Text",
    text_align: Optional[str] = None,
) -> List[Section]:
    """Append a custom-text section holding raw HTML."""
    section = Section(
        type=SectionType.CUSTOM_TEXT,
        title=title,
        icon="✏️",
        content=content,
        text_align=text_align,
    )
    return list(sections) + [section]


def remove_section(sections: Sequence[Section], section_id: str) -> List[Section]:
    index = _find_index(sections, section_id)
    return [s for i, s in enumerate(sections) if i != index]
