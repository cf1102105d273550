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
HTML document builders for exported detail pages
"""

import html
import logging
import re
from typing import List, Optional, Sequence

from .models import PreviewItem, ProcessedImage, ProductDetailInfo, Section
from .sections import generate_section_html

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "detail-page.html"


def generate_simple_html(image_urls: Sequence[str]) -> str:
    """Stack images in a centred 860px column."""
    images_html = "".join(
        f"""
        <div class="image-container">
            <img src="{html.escape(url, quote=True)}" alt="Detail Image {index + 1}" loading="lazy" />
        </div>
    """
        for index, url in enumerate(image_urls)
    )

    return f"""
<!DOCTYPE html>
<html lang="ko">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Product Detail Page</title>
    <style>
        body {{
            margin: 0;
            padding: 0;
            background-color: #ffffff;
            font-family: 'Noto Sans KR', sans-serif;
        }}
        .container {{
            max-width: 860px;
            margin: 0 auto;
            background-color: #ffffff;
        }}
        .image-container {{
            width: 100%;
            font-size: 0;
        }}
        img {{
            width: 100%;
            height: auto;
            display: block;
        }}
    </style>
</head>
<body>
    <div class="container">
        {images_html}
    </div>
</body>
</html>
    """.strip()


def _format_number(value: float) -> str:
    return f"{value:g}"


INLINE_FONT_SIZE = re.compile(r"font-size:\s*([\d.]+)px", re.IGNORECASE)


def apply_typography(
    content: str,
    font_size: Optional[int] = None,
    font_family: Optional[str] = None,
    text_align: Optional[str] = None,
) -> str:
    """
    Apply the text settings of a preview item to its HTML.

    Inline px font sizes are scaled by font_size percent, and the content is
    wrapped in a div carrying the font family, alignment and percent size.
    Content is returned unchanged when nothing is set.
    """
    size = font_size or 100
    if size != 100:
        ratio = size / 100
        content = INLINE_FONT_SIZE.sub(lambda m: f"font-size:{float(m.group(1)) * ratio:.1f}px", content)

    styles = []
    if font_family and font_family != "default":
        styles.append(f"font-family: {html.escape(font_family, quote=True)} !important")
    if text_align:
        styles.append(f"text-align: {text_align} !important")
    if size != 100:
        styles.append(f"font-size: {size}%")
    if not styles:
        return content
    return f'<div style="{"; ".join(styles)};">{content}</div>'


def render_preview_item(item: PreviewItem) -> str:
    """Render an image item with its crop styles, or wrap a section's HTML."""
    if item.type == "image" and item.image_url:
        height_style = f"height: {item.height}px;" if item.height else ""
        scale = item.image_scale or 1
        x = item.image_position.x if item.image_position else 0
        y = item.image_position.y if item.image_position else 0
        return f"""
                <div style="width: 100%; overflow: hidden; position: relative; background: white; {height_style}">
                    <img src="{html.escape(item.image_url, quote=True)}" alt="{html.escape(item.title or '', quote=True)}"
                         style="width: 100%; display: block; transform: scale({_format_number(scale)}) translate({_format_number(x)}px, {_format_number(y)}px); transform-origin: center center;" />
                </div>"""
    if item.type == "section" and item.content:
        content = apply_typography(item.content, item.font_size, item.font_family, item.text_align)
        return f'<div class="section">{content}</div>'
    return ""


def generate_detail_page(items: Sequence[PreviewItem]) -> str:
    """Build the exported document from ordered preview items."""
    body = "\n".join(render_preview_item(item) for item in items)
    logger.info(f"Generated detail page with {len(items)} items")
    return f"""
<!DOCTYPE html>
<html lang="ko">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Product Detail Page</title>
</head>
<body>
    <div class="product-detail" style="max-width: 860px; margin: 0 auto;">
        {body}
    </div>
</body>
</html>
    """.strip()


def assemble_sections(
    sections: Sequence[Section],
    data: ProductDetailInfo,
    processed_images: Sequence[ProcessedImage] = (),
) -> List[PreviewItem]:
    """
    Turn the ordered section list into preview items.

    Disabled sections and sections that render to nothing are dropped;
    the relative order of the rest is kept.
    """
    items = []
    for section in sections:
        content = generate_section_html(section, data, processed_images)
        if not content:
            continue
        items.append(
            PreviewItem(
                id=section.id,
                type="section",
                section_type=section.type,
                title=section.title,
                content=content,
                text_align=section.text_align,
            )
        )
    return items
