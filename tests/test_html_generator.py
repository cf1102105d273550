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


from fashionhub.detail_page.html_generator import (
    apply_typography,
    assemble_sections,
    generate_detail_page,
    generate_simple_html,
    render_preview_item,
)
from fashionhub.detail_page.models import ImagePosition, PreviewItem, ProcessedImage, ProductDetailInfo
from fashionhub.detail_page.sections import add_custom_text, default_sections, toggle_section


def test_simple_html_stacks_images_in_order():
    html = generate_simple_html(["https://cdn/1.png", "https://cdn/2.png"])
    assert html.startswith("<!DOCTYPE html>")
    assert '<html lang="ko">' in html
    assert "max-width: 860px" in html
    assert html.count('loading="lazy"') == 2
    assert html.index("1.png") < html.index("2.png")


def test_simple_html_without_images_is_still_a_document():
    html = generate_simple_html([])
    assert html.endswith("</html>")
    assert "<img" not in html


def test_render_image_item_applies_crop_styles():
    item = PreviewItem(
        type="image",
        image_url="https://cdn/look.png",
        title="look",
        height=600,
        image_scale=1.25,
        image_position=ImagePosition(x=-10, y=5.5),
    )
    html = render_preview_item(item)
    assert "height: 600px;" in html
    assert "scale(1.25) translate(-10px, 5.5px)" in html
    assert 'alt="look"' in html


def test_render_image_item_defaults():
    html = render_preview_item(PreviewItem(type="image", image_url="https://cdn/x.png"))
    assert "height:" not in html.split("<img")[0]
    assert "scale(1) translate(0px, 0px)" in html


def test_render_section_item_wraps_content():
    assert render_preview_item(PreviewItem(type="section", content="<h1>x</h1>")) == '<div class="section"><h1>x</h1></div>'
    assert render_preview_item(PreviewItem(type="section", content="")) == ""


def test_detail_page_wraps_items_in_order():
    items = [
        PreviewItem(type="section", content="<h1>first</h1>"),
        PreviewItem(type="image", image_url="https://cdn/second.png"),
    ]
    html = generate_detail_page(items)
    assert '<div class="product-detail" style="max-width: 860px; margin: 0 auto;">' in html
    assert html.index("first") < html.index("second.png")


def test_assemble_sections_skips_disabled_and_keeps_order():
    sections = toggle_section(default_sections(), "intro")
    items = assemble_sections(sections, ProductDetailInfo(product_name="Derby"), [ProcessedImage(processed="https://cdn/p.png")])

    ids = [item.id for item in items]
    assert "intro" not in ids
    assert ids == [s.id for s in sections if s.enabled]
    assert all(item.type == "section" for item in items)
    product_cuts = next(item for item in items if item.id == "product-cuts")
    assert "https://cdn/p.png" in product_cuts.content


def test_typography_is_a_no_op_by_default():
    assert apply_typography("<p>x</p>") == "<p>x</p>"
    assert apply_typography("<p>x</p>", font_size=100, font_family="default") == "<p>x</p>"


def test_typography_scales_inline_sizes_and_wraps():
    html = apply_typography(
        '<h1 style="font-size: 40px">A</h1><p style="font-size:15px">b</p>',
        font_size=150,
        font_family="'Noto Serif KR'",
        text_align="right",
    )
    assert "font-size:60.0px" in html
    assert "font-size:22.5px" in html
    assert html.startswith('<div style="font-family: &#x27;Noto Serif KR&#x27; !important; text-align: right !important; font-size: 150%;">')


def test_section_item_renders_text_settings():
    item = PreviewItem(type="section", content="<p>hi</p>", text_align="center", font_size=80)
    assert render_preview_item(item) == (
        '<div class="section"><div style="text-align: center !important; font-size: 80%;"><p>hi</p></div></div>'
    )


def test_custom_text_alignment_reaches_export():
    sections = add_custom_text(default_sections(), "<p>Made in Seoul</p>", text_align="center")
    items = assemble_sections(sections, ProductDetailInfo())

    custom = items[-1]
    assert custom.text_align == "center"
    assert '<div style="text-align: center !important;"><p>Made in Seoul</p></div>' in generate_detail_page(items)
