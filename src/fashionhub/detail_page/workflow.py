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
Detail page workflow - uploads, enhancement batches, edits and HTML assembly
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..gen_ai.services.image_utils import InputImage, encode_base64, load_image, resize_image, to_data_url
from ..gen_ai.services.product_enhancement_service import (
    BEAUTIFY_POSES,
    ProductEnhancementService,
    normalize_effect,
)
from ..gen_ai.services.product_info_service import ProductInfoService
from . import html_generator, sections as section_ops
from .models import ImagePosition, PreviewItem, ProcessedImage, ProductDetailInfo, Section, new_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOADS = 4


class EnhancementStatus(str, Enum):
    PENDING = "pending"
    LOADING = "loading"
    DONE = "done"
    ERROR = "error"


class EnhancementResult(BaseModel):
    id: str = Field(default_factory=new_id)
    source_index: Optional[int] = Field(..., description="Index of the uploaded image this result came from, None once it is removed")
    effect: str
    pose_id: Optional[str] = None
    pose_name: Optional[str] = None
    status: EnhancementStatus = EnhancementStatus.PENDING
    url: Optional[str] = None
    error: Optional[str] = None
    processing_step: Optional[str] = None


class DetailPageWorkflow:
    """
    State of one detail page being built.

    Holds the uploaded images, one EnhancementResult per (image, pose) job,
    the ordered sections, the product copy and a board of extra preview items.
    Nothing is persisted.
    """

    def __init__(
        self,
        enhancement_service: ProductEnhancementService,
        max_uploads: int = DEFAULT_MAX_UPLOADS,
        sections: Optional[List[Section]] = None,
    ):
        self.enhancement_service = enhancement_service
        self.max_uploads = max_uploads
        self.uploads: List[InputImage] = []
        self.results: List[EnhancementResult] = []
        self.sections: List[Section] = sections if sections is not None else section_ops.default_sections()
        self.product_info = ProductDetailInfo()
        self.custom_background: Optional[InputImage] = None
        self.board: List[PreviewItem] = []
        self.staging: List[PreviewItem] = []

    # Uploads

    def upload(self, images: Sequence[InputImage]) -> List[InputImage]:
        """
        Add images up to the upload limit.

        Returns:
            The images actually accepted.
        """
        free_slots = max(self.max_uploads - len(self.uploads), 0)
        accepted = list(images)[:free_slots]
        if len(accepted) < len(images):
            logger.warning(f"Upload limit {self.max_uploads} reached, dropped {len(images) - len(accepted)} images")
        self.uploads.extend(accepted)
        return accepted

    def remove_upload(self, index: int):
        """Remove an upload. Results keep pointing at their own source image."""
        if not 0 <= index < len(self.uploads):
            raise IndexError(f"Upload index {index} out of range")
        self.uploads.pop(index)
        for result in self.results:
            if result.source_index is None or result.source_index < index:
                continue
            result.source_index = None if result.source_index == index else result.source_index - 1

    # Enhancement

    def _find_result(self, result_id: str) -> EnhancementResult:
        for result in self.results:
            if result.id == result_id:
                return result
        raise LookupError(f"Result {result_id} not found")

    async def _render(self, result: EnhancementResult):
        """Run one job, recording the outcome on the result instead of raising."""

        def step(message: str):
            result.processing_step = message

        result.status = EnhancementStatus.LOADING
        result.error = None
        try:
            result.url = await self.enhancement_service.apply_effect(
                [self.uploads[result.source_index]],
                result.effect,
                pose_id=result.pose_id,
                custom_background=self.custom_background,
                on_progress=step,
            )
            result.status = EnhancementStatus.DONE
        except Exception as e:
            logger.error(f"Enhancement {result.id} ({result.effect}) failed: {str(e)}")
            result.status = EnhancementStatus.ERROR
            result.error = str(e)
        finally:
            result.processing_step = None

    async def run_enhancements(
        self,
        effect: str,
        pose_ids: Optional[Sequence[str]] = None,
        custom_background: Optional[InputImage] = None,
    ) -> List[EnhancementResult]:
        """
        Render every uploaded image with an effect, once per requested pose.

        Jobs run concurrently. A failed job is marked as error and does not
        cancel the others. Results are returned in request order
        (image-major, then pose).

        Args:
            effect: Effect name.
            pose_ids: Beautify layouts; None renders one image per upload.
            custom_background: Required for the custom effect.

        Returns:
            The results created by this batch.
        """
        if not self.uploads:
            raise ValueError("Upload at least one image first")
        effect = normalize_effect(effect)
        if custom_background is not None:
            self.custom_background = custom_background
        if effect == "custom" and self.custom_background is None:
            raise ValueError("The custom effect needs a background image")

        poses = list(pose_ids) if pose_ids else [None]
        batch = [
            EnhancementResult(
                source_index=index,
                effect=effect,
                pose_id=pose_id,
                pose_name=BEAUTIFY_POSES.get(pose_id) if pose_id else None,
            )
            for index in range(len(self.uploads))
            for pose_id in poses
        ]
        self.results.extend(batch)

        logger.info(f"Running {len(batch)} enhancement jobs with effect {effect}")
        await asyncio.gather(*(self._render(result) for result in batch), return_exceptions=True)

        done = sum(1 for result in batch if result.status == EnhancementStatus.DONE)
        logger.info(f"Enhancement batch finished: {done}/{len(batch)} succeeded")
        return batch

    async def regenerate(self, result_id: str) -> EnhancementResult:
        """Render a result again with its original image, effect and pose."""
        result = self._find_result(result_id)
        if result.status == EnhancementStatus.LOADING:
            raise ValueError(f"Result {result_id} is still rendering")
        if result.source_index is None:
            raise ValueError(f"Source image of result {result_id} was removed")
        await self._render(result)
        return result

    def _finished(self, result_id: str) -> EnhancementResult:
        result = self._find_result(result_id)
        if result.status != EnhancementStatus.DONE or not result.url:
            raise ValueError(f"Result {result_id} has no finished image")
        return result

    async def recolor(
        self,
        result_id: str,
        color: Optional[str] = None,
        color_reference: Optional[InputImage] = None,
    ) -> EnhancementResult:
        """Recolor a finished result in place. On failure the previous image is kept."""
        result = self._finished(result_id)
        previous_url = result.url
        result.status = EnhancementStatus.LOADING
        result.error = None
        result.processing_step = "Changing color"
        try:
            result.url = await self.enhancement_service.apply_color_change(
                InputImage(base64=previous_url), color=color, color_reference=color_reference
            )
        except Exception as e:
            logger.error(f"Recolor of {result_id} failed: {str(e)}")
            result.error = str(e)
            raise
        finally:
            result.status = EnhancementStatus.DONE
            result.processing_step = None
        return result

    def resize(
        self,
        result_id: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        scale: Optional[float] = None,
    ) -> EnhancementResult:
        """Resize a finished result; the image becomes a PNG data URL."""
        result = self._finished(result_id)
        data, _ = load_image(result.url)
        result.url = to_data_url(encode_base64(resize_image(data, width=width, height=height, scale=scale)), "image/png")
        return result

    def remove_result(self, result_id: str):
        result = self._find_result(result_id)
        self.results.remove(result)

    def processed_images(self) -> List[ProcessedImage]:
        """Finished results in order, paired with their source upload."""
        processed = []
        for result in self.results:
            if result.status != EnhancementStatus.DONE or not result.url:
                continue
            original = None
            if result.source_index is not None:
                original = self.uploads[result.source_index].to_data_url()
            processed.append(ProcessedImage(processed=result.url, original=original))
        return processed

    # Product copy

    async def autofill(self, product_info_service: ProductInfoService, prompt: Optional[str] = None) -> ProductDetailInfo:
        """Fill the product copy from the uploaded images."""
        if not self.uploads:
            raise ValueError("Upload at least one image first")
        self.product_info = await product_info_service.extract_detail_info(self.uploads, prompt)
        return self.product_info

    def update_product_info(self, **changes: Any) -> ProductDetailInfo:
        self.product_info = self.product_info.model_copy(update=changes)
        return self.product_info

    # Sections

    def reorder_sections(self, from_index: int, to_index: int):
        self.sections = section_ops.reorder_sections(self.sections, from_index, to_index)

    def toggle_section(self, section_id: str):
        self.sections = section_ops.toggle_section(self.sections, section_id)

    def add_custom_text(self, content: str, title: str = "Custom Text", text_align: Optional[str] = None) -> Section:
        self.sections = section_ops.add_custom_text(self.sections, content, title=title, text_align=text_align)
        return self.sections[-1]

    def remove_section(self, section_id: str):
        self.sections = section_ops.remove_section(self.sections, section_id)

    # Preview board

    def _find_board_item(self, items: List[PreviewItem], item_id: str) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        raise LookupError(f"Preview item {item_id} not found")

    def add_board_image(self, image_url: str, title: Optional[str] = None, height: Optional[int] = None) -> PreviewItem:
        item = PreviewItem(
            type="image",
            image_url=image_url,
            title=title,
            height=height,
            image_scale=1,
            image_position=ImagePosition(),
        )
        self.board.append(item)
        return item

    def add_board_result(self, result_id: str, height: Optional[int] = None) -> PreviewItem:
        result = self._finished(result_id)
        return self.add_board_image(result.url, title=result.pose_name or result.effect, height=height)

    def update_board_item(self, item_id: str, changes: Dict[str, Any]) -> PreviewItem:
        """Apply crop/height edits, e.g. {"height": 600, "image_scale": 1.2}."""
        index = self._find_board_item(self.board, item_id)
        updated = PreviewItem.model_validate({**self.board[index].model_dump(), **changes})
        self.board[index] = updated
        return updated

    def duplicate_board_item(self, item_id: str) -> PreviewItem:
        index = self._find_board_item(self.board, item_id)
        copy = self.board[index].model_copy(update={"id": new_id()}, deep=True)
        self.board.insert(index + 1, copy)
        return copy

    def move_board_item(self, from_index: int, to_index: int):
        count = len(self.board)
        if not 0 <= from_index < count or not 0 <= to_index < count:
            raise IndexError(f"Board index out of range (from={from_index}, to={to_index}, size={count})")
        self.board.insert(to_index, self.board.pop(from_index))

    def stage_board_item(self, item_id: str):
        """Park an item outside the page without deleting it."""
        index = self._find_board_item(self.board, item_id)
        self.staging.append(self.board.pop(index))

    def restore_staged_item(self, item_id: str):
        index = self._find_board_item(self.staging, item_id)
        self.board.append(self.staging.pop(index))

    def delete_board_item(self, item_id: str):
        index = self._find_board_item(self.board, item_id)
        self.board.pop(index)

    # Output

    def build_preview(self) -> List[PreviewItem]:
        """Enabled sections in order, followed by the board items."""
        items = html_generator.assemble_sections(self.sections, self.product_info, self.processed_images())
        return items + list(self.board)

    def export_html(self) -> str:
        return html_generator.generate_detail_page(self.build_preview())
