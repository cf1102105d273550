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
GenAI Client - shared Gemini client and response helpers used by every service
"""

import base64
import logging
import re
from typing import Any, List, Optional, Union

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


class GenerationError(Exception):
    """Raised when the model answers without the content we asked for."""


def clean_json(text: str) -> str:
    """Strip markdown fences and return the outermost JSON object in the text."""
    without_fence = re.sub(r"```json", "", text, flags=re.IGNORECASE).replace("```", "").strip()
    match = re.search(r"\{[\s\S]*\}", without_fence)
    if match:
        return match.group(0)
    return without_fence


def _response_text(response: Any) -> str:
    texts = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in (getattr(content, "parts", None) or []):
            if getattr(part, "text", None):
                texts.append(part.text)
    return "".join(texts)


def extract_image_data_url(response: Any) -> str:
    """
    Return the first inline image of a generate_content response as a data URL.

    Args:
        response: A GenerateContentResponse.

    Returns:
        "data:<mime>;base64,<payload>"

    Raises:
        GenerationError: if the prompt was blocked or no image part exists.
    """
    prompt_feedback = getattr(response, "prompt_feedback", None)
    if prompt_feedback is not None and getattr(prompt_feedback, "block_reason", None):
        raise GenerationError(f"Generation blocked (reason: {prompt_feedback.block_reason})")

    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in (getattr(content, "parts", None) or []):
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or not inline_data.data:
                continue
            mime_type = inline_data.mime_type or "image/png"
            # Ensure the data is a base64 string, not bytes
            if isinstance(inline_data.data, bytes):
                image_b64 = base64.b64encode(inline_data.data).decode("ascii")
            else:
                image_b64 = inline_data.data
            return f"data:{mime_type};base64,{image_b64}"

    text = _response_text(response)
    logger.error(f"Image data missing. Response text: {text[:200]}")
    raise GenerationError(f"Image data missing. Model response: {text[:100] or 'none'}")


class GenAIClient:
    """Handles GenAI client initialization and the two call shapes the services need."""

    def __init__(
        self,
        project_id: Optional[str],
        location: str,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Initializes the GenAI client.

        Args:
            project_id: The Google Cloud Project ID (used for Vertex AI).
            location: The GCP region (e.g., us-central1).
            api_key: Optional Gemini Developer API key. Takes precedence over Vertex AI.
            client: Optional pre-built client, mainly for tests.
        """
        self.project_id = project_id
        self.location = location

        if client is not None:
            self.client = client
            return

        try:
            if api_key:
                self.client = genai.Client(api_key=api_key)
                logger.info("GenAI client initialized with API key")
            else:
                self.client = genai.Client(
                    vertexai=True,
                    project=project_id,
                    location=location,
                )
                logger.info(f"GenAI client initialized for Vertex AI: {project_id}/{location}")
        except Exception as e:
            logger.error(f"Failed to initialize GenAI client: {str(e)}")
            raise

    async def generate_text(
        self,
        contents: Union[str, List[Any]],
        model: str,
        response_mime_type: Optional[str] = None,
        response_schema: Optional[Any] = None,
        temperature: float = 0.2,
        max_output_tokens: int = 8192,
    ) -> str:
        """
        Run a text generation call and return the response text.

        Args:
            contents: Prompt string, list of parts, or list of Content turns.
            model: Gemini model name.
            response_mime_type: Optional, e.g. "application/json".
            response_schema: Optional response schema for structured output.
            temperature: Sampling temperature.
            max_output_tokens: Output token cap.

        Returns:
            The text of the first candidate.
        """
        config = types.GenerateContentConfig(
            temperature=temperature,
            top_p=0.95,
            max_output_tokens=max_output_tokens,
            response_mime_type=response_mime_type,
            response_schema=response_schema,
            safety_settings=SAFETY_SETTINGS,
        )

        logger.info(f"Sending text request to {model}...")
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
        text = _response_text(response)
        logger.info(f"Text response received ({len(text)} chars)")
        return text

    async def generate_image(
        self,
        parts: List[types.Part],
        model: str,
        aspect_ratio: Optional[str] = None,
        image_size: Optional[str] = None,
    ) -> str:
        """
        Run an image generation call and return the first image as a data URL.

        Args:
            parts: Input image parts followed by the text prompt.
            model: Gemini image model name.
            aspect_ratio: Optional output ratio such as "3:4" or "9:16".
            image_size: Optional output size such as "1K" or "2K".

        Returns:
            Data URL of the generated image.
        """
        image_config = None
        if aspect_ratio or image_size:
            image_config = types.ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size)

        config = types.GenerateContentConfig(
            temperature=0.8,
            top_p=0.95,
            response_modalities=["TEXT", "IMAGE"],
            safety_settings=SAFETY_SETTINGS,
            image_config=image_config,
        )

        logger.info(
            f"Sending image request to {model} ({len(parts)} parts, ratio={aspect_ratio}, size={image_size})"
        )
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=parts,
            config=config,
        )
        return extract_image_data_url(response)
