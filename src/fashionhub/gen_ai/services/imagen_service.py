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
Imagen Service - text-to-image through Vertex AI Imagen
"""

import logging
from typing import Any, Dict, Optional

import google.auth
import vertexai
from google.auth.transport.requests import AuthorizedSession
from vertexai.preview.vision_models import ImageGenerationModel

from .genai_client import GenerationError
from .image_utils import encode_base64, to_data_url

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class ImagenAPIError(Exception):
    """Non-2xx answer from the Imagen predict endpoint."""

    def __init__(self, status_code: int, text: str):
        super().__init__(f"Imagen API error {status_code}: {text[:200]}")
        self.status_code = status_code
        self.text = text


class ImagenService:
    def __init__(
        self,
        project_id: str,
        location: str = "us-central1",
        model_name: str = "imagegeneration@006",
        session: Optional[Any] = None,
    ):
        """
        Args:
            project_id: The Google Cloud project ID.
            location: Vertex AI region.
            model_name: Imagen model used by generate_image.
            session: Optional authorized HTTP session for predict (tests).
        """
        if not project_id:
            raise ValueError("PROJECT_ID is required for Imagen")
        self.project_id = project_id
        self.location = location
        self.model_name = model_name
        self._session = session
        self._model = None
        vertexai.init(project=project_id, location=location)

    @property
    def model(self):
        if self._model is None:
            self._model = ImageGenerationModel.from_pretrained(self.model_name)
        return self._model

    @property
    def session(self):
        if self._session is None:
            credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
            self._session = AuthorizedSession(credentials)
        return self._session

    @property
    def predict_url(self) -> str:
        return (
            f"https://{self.location}-aiplatform.googleapis.com/v1/projects/{self.project_id}"
            f"/locations/{self.location}/publishers/google/models/imagegeneration:predict"
        )

    def generate_image(self, prompt: str, aspect_ratio: str = "1:1") -> str:
        """
        Generate one image from a text prompt.

        Args:
            prompt: Text prompt.
            aspect_ratio: Output ratio.

        Returns:
            PNG data URL.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt is required")

        logger.info(f"Generating Imagen image: {prompt[:100]}")
        response = self.model.generate_images(
            prompt=prompt,
            number_of_images=1,
            aspect_ratio=aspect_ratio,
        )
        images = list(response.images)
        if not images:
            raise GenerationError("No image generated")

        return to_data_url(encode_base64(images[0]._image_bytes), "image/png")

    def predict(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Forward a raw predict request body and return the JSON answer."""
        logger.info(f"Forwarding Imagen predict request to {self.predict_url}")
        response = self.session.post(self.predict_url, json=body, timeout=120)
        if response.status_code >= 400:
            logger.error(f"Imagen API error: {response.status_code} {response.text[:200]}")
            raise ImagenAPIError(response.status_code, response.text)
        return response.json()
