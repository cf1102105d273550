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

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    PROJECT_ID = os.getenv("PROJECT_ID")
    GCP_LOCATION = os.getenv("GCP_LOCATION", "us-central1")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

    GEMINI_TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.0-flash-001")
    GEMINI_EXTRACT_MODEL = os.getenv("GEMINI_EXTRACT_MODEL", "gemini-2.0-flash-exp")
    GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-3-pro-image-preview")
    IMAGEN_MODEL = os.getenv("IMAGEN_MODEL", "imagegeneration@006")

    GCS_BUCKET_NAME = os.getenv("GCS_BUCKET_NAME", "coa-lookbook-assets")
    GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS", "")

    PORT = int(os.getenv("PORT", "3001"))
    MAX_UPLOAD_IMAGES = int(os.getenv("MAX_UPLOAD_IMAGES", "4"))

    @classmethod
    def validate(cls):
        """Gemini needs either an API key or a project for Vertex AI."""
        missing = []
        if not cls.GEMINI_API_KEY and not cls.PROJECT_ID:
            missing.append("GEMINI_API_KEY or PROJECT_ID")
        for key in ("GCP_LOCATION", "GEMINI_IMAGE_MODEL", "GCS_BUCKET_NAME"):
            if not getattr(cls, key):
                missing.append(key)
        if missing:
            raise ValueError(f"Missing configuration values: {', '.join(missing)}")
        return True

