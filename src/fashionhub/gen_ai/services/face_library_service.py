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

import datetime
import logging
import random
from typing import Any, Dict, List, Optional

from google.cloud import storage

logger = logging.getLogger(__name__)

FACE_FOLDERS = {"m": "facesm/", "w": "facesw/"}
MAX_RANDOM_FACES = 50


class FaceLibraryService:
    """Service for browsing the stock face library kept in Cloud Storage"""

    def __init__(self, project_id: Optional[str], bucket_name: str, client: Optional[Any] = None):
        """
        Initialize the face library service.

        Args:
            project_id: The Google Cloud project ID
            bucket_name: Bucket holding the facesm/ and facesw/ folders
            client: Optional storage client (tests)
        """
        self.project_id = project_id
        self.bucket_name = bucket_name
        self.client = client or storage.Client(project=project_id)
        self.bucket = self.client.bucket(bucket_name)

    def _folder(self, gender: str) -> str:
        if gender not in FACE_FOLDERS:
            raise ValueError("Invalid gender. Use 'm' or 'w'")
        return FACE_FOLDERS[gender]

    def get_public_url(self, name: str) -> str:
        return f"https://storage.googleapis.com/{self.bucket_name}/{name}"

    def get_signed_url(self, name: str, minutes: int = 60) -> str:
        """V4 signed GET URL for a private object."""
        blob = self.bucket.blob(name)
        return blob.generate_signed_url(
            version="v4",
            expiration=datetime.timedelta(minutes=minutes),
            method="GET",
        )

    def list_faces(self, gender: str) -> List[Dict[str, str]]:
        """
        List the faces of one gender folder.

        Returns:
            [{"filename", "publicUrl", "gender"}] with folder marker objects skipped.
        """
        prefix = self._folder(gender)
        faces = []
        for blob in self.client.list_blobs(self.bucket_name, prefix=prefix):
            if blob.name.endswith("/"):
                continue
            faces.append(
                {
                    "filename": blob.name[len(prefix):],
                    "publicUrl": self.get_public_url(blob.name),
                    "gender": gender,
                }
            )
        logger.info(f"Found {len(faces)} faces in {self.bucket_name}/{prefix}")
        return faces

    def random_faces(self, gender: str, wanted: int = 5) -> List[Dict[str, str]]:
        if not 1 <= wanted <= MAX_RANDOM_FACES:
            raise ValueError(f"wanted must be between 1 and {MAX_RANDOM_FACES}")
        faces = self.list_faces(gender)
        random.shuffle(faces)
        return faces[:wanted]

    def check_bucket_access(self) -> bool:
        try:
            return bool(self.bucket.exists())
        except Exception as e:
            logger.error(f"GCS bucket access check failed: {str(e)}")
            return False
