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


from unittest.mock import MagicMock

import pytest

from fashionhub.gen_ai.services.face_library_service import FaceLibraryService


def _blob(name):
    blob = MagicMock()
    blob.name = name
    return blob


@pytest.fixture
def storage_client():
    client = MagicMock()
    client.list_blobs.return_value = [
        _blob("facesw/"),
        _blob("facesw/a.png"),
        _blob("facesw/b.png"),
        _blob("facesw/c.png"),
    ]
    return client


@pytest.fixture
def library(storage_client):
    return FaceLibraryService("test-project", "faces-bucket", client=storage_client)


def test_list_faces_skips_folder_markers(library, storage_client):
    faces = library.list_faces("w")

    storage_client.list_blobs.assert_called_once_with("faces-bucket", prefix="facesw/")
    assert faces == [
        {"filename": name, "publicUrl": f"https://storage.googleapis.com/faces-bucket/facesw/{name}", "gender": "w"}
        for name in ("a.png", "b.png", "c.png")
    ]


def test_list_faces_rejects_unknown_gender(library):
    with pytest.raises(ValueError):
        library.list_faces("x")


def test_random_faces_returns_a_subset(library):
    faces = library.random_faces("w", wanted=2)
    assert len(faces) == 2
    assert {face["filename"] for face in faces} <= {"a.png", "b.png", "c.png"}
    assert len(library.random_faces("w", wanted=50)) == 3


@pytest.mark.parametrize("wanted", [0, 51])
def test_random_faces_bounds(library, wanted):
    with pytest.raises(ValueError):
        library.random_faces("w", wanted=wanted)


def test_signed_url_uses_v4(library, storage_client):
    blob = storage_client.bucket.return_value.blob.return_value
    blob.generate_signed_url.return_value = "https://signed"

    assert library.get_signed_url("facesw/a.png", minutes=15) == "https://signed"
    kwargs = blob.generate_signed_url.call_args.kwargs
    assert kwargs["version"] == "v4"
    assert kwargs["expiration"].total_seconds() == 15 * 60


def test_check_bucket_access(library, storage_client):
    storage_client.bucket.return_value.exists.return_value = True
    assert library.check_bucket_access() is True

    storage_client.bucket.return_value.exists.side_effect = RuntimeError("forbidden")
    assert library.check_bucket_access() is False
