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


from unittest.mock import MagicMock, patch

import pytest

from fashionhub.gen_ai.services.genai_client import GenerationError
from fashionhub.gen_ai.services.imagen_service import ImagenAPIError, ImagenService
from conftest import data_url


@pytest.fixture
def vertexai_init():
    with patch("fashionhub.gen_ai.services.imagen_service.vertexai") as vertexai:
        yield vertexai.init


def test_requires_project(vertexai_init):
    with pytest.raises(ValueError):
        ImagenService("")


def test_generate_image_returns_png_data_url(vertexai_init):
    image = MagicMock(_image_bytes=b"imagen-bytes")
    model = MagicMock()
    model.generate_images.return_value = MagicMock(images=[image])

    with patch("fashionhub.gen_ai.services.imagen_service.ImageGenerationModel") as model_cls:
        model_cls.from_pretrained.return_value = model
        service = ImagenService("test-project", model_name="imagegeneration@006")
        result = service.generate_image("white sneaker", aspect_ratio="3:4")

    vertexai_init.assert_called_once_with(project="test-project", location="us-central1")
    model_cls.from_pretrained.assert_called_once_with("imagegeneration@006")
    model.generate_images.assert_called_once_with(prompt="white sneaker", number_of_images=1, aspect_ratio="3:4")
    assert result == data_url(b"imagen-bytes")


def test_generate_image_without_images(vertexai_init):
    model = MagicMock()
    model.generate_images.return_value = MagicMock(images=[])
    with patch("fashionhub.gen_ai.services.imagen_service.ImageGenerationModel") as model_cls:
        model_cls.from_pretrained.return_value = model
        with pytest.raises(GenerationError):
            ImagenService("test-project").generate_image("anything")


def test_generate_image_rejects_blank_prompt(vertexai_init):
    with pytest.raises(ValueError):
        ImagenService("test-project").generate_image("  ")


def test_predict_forwards_body(vertexai_init):
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=200, json=MagicMock(return_value={"predictions": []}))
    service = ImagenService("test-project", location="europe-west4", session=session)

    assert service.predict({"instances": [{"prompt": "x"}]}) == {"predictions": []}
    url = session.post.call_args.args[0]
    assert url.startswith("https://europe-west4-aiplatform.googleapis.com/v1/projects/test-project/locations/europe-west4/")
    assert session.post.call_args.kwargs["json"] == {"instances": [{"prompt": "x"}]}


def test_predict_raises_with_upstream_status(vertexai_init):
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=429, text="quota exceeded")
    with pytest.raises(ImagenAPIError) as excinfo:
        ImagenService("test-project", session=session).predict({})
    assert excinfo.value.status_code == 429
    assert excinfo.value.text == "quota exceeded"
