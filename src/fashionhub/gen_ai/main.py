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
import uuid
from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional

from fastapi import BackgroundTasks, Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from ..detail_page import html_generator, sections as section_ops
from ..detail_page.models import PreviewItem, ProcessedImage, ProductDetailInfo, Section
from ..detail_page.workflow import DetailPageWorkflow, EnhancementResult
from .config import Config
from .services.chat_service import ChatMessage, ChatService
from .services.face_library_service import FaceLibraryService
from .services.face_service import FaceService
from .services.genai_client import GenAIClient
from .services.image_utils import InputImage
from .services.imagen_service import ImagenAPIError, ImagenService
from .services.lookbook_service import LookbookImage, LookbookService
from .services.pose_service import Gender, PoseGenerationResult, PoseService, ShotType
from .services.product_enhancement_service import ProductEnhancementService
from .services.product_info_service import ProductInfoService
from .services.shoe_replacement_service import ColorSettings, ReplacementResult, ShoeReplacementService
from .tasks import task_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Fashion Hub Gen AI Service",
    description="API for AI-generated fashion product photography, model lookbooks and e-commerce detail pages",
    version="1.0.0",
    openapi_tags=[
        {"name": "General", "description": "Basic health and status endpoints"},
        {"name": "Gemini", "description": "Product analysis, faces, candidates, lookbooks and chat"},
        {"name": "Images", "description": "Imagen generation, product effects and shoe edits"},
        {"name": "Poses", "description": "Pose variations of a model shot"},
        {"name": "Tasks", "description": "Background generation batches"},
        {"name": "Faces", "description": "Stock face library"},
        {"name": "Detail Page", "description": "Section assembly and HTML export"},
    ],
    contact={
        "name": "Fashion Hub Development Team",
        "email": "fashionhub-dev@example.com",
    },
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # For production, restrict to specific domains
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Service providers, built once per process
@lru_cache()
def get_config() -> Config:
    Config.validate()
    return Config()


@lru_cache()
def get_genai_client() -> GenAIClient:
    config = get_config()
    return GenAIClient(config.PROJECT_ID, config.GCP_LOCATION, api_key=config.GEMINI_API_KEY)


def get_product_info_service() -> ProductInfoService:
    return ProductInfoService(get_genai_client(), model=get_config().GEMINI_EXTRACT_MODEL)


def get_face_service() -> FaceService:
    return FaceService(get_genai_client(), model=get_config().GEMINI_IMAGE_MODEL)


def get_lookbook_service() -> LookbookService:
    return LookbookService(get_genai_client(), model=get_config().GEMINI_IMAGE_MODEL)


def get_pose_service() -> PoseService:
    return PoseService(get_genai_client(), model=get_config().GEMINI_IMAGE_MODEL)


def get_enhancement_service() -> ProductEnhancementService:
    return ProductEnhancementService(get_genai_client(), model=get_config().GEMINI_IMAGE_MODEL)


def get_shoe_replacement_service() -> ShoeReplacementService:
    return ShoeReplacementService(get_genai_client(), model=get_config().GEMINI_IMAGE_MODEL)


def get_chat_service() -> ChatService:
    return ChatService(get_genai_client(), model=get_config().GEMINI_TEXT_MODEL)


@lru_cache()
def get_imagen_service() -> ImagenService:
    config = get_config()
    return ImagenService(config.PROJECT_ID, location=config.GCP_LOCATION, model_name=config.IMAGEN_MODEL)


@lru_cache()
def get_face_library_service() -> FaceLibraryService:
    config = get_config()
    return FaceLibraryService(config.PROJECT_ID, config.GCS_BUCKET_NAME)


# Define request models
class CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase names the web client sends."""

    model_config = {"populate_by_name": True}


class GenerateImageRequest(CamelModel):
    prompt: str = Field(..., description="Text prompt for Imagen", example="White leather sneaker on a marble plinth")
    aspect_ratio: str = Field("1:1", alias="aspectRatio", description="Output aspect ratio", example="1:1")


class ExtractProductInfoRequest(BaseModel):
    images: List[InputImage] = Field(..., description="Product photos")
    prompt: Optional[str] = Field(None, description="Custom extraction prompt; the analyst prompt is used when empty")

    model_config = {
        "json_schema_extra": {
            "example": {
                "images": [{"base64": "iVBORw0KGgo...", "mimeType": "image/png"}],
                "prompt": None,
            }
        }
    }


class GenerateFacesRequest(BaseModel):
    gender: str = Field(..., description="male or female", example="female")
    race: str = Field("", description="Race label, Korean labels are accepted", example="한국인")
    age: str = Field(..., description="Age in years", example="24")
    count: int = Field(5, description="Number of faces", ge=1, le=10)


class UpscaleFaceRequest(CamelModel):
    face_image: str = Field(..., alias="faceImage", description="Face as data URL, base64 or URL")


class GenerateCandidatesRequest(CamelModel):
    gender: Literal["w", "m"] = Field(..., example="w")
    age: str = Field(..., example="25")
    ethnicity: str = Field(..., example="Korean")
    face_image: str = Field(..., alias="faceImage", description="Face reference")


class GenerateLookbookRequest(CamelModel):
    candidate_image: str = Field(..., alias="candidateImage", description="Chosen model candidate")
    product_images: List[InputImage] = Field(..., alias="productImages", description="Up to four product photos")
    bg_image: Optional[InputImage] = Field(None, alias="bgImage", description="Optional background")
    gender: Literal["w", "m"] = "w"
    use_filter: bool = Field(False, alias="useFilter", description="Film look instead of clean digital")


class ChatRequest(BaseModel):
    message: str = Field(..., example="How do I make a lookbook?")
    history: List[ChatMessage] = Field(default_factory=list)


class EffectRequest(CamelModel):
    images: List[InputImage] = Field(..., description="Photos of the same product")
    effect: str = Field("beautify", example="studio_cinematic")
    pose_id: Optional[str] = Field(None, alias="poseId", example="left_diagonal_pair")
    custom_background: Optional[InputImage] = Field(None, alias="customBackground")


class EffectBatchRequest(CamelModel):
    images: List[InputImage] = Field(..., description="Uploaded product photos, capped at MAX_UPLOAD_IMAGES")
    effect: str = Field("beautify", example="beautify")
    pose_ids: Optional[List[str]] = Field(None, alias="poseIds", example=["left_profile_single", "rear_pair"])
    custom_background: Optional[InputImage] = Field(None, alias="customBackground")


class ColorChangeRequest(CamelModel):
    image: InputImage
    color: Optional[str] = Field(None, description="Target hex colour", example="#1F2937")
    color_reference: Optional[InputImage] = Field(None, alias="colorReference")


class ShoeReplaceRequest(CamelModel):
    source_images: List[str] = Field(..., alias="sourceImages", description="Model shots")
    product_image: str = Field(..., alias="productImage", description="Product reference")


class ShoeCampaignRequest(CamelModel):
    source_image: str = Field(..., alias="sourceImage")
    product_images: List[str] = Field(..., alias="productImages")
    color_settings: Optional[ColorSettings] = Field(None, alias="colorSettings")


class ShoePoseRequest(CamelModel):
    source_image: str = Field(..., alias="sourceImage")
    pose_prompt: str = Field(..., alias="posePrompt", example="Legs crossed at the ankle")


class PoseBatchRequest(CamelModel):
    image: str = Field(..., description="Base model photo")
    count: int = Field(3, ge=1, le=10)
    shot_type: ShotType = Field("full", alias="shotType")
    used_pose_ids: List[str] = Field(default_factory=list, alias="usedPoseIds")
    gender: Optional[Gender] = None


class RenderDetailRequest(CamelModel):
    sections: Optional[List[Section]] = Field(None, description="Ordered sections; defaults are used when omitted")
    product_info: ProductDetailInfo = Field(default_factory=ProductDetailInfo, alias="productInfo")
    processed_images: List[ProcessedImage] = Field(default_factory=list, alias="processedImages")


class ExportDetailRequest(BaseModel):
    items: List[PreviewItem]


class SimpleDetailRequest(CamelModel):
    image_urls: List[str] = Field(..., alias="imageUrls")


def _gemini_error(e: Exception, action: str) -> JSONResponse:
    """Error body kept compatible with the web client: {"success": false, "error": ...}."""
    status_code = 400 if isinstance(e, ValueError) else 500
    logger.error(f"Error {action}: {str(e)}")
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(e)})


# Add middleware to log request/response
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log requests and responses"""
    logger.info(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"Response: {response.status_code}")
    return response


@app.get("/", tags=["General"])
async def root():
    return {"status": "ok", "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat()}


@app.get("/health", tags=["General"])
async def health_check():
    return {"status": "ok", "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat()}


@app.get("/api/status", tags=["General"])
def api_status(face_library: FaceLibraryService = Depends(get_face_library_service)):
    """Report whether the face library bucket is reachable."""
    accessible = face_library.check_bucket_access()
    return {
        "status": "ok",
        "gcs": "connected" if accessible else "disconnected",
        "bucket": face_library.bucket_name,
    }


@app.post("/api/generate-image", tags=["Images"])
def generate_image(request: GenerateImageRequest, imagen_service: ImagenService = Depends(get_imagen_service)):
    """
    Generate an image from a text prompt with Imagen
    """
    logger.info(f"Received image generation request: {request.prompt[:100]}")
    try:
        image = imagen_service.generate_image(request.prompt, aspect_ratio=request.aspect_ratio)
        return {"image": image}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating image: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/imagen/generate", tags=["Images"])
def imagen_proxy(body: Dict[str, Any] = Body(...), imagen_service: ImagenService = Depends(get_imagen_service)):
    """
    Forward a raw Imagen predict request and return the prediction JSON
    """
    try:
        return imagen_service.predict(body)
    except ImagenAPIError as e:
        raise HTTPException(status_code=e.status_code, detail=e.text)
    except Exception as e:
        logger.error(f"Imagen proxy error: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/gemini/extract-product-info", tags=["Gemini"])
async def extract_product_info(
    request: ExtractProductInfoRequest,
    service: ProductInfoService = Depends(get_product_info_service),
):
    """
    Analyze product photos and return the structured product description
    """
    logger.info(f"Received product info extraction request with {len(request.images)} images")
    try:
        data = await service.extract_product_info(request.images, request.prompt)
        return {"success": True, "data": data}
    except Exception as e:
        return _gemini_error(e, "extracting product info")


@app.post("/api/gemini/generate-faces", tags=["Gemini"])
async def generate_faces(request: GenerateFacesRequest, service: FaceService = Depends(get_face_service)):
    logger.info(f"Received face generation request: {request.gender}, {request.race}, {request.age}")
    try:
        faces = await service.generate_face_batch(request.gender, request.race, request.age, request.count)
        return {"success": True, "faces": faces}
    except Exception as e:
        return _gemini_error(e, "generating faces")


@app.post("/api/gemini/upscale-face", tags=["Gemini"])
async def upscale_face(request: UpscaleFaceRequest, service: FaceService = Depends(get_face_service)):
    try:
        image = await service.upscale_face(request.face_image)
        return {"success": True, "image": image}
    except Exception as e:
        return _gemini_error(e, "upscaling face")


@app.post("/api/gemini/generate-candidates", tags=["Gemini"])
async def generate_candidates(
    request: GenerateCandidatesRequest,
    service: LookbookService = Depends(get_lookbook_service),
):
    """
    Generate full-body model candidates that keep the given face
    """
    logger.info(f"Received candidate request: {request.gender}, {request.age}, {request.ethnicity}")
    try:
        candidates = await service.generate_candidates(
            request.gender, request.age, request.ethnicity, request.face_image
        )
        return {"success": True, "candidates": candidates}
    except Exception as e:
        return _gemini_error(e, "generating candidates")


@app.post("/api/gemini/generate-lookbook", tags=["Gemini"])
async def generate_lookbook(
    request: GenerateLookbookRequest,
    service: LookbookService = Depends(get_lookbook_service),
):
    """
    Generate the full-body and detail shots of a lookbook
    """
    logger.info(f"Received lookbook request with {len(request.product_images)} product images")
    try:
        images = await service.generate_lookbook(
            request.candidate_image,
            request.product_images,
            bg_image=request.bg_image,
            gender=request.gender,
            use_filter=request.use_filter,
        )
        return {"success": True, "images": [image.model_dump() for image in images]}
    except Exception as e:
        return _gemini_error(e, "generating lookbook")


@app.post("/api/gemini/chat", tags=["Gemini"])
async def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)):
    try:
        reply = await service.chat(request.message, request.history)
        return {"success": True, "reply": reply}
    except Exception as e:
        return _gemini_error(e, "in chat")


@app.post("/api/enhance/effect", tags=["Images"])
async def enhance_effect(
    request: EffectRequest,
    service: ProductEnhancementService = Depends(get_enhancement_service),
):
    """
    Render product photos with an effect preset
    """
    logger.info(f"Received effect request: {request.effect} ({request.pose_id or 'default layout'})")
    try:
        image = await service.apply_effect(
            request.images,
            request.effect,
            pose_id=request.pose_id,
            custom_background=request.custom_background,
        )
        return {"image": image}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error applying effect: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/enhance/batch", tags=["Images"], response_model=List[EnhancementResult])
async def enhance_batch(
    request: EffectBatchRequest,
    service: ProductEnhancementService = Depends(get_enhancement_service),
    config: Config = Depends(get_config),
):
    """
    Render every uploaded image once per pose. Each result reports done or error.
    """
    workflow = DetailPageWorkflow(service, max_uploads=config.MAX_UPLOAD_IMAGES)
    try:
        workflow.upload(request.images)
        return await workflow.run_enhancements(
            request.effect, pose_ids=request.pose_ids, custom_background=request.custom_background
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error running enhancement batch: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/enhance/color", tags=["Images"])
async def enhance_color(
    request: ColorChangeRequest,
    service: ProductEnhancementService = Depends(get_enhancement_service),
):
    try:
        image = await service.apply_color_change(
            request.image, color=request.color, color_reference=request.color_reference
        )
        return {"image": image}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error changing color: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/shoes/replace", tags=["Images"], response_model=List[ReplacementResult])
async def replace_shoes(
    request: ShoeReplaceRequest,
    service: ShoeReplacementService = Depends(get_shoe_replacement_service),
):
    """
    Replace the shoes in each model shot with the product. Failures are reported per image.
    """
    logger.info(f"Received shoe replacement request for {len(request.source_images)} images")
    try:
        return await service.batch_replace(request.source_images, request.product_image)
    except Exception as e:
        logger.error(f"Error replacing shoes: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/shoes/campaign", tags=["Images"])
async def shoe_campaign(
    request: ShoeCampaignRequest,
    service: ShoeReplacementService = Depends(get_shoe_replacement_service),
):
    try:
        image = await service.generate_campaign_image(
            request.source_image, request.product_images, request.color_settings
        )
        return {"image": image}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating campaign image: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/shoes/pose", tags=["Images"])
async def shoe_pose(
    request: ShoePoseRequest,
    service: ShoeReplacementService = Depends(get_shoe_replacement_service),
):
    try:
        image = await service.change_pose(request.source_image, request.pose_prompt)
        return {"image": image}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error changing pose: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/poses/batch", tags=["Poses"])
async def pose_batch(request: PoseBatchRequest, service: PoseService = Depends(get_pose_service)):
    """
    Generate new poses of the same model, skipping poses already used
    """
    try:
        results, used = await service.generate_pose_batch(
            request.image,
            request.count,
            request.shot_type,
            used_pose_ids=request.used_pose_ids,
            gender=request.gender,
        )
        return {"results": [r.model_dump() for r in results], "used_pose_ids": sorted(used)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating pose batch: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


async def run_lookbook_task(task_id: str, service: LookbookService, request: GenerateLookbookRequest):
    """Background body of /api/tasks/lookbook."""
    task_manager.update_task_status(task_id, task_manager.TASK_PROCESSING)
    try:
        images: List[LookbookImage] = await service.generate_lookbook(
            request.candidate_image,
            request.product_images,
            bg_image=request.bg_image,
            gender=request.gender,
            use_filter=request.use_filter,
            on_progress=lambda message: task_manager.add_task_log(task_id, message),
        )
        task_manager.update_task_status(
            task_id, task_manager.TASK_COMPLETED, result={"images": [image.model_dump() for image in images]}
        )
    except Exception as e:
        logger.error(f"Lookbook task {task_id} failed: {str(e)}")
        task_manager.update_task_status(task_id, task_manager.TASK_FAILED, error=str(e))


async def run_pose_task(task_id: str, service: PoseService, request: PoseBatchRequest):
    """Background body of /api/tasks/poses."""
    task_manager.update_task_status(task_id, task_manager.TASK_PROCESSING)

    def progress(current: int, total: int, result: PoseGenerationResult):
        task_manager.update_task_progress(task_id, current, total)

    try:
        results, used = await service.generate_pose_batch(
            request.image,
            request.count,
            request.shot_type,
            used_pose_ids=request.used_pose_ids,
            gender=request.gender,
            on_progress=progress,
        )
        task_manager.update_task_status(
            task_id,
            task_manager.TASK_COMPLETED,
            result={"results": [r.model_dump() for r in results], "used_pose_ids": sorted(used)},
        )
    except Exception as e:
        logger.error(f"Pose task {task_id} failed: {str(e)}")
        task_manager.update_task_status(task_id, task_manager.TASK_FAILED, error=str(e))


@app.post("/api/tasks/lookbook", tags=["Tasks"], status_code=202)
async def start_lookbook_task(
    request: GenerateLookbookRequest,
    background_tasks: BackgroundTasks,
    service: LookbookService = Depends(get_lookbook_service),
):
    """
    Start a lookbook in the background and return its task id
    """
    task_id = str(uuid.uuid4())
    task_manager.init_task(
        task_id,
        "lookbook",
        {"gender": request.gender, "product_images": len(request.product_images), "use_filter": request.use_filter},
    )
    background_tasks.add_task(run_lookbook_task, task_id, service, request)
    return {"task_id": task_id, "status": task_manager.TASK_RECEIVED}


@app.post("/api/tasks/poses", tags=["Tasks"], status_code=202)
async def start_pose_task(
    request: PoseBatchRequest,
    background_tasks: BackgroundTasks,
    service: PoseService = Depends(get_pose_service),
):
    task_id = str(uuid.uuid4())
    task_manager.init_task(task_id, "poses", {"count": request.count, "shot_type": request.shot_type})
    background_tasks.add_task(run_pose_task, task_id, service, request)
    return {"task_id": task_id, "status": task_manager.TASK_RECEIVED}


@app.get("/api/tasks/{task_id}", tags=["Tasks"])
async def get_task(task_id: str):
    task = task_manager.get_task_status(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task with ID {task_id} not found")
    return task


@app.get("/api/tasks", tags=["Tasks"])
async def list_tasks(
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[str] = Query(None, description="Filter tasks by status (received, processing, completed, failed)"),
):
    return task_manager.get_all_tasks_summary(status=status, limit=limit)


@app.get("/api/faces", tags=["Faces"])
def list_faces(
    gender: str = Query(..., description="m or w"),
    face_library: FaceLibraryService = Depends(get_face_library_service),
):
    try:
        faces = face_library.list_faces(gender)
        return {"success": True, "faces": faces, "count": len(faces)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing faces: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/faces/random", tags=["Faces"])
def random_faces(
    gender: str = Query(..., description="m or w"),
    wanted: int = Query(5, description="Number of faces, 1 to 50"),
    face_library: FaceLibraryService = Depends(get_face_library_service),
):
    try:
        faces = face_library.random_faces(gender, wanted)
        return {"success": True, "faces": faces, "count": len(faces)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error picking random faces: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/detail/sections", tags=["Detail Page"], response_model=List[Section])
async def detail_sections():
    return section_ops.default_sections()


@app.post("/api/detail/render", tags=["Detail Page"], response_model=List[PreviewItem])
async def detail_render(request: RenderDetailRequest):
    """
    Render the enabled sections in order as preview items
    """
    sections = request.sections if request.sections is not None else section_ops.default_sections()
    return html_generator.assemble_sections(sections, request.product_info, request.processed_images)


@app.post("/api/detail/export", tags=["Detail Page"], response_class=HTMLResponse)
async def detail_export(request: ExportDetailRequest):
    """
    Build the downloadable detail page from preview items
    """
    document = html_generator.generate_detail_page(request.items)
    return HTMLResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{html_generator.EXPORT_FILENAME}"'},
    )


@app.post("/api/detail/simple", tags=["Detail Page"], response_class=HTMLResponse)
async def detail_simple(request: SimpleDetailRequest):
    return HTMLResponse(content=html_generator.generate_simple_html(request.image_urls))


def run():
    """Run the FastAPI application"""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)


if __name__ == "__main__":
    run()
