# backend/boothmedia/routers/video_routers.py
"""
Video generation endpoint.

Starts an upstream image-to-video task and, when the photo lives in Drive,
registers the task with the Apps Script queue so the tick worker can pick up
its result. The endpoint only starts the task; it never waits for the video.
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from ..constants import ARK_DEFAULT_VIDEO_PROMPT, ARK_DEFAULT_VIDEO_RESOLUTION
from ..dependencies import RuntimeDep, SettingsDep
from ..exceptions import BoothMediaError, UpstreamError, ValidationError
from ..models.api_model import VideoGenerationRequest, VideoGenerationResponse
from ..services.apps_script_client import AppsScriptClient
from ..utils.image_refs import get_drive_download_link

router = APIRouter()


def assert_video_model(model: str, allowed_prefixes) -> None:
    if not any(model.startswith(prefix) for prefix in allowed_prefixes):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid video model '{model}'. Allowed prefixes: {', '.join(allowed_prefixes)}",
        )


def register_video_task(
    client: AppsScriptClient, photo_id: str, task_id: str, video_model: str
) -> None:
    """Fire-and-forget queue registration. Failures are only logged."""
    try:
        client.update_video_status(photo_id, task_id, video_model)
    except Exception as e:
        logger.error(f"Failed to register video task {task_id} with the queue: {e}")


@router.post(
    "/video/generate",
    response_model=VideoGenerationResponse,
    response_model_by_alias=True,
)
async def generate_video(
    request: VideoGenerationRequest,
    background_tasks: BackgroundTasks,
    runtime: RuntimeDep,
    settings: SettingsDep,
):
    """Start an image-to-video generation task"""
    selected_model = request.model or settings.video_model
    assert_video_model(selected_model, settings.video_model_prefix_list)

    logger.info(f"[API Video] Starting task with model: {selected_model}")

    if request.drive_file_id:
        input_image_url = get_drive_download_link(request.drive_file_id)
    else:
        input_image_url = request.image_base64 or ""

    if not input_image_url:
        raise HTTPException(
            status_code=400, detail="No input image provided (driveFileId required)"
        )

    try:
        task_id = await run_in_threadpool(
            runtime.ark_client.start_video_task,
            selected_model,
            request.prompt or ARK_DEFAULT_VIDEO_PROMPT,
            input_image_url,
            resolution=request.resolution or ARK_DEFAULT_VIDEO_RESOLUTION,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        logger.error(f"[API Video] Error: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except BoothMediaError as e:
        logger.error(f"[API Video] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"[API Video] Unexpected error: {e}")
        raise HTTPException(status_code=500, detail="Failed to start video generation")

    logger.info(f"[API Video] Task Started: {task_id}")

    if runtime.apps_script.configured and request.drive_file_id:
        background_tasks.add_task(
            register_video_task,
            runtime.apps_script,
            request.drive_file_id,
            task_id,
            selected_model,
        )

    return VideoGenerationResponse(task_id=task_id)
