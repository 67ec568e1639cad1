# backend/boothmedia/routers/capture_routers.py
"""
Capture submission endpoint.

The kiosk posts a capture and immediately gets a job id back; the result is
only ever reported through the notifications feed.
"""

from fastapi import APIRouter, HTTPException, status
from loguru import logger

from ..dependencies import RuntimeDep
from ..models.api_model import CaptureAccepted, CaptureSubmission

router = APIRouter()


@router.post(
    "/captures",
    response_model=CaptureAccepted,
    response_model_by_alias=True,
    status_code=status.HTTP_202_ACCEPTED,
)
async def submit_capture(submission: CaptureSubmission, runtime: RuntimeDep):
    """Queue a capture for background generation"""
    if not submission.image.strip():
        raise HTTPException(status_code=400, detail="No image provided")

    concept = runtime.booth_settings.find_concept(submission.concept_id)
    if concept is None:
        raise HTTPException(
            status_code=404, detail=f"Concept {submission.concept_id} not found"
        )

    job_id = runtime.orchestrator.submit(submission.image, concept)
    logger.info(f"Accepted capture as job {job_id}")
    return CaptureAccepted(job_id=job_id)
