# backend/boothmedia/workers/job_orchestrator.py
"""
Background Job Orchestrator - capture to uploaded composite.

Each submitted capture becomes one asyncio task running the pipeline:

1. Upload the raw capture to the originals folder (best-effort, optional)
2. Generate the AI image for the selected concept
3. Download the generated image
4. Composite it with the branding overlay at the output resolution
5. Upload the composite to the event folder

The kiosk gets the job id back immediately; progress is only visible through
the job's Notification, which goes processing -> completed | failed and then
expires. Jobs share nothing but the NotificationRegistry, and each job writes
only its own entry.

Blocking calls (HTTP via requests, Pillow) run in the default executor so the
event loop stays responsive. There is no concurrency limit: every submission
is accepted.
"""

import asyncio
from typing import Callable, Dict, Optional, Set, Tuple

import requests

from ..constants import ORIGINAL_CAPTURE_CONCEPT_NAME
from ..enums import NotificationStatus
from ..exceptions import UploadError, UpstreamError
from ..models.concept_model import Concept
from ..models.job_model import Job
from ..models.notification_model import Notification
from ..models.settings_model import BoothSettings
from ..models.upload_model import UploadMetadata
from ..services.apps_script_client import AppsScriptClient
from ..services.compositor import ImageCompositor
from ..services.generation.ark_client import ArkClient
from ..services.notification_registry import NotificationRegistry
from ..utils.image_refs import decode_image_reference, guess_image_mime
from .base_worker import BaseWorker


class JobOrchestrator(BaseWorker):
    """Runs background generation jobs and reports them as notifications."""

    def __init__(
        self,
        registry: NotificationRegistry,
        ark_client: ArkClient,
        compositor: ImageCompositor,
        storage: AppsScriptClient,
        settings_provider: Callable[[], BoothSettings],
        default_image_model: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            registry: Shared notification collection
            ark_client: Upstream generation client
            compositor: Overlay compositor
            storage: Remote storage client
            settings_provider: Returns the current booth settings snapshot
            default_image_model: Model used when settings do not name one
            timeout: Timeout for downloading generated images
            session: Session used to download generated images
        """
        super().__init__(name="JobOrchestrator")
        self.registry = registry
        self.ark_client = ark_client
        self.compositor = compositor
        self.storage = storage
        self.settings_provider = settings_provider
        self.default_image_model = default_image_model
        self.timeout = timeout
        self.session = session or requests.Session()

        self._tasks: Set[asyncio.Task] = set()
        self._stats: Dict[str, int] = {"submitted": 0, "completed": 0, "failed": 0}

    async def initialize(self) -> None:
        self.log_info("Ready to accept captures")

    async def cleanup(self) -> None:
        # In-flight jobs are left to finish; their calls are not aborted.
        if self._tasks:
            self.log_info(f"Stopping with {len(self._tasks)} job(s) still in flight")

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def submit(self, image: str, concept: Concept) -> str:
        """
        Accept a capture for background processing.

        Must be called from the event loop thread. Returns immediately.

        Args:
            image: Captured image (data-URI, bare base64 or URL)
            concept: Selected concept

        Returns:
            The new job id
        """
        job = Job(source_image=image, concept=concept, settings=self.settings_provider())

        self.registry.add(
            Notification(
                id=job.id,
                concept_name=concept.name,
                thumbnail=concept.thumbnail,
                status=NotificationStatus.PROCESSING,
            )
        )

        task = asyncio.get_running_loop().create_task(
            self._process_job(job), name=f"job-{job.id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self._stats["submitted"] += 1
        self.log_info(f"Job {job.id} submitted (concept='{concept.name}')")
        return job.id

    async def _process_job(self, job: Job) -> None:
        try:
            original_id, original_missing = await self._upload_original(job)

            result_url = await self.run_in_executor(
                self.ark_client.generate,
                [job.source_image, *job.concept.reference_images],
                job.concept.prompt,
                job.settings.image_model or self.default_image_model,
            )
            self.log_debug(f"Job {job.id} generated {result_url[:80]}")

            generated = await self.run_in_executor(self._download_result, result_url)

            width, height = job.settings.output_dimensions()
            final_image = await self.run_in_executor(
                self.compositor.compose,
                generated,
                job.settings.overlay_image,
                width,
                height,
            )

            metadata = UploadMetadata(
                concept_name=job.concept.name,
                event_name=job.settings.event_name,
                event_id=job.settings.active_event_id,
                folder_id=job.settings.folder_id,
                original_id=original_id,
            )
            result = await self.run_in_executor(
                self.storage.upload, final_image, metadata, guess_image_mime(final_image)
            )
            if not result.ok:
                raise UploadError(result.error or "Upload Failed")

        except Exception as e:
            self.log_error(f"Background process failed for job {job.id}", e)
            self._finish(job.id, NotificationStatus.FAILED)
            return

        self._finish(job.id, NotificationStatus.COMPLETED, original_missing=original_missing)

    async def _upload_original(self, job: Job) -> Tuple[Optional[str], bool]:
        """
        Store the raw capture if an originals folder is configured.

        Never raises. Returns (original id, whether the original is missing).
        """
        if not job.settings.has_original_destination:
            return None, False

        try:
            raw = decode_image_reference(job.source_image)
            metadata = UploadMetadata(
                concept_name=ORIGINAL_CAPTURE_CONCEPT_NAME,
                event_name=job.settings.event_name,
                event_id=job.settings.active_event_id,
                folder_id=job.settings.original_folder_id,
                skip_gallery=True,
            )
            result = await self.run_in_executor(
                self.storage.upload, raw, metadata, guess_image_mime(raw)
            )
        except Exception as e:
            self.log_warning(f"Original upload failed for job {job.id}: {e}")
            return None, True

        if not result.ok or not result.id:
            self.log_warning(f"Original upload rejected for job {job.id}")
            return None, True
        return result.id, False

    def _download_result(self, url: str) -> bytes:
        if url.startswith("data:"):
            return decode_image_reference(url)

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamError(None, str(e), service="result-download") from e
        if not response.ok:
            raise UpstreamError(response.status_code, response.text[:200], service="result-download")
        return response.content

    def _finish(self, job_id: str, status: NotificationStatus, **changes) -> None:
        self._stats[status.value] += 1
        if self.registry.update(job_id, status, **changes):
            self.registry.schedule_expire(job_id)
        else:
            self.log_debug(f"Notification for job {job_id} no longer tracked")
        self.log_info(f"Job {job_id} {status.value}")

    def get_status(self) -> Dict:
        status = super().get_status()
        status.update(self._stats)
        status["in_flight"] = self.in_flight
        return status
