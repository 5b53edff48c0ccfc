"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from restock_validation.config import Settings
from restock_validation.containers import AppContainer
from restock_validation.domain.identity import Promoter
from restock_validation.domain.ocr import LabelExtract
from restock_validation.domain.session import SessionState
from restock_validation.services.ocr import LabelClient, LabelReader, PhotoClient
from restock_validation.services.scheduler import ScheduledTask, Scheduler
from restock_validation.services.session import (
    IdentityRepository,
    InspectionSessionService,
    SubmissionRepository,
    ValidationRepository,
)


@dataclass
class InMemoryIdentityRepository(IdentityRepository):
    """In-memory promoter directory for tests."""

    promoters: dict[str, Promoter] = field(
        default_factory=lambda: {"U1": Promoter(id="U1", name="Ana")}
    )
    error: Exception | None = None
    lookups: list[str] = field(default_factory=list)

    def get_promoter(self, token: str) -> Promoter | None:
        self.lookups.append(token)
        if self.error is not None:
            raise self.error
        return self.promoters.get(token)


@dataclass
class InMemoryValidationRepository(ValidationRepository):
    """In-memory validation record allocator for tests."""

    next_id: str | None = "V1"
    error: Exception | None = None
    created_for: list[str] = field(default_factory=list)

    def create_validation(self, user_id: str) -> str | None:
        self.created_for.append(user_id)
        if self.error is not None:
            raise self.error
        return self.next_id


@dataclass
class InMemorySubmissionRepository(SubmissionRepository):
    """Records submitted sessions for tests."""

    submissions: list[tuple[str, str, SessionState]] = field(default_factory=list)
    error: Exception | None = None

    def submit(self, user_id: str, submission_id: str, session: SessionState) -> None:
        if self.error is not None:
            raise self.error
        self.submissions.append((user_id, submission_id, session))


@dataclass
class ManualTask(ScheduledTask):
    """Scheduled callback that only runs when the test says so."""

    delay_seconds: float
    callback: Callable[[], None]
    cancelled: bool = False
    ran: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(Scheduler):
    """Scheduler that collects tasks instead of running them."""

    tasks: list[ManualTask] = field(default_factory=list)

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        task = ManualTask(delay_seconds=delay_seconds, callback=callback)
        self.tasks.append(task)
        return task

    def run_pending(self) -> None:
        for task in self.tasks:
            if not task.cancelled and not task.ran:
                task.ran = True
                task.callback()


@dataclass
class FakeLabelClient(LabelClient):
    """Fake label client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"expiry_date": "12/10/2026", "lot_code": "L123"}
    )
    error: Exception | None = None
    seen_urls: list[str] = field(default_factory=list)
    during_read: Callable[[], None] | None = None

    async def read_label(self, image_data_url: str) -> LabelExtract:
        self.seen_urls.append(image_data_url)
        if self.during_read is not None:
            self.during_read()
        if self.error is not None:
            raise self.error
        return LabelExtract.model_validate(self.payload)


@dataclass
class FakePhotoClient(PhotoClient):
    """Fake photo client that returns static bytes."""

    content: bytes = b"\x89PNG\r\n\x1a\nfake-image"
    downloaded: list[str] = field(default_factory=list)

    async def download_photo_bytes(self, url: str) -> bytes:
        self.downloaded.append(url)
        return self.content


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def identity_repository() -> InMemoryIdentityRepository:
    return InMemoryIdentityRepository()


@pytest.fixture
def validation_repository() -> InMemoryValidationRepository:
    return InMemoryValidationRepository()


@pytest.fixture
def submission_repository() -> InMemorySubmissionRepository:
    return InMemorySubmissionRepository()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def label_client() -> FakeLabelClient:
    return FakeLabelClient()


@pytest.fixture
def photo_client() -> FakePhotoClient:
    return FakePhotoClient()


@pytest.fixture
def session_service(  # noqa: PLR0913
    identity_repository: InMemoryIdentityRepository,
    validation_repository: InMemoryValidationRepository,
    submission_repository: InMemorySubmissionRepository,
    scheduler: ManualScheduler,
    label_client: FakeLabelClient,
    photo_client: FakePhotoClient,
) -> InspectionSessionService:
    return InspectionSessionService(
        identity_repository=identity_repository,
        validation_repository=validation_repository,
        submission_repository=submission_repository,
        scheduler=scheduler,
        label_reader=LabelReader(client=label_client, photo_client=photo_client),
    )


@pytest.fixture
def container(
    settings: Settings, session_service: InspectionSessionService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_service=session_service,
        close_resources=close_resources,
    )
