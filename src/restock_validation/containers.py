"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from restock_validation.adapters.openai_label_client import OpenAILabelClient
from restock_validation.adapters.photo_client import HttpxPhotoClient
from restock_validation.adapters.supabase_identity_repository import (
    SupabaseIdentityRepository,
)
from restock_validation.adapters.supabase_submission_repository import (
    SupabaseSubmissionRepository,
)
from restock_validation.adapters.supabase_validation_repository import (
    SupabaseValidationRepository,
)
from restock_validation.config import Settings
from restock_validation.services.ocr import LabelReader
from restock_validation.services.scheduler import AsyncioScheduler
from restock_validation.services.session import InspectionSessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: InspectionSessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    identity_repository = SupabaseIdentityRepository(
        supabase_client, table=resolved_settings.promoters_table
    )
    validation_repository = SupabaseValidationRepository(
        supabase_client, table=resolved_settings.validations_table
    )
    submission_repository = SupabaseSubmissionRepository(
        supabase_client,
        validations_table=resolved_settings.validations_table,
        sections_table=resolved_settings.sections_table,
    )
    photo_client = HttpxPhotoClient.create()
    label_client = OpenAILabelClient.create(
        resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    label_reader = LabelReader(client=label_client, photo_client=photo_client)
    session_service = InspectionSessionService(
        identity_repository=identity_repository,
        validation_repository=validation_repository,
        submission_repository=submission_repository,
        scheduler=AsyncioScheduler(),
        label_reader=label_reader,
        reset_delay_seconds=resolved_settings.reset_delay_seconds,
        debug_errors=resolved_settings.environment == "local",
    )

    async def close_resources() -> None:
        await photo_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        close_resources=close_resources,
    )
