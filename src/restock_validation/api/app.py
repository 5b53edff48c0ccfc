"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from restock_validation.api.models import (
    FinalPhotoRequest,
    LoginRequest,
    LotFields,
    ObservationRequest,
    SkipRequest,
    StoreSelectionRequest,
    ValidationSubmission,
)
from restock_validation.app_logging import configure_logging
from restock_validation.containers import AppContainer
from restock_validation.domain.session import UserMetadata
from restock_validation.services.session import InspectionSessionService, Notification


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def get_session(request: Request) -> dict[str, object]:
        """Return the current session snapshot."""
        return _respond(_service(request))

    @app.post("/session/login")
    async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
        service = _service(request)
        metadata = (
            UserMetadata(**payload.metadata.model_dump()) if payload.metadata else None
        )
        return _respond(service, service.login(payload.token, metadata))

    @app.post("/session/store")
    async def select_store(
        payload: StoreSelectionRequest, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        return _respond(service, service.select_store(payload.city, payload.store))

    @app.post("/session/validation")
    async def complete_validation(
        payload: ValidationSubmission, request: Request
    ) -> dict[str, object]:
        """Submit the current section and move on."""
        service = _service(request)
        service.complete_validation(payload.model_dump(exclude_unset=True))
        return _respond(service)

    @app.post("/session/back")
    async def go_back(request: Request) -> dict[str, object]:
        service = _service(request)
        service.go_back()
        return _respond(service)

    @app.post("/session/reset")
    async def reset(request: Request) -> dict[str, object]:
        """Abandon the current run and return to login."""
        service = _service(request)
        service.reset()
        return _respond(service)

    @app.patch("/session/sections/{section_key}/lots/{lot_id}")
    async def change_lot(
        section_key: str, lot_id: str, payload: LotFields, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        service.change_lot(section_key, lot_id, payload.model_dump(exclude_unset=True))
        return _respond(service)

    @app.delete("/session/sections/{section_key}/lots/{lot_id}")
    async def remove_lot(
        section_key: str, lot_id: str, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        service.remove_lot(section_key, lot_id)
        return _respond(service)

    @app.post("/session/sections/{section_key}/lots/{lot_id}/ocr")
    async def read_lot_label(
        section_key: str, lot_id: str, request: Request
    ) -> dict[str, object]:
        """Fill expiry date and lot code from the lot photo."""
        service = _service(request)
        notification = await service.read_lot_label(section_key, lot_id)
        return _respond(service, notification)

    @app.put("/session/sections/{section_key}/observation")
    async def change_observation(
        section_key: str, payload: ObservationRequest, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        service.change_observation(section_key, payload.observation)
        return _respond(service)

    @app.put("/session/sections/{section_key}/final-photo")
    async def change_final_photo(
        section_key: str, payload: FinalPhotoRequest, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        service.change_final_photo(section_key, payload.photo)
        return _respond(service)

    @app.put("/session/sections/{section_key}/skipped")
    async def change_skipped(
        section_key: str, payload: SkipRequest, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        service.change_skipped(section_key, payload.skipped)
        return _respond(service)

    @app.post("/session/checkout")
    async def checkout(request: Request) -> dict[str, object]:
        """Submit the collected data and complete the run."""
        service = _service(request)
        return _respond(service, service.finish())

    return app


def _service(request: Request) -> InspectionSessionService:
    state_container: AppContainer = request.app.state.container
    return state_container.session_service


def _respond(
    service: InspectionSessionService, notification: Notification | None = None
) -> dict[str, object]:
    """Build the common session response body."""
    return {
        "status": "error" if notification else "ok",
        "notification": notification.to_dict() if notification else None,
        "session": service.session.to_dict(),
    }
