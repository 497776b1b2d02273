"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from calorie_counter.api.models import (
    AddFoodRequest,
    ComputedProfileRequest,
    ExportRequest,
    ManualProfileRequest,
)
from calorie_counter.app_logging import configure_logging
from calorie_counter.containers import AppContainer
from calorie_counter.domain.foods import FoodItem
from calorie_counter.domain.profile import UserProfile
from calorie_counter.domain.summary import DailySummary
from calorie_counter.services.errors import (
    ExportDestinationError,
    ExportError,
    FoodEstimationError,
    FoodLogSaveError,
    RequestInProgressError,
)
from calorie_counter.services.export import (
    CSV_MEDIA_TYPE,
    DAILY_LOG_FILENAME,
    FULL_HISTORY_FILENAME,
)
from calorie_counter.services.onboarding import (
    build_computed_profile,
    build_manual_profile,
)
from calorie_counter.services.tracker import TrackerController


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/screen")
    async def screen(request: Request) -> dict[str, str]:
        """Return which screen the app should show."""
        return {"screen": _tracker(request).screen.value}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the stored profile, if any."""
        profile = _tracker(request).state.profile
        return {"profile": _profile_payload(profile) if profile else None}

    @app.post("/profile/manual")
    async def manual_profile(
        body: ManualProfileRequest, request: Request
    ) -> dict[str, object]:
        """Finish onboarding with a typed-in calorie target."""
        profile = build_manual_profile(body.target)
        if profile is None:
            return {"status": "ignored"}
        _tracker(request).complete_onboarding(profile)
        return {"status": "ok", "profile": _profile_payload(profile)}

    @app.post("/profile/computed")
    async def computed_profile(
        body: ComputedProfileRequest, request: Request
    ) -> dict[str, object]:
        """Finish onboarding with a target computed from body metrics."""
        profile = build_computed_profile(
            body.weight, body.height, body.age, body.is_male, body.activity
        )
        if profile is None:
            return {"status": "ignored"}
        _tracker(request).complete_onboarding(profile)
        return {"status": "ok", "profile": _profile_payload(profile)}

    @app.delete("/profile")
    async def edit_profile(request: Request) -> dict[str, str]:
        """Clear the profile so onboarding starts over."""
        tracker = _tracker(request)
        tracker.edit_profile()
        return {"status": "ok", "screen": tracker.screen.value}

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return today's totals against the calorie target."""
        summary = _tracker(request).today_summary()
        if summary is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="onboarding required"
            )
        return _summary_payload(summary)

    @app.post("/foods", response_model=None)
    async def add_food(
        body: AddFoodRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate a food description and log the results."""
        tracker = _tracker(request)
        if tracker.state.profile is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="onboarding required"
            )
        image_bytes = _decode_image(body.image)
        if not body.description.strip() and image_bytes is None:
            return {"status": "ignored"}
        try:
            items = await tracker.add_food(
                body.description, body.meal_category, image_bytes
            )
        except RequestInProgressError as exc:
            return _notification(status.HTTP_409_CONFLICT, str(exc))
        except FoodEstimationError as exc:
            return _notification(
                status.HTTP_502_BAD_GATEWAY,
                _format_estimation_error(request.app.state.container, exc),
            )
        except FoodLogSaveError as exc:
            return _notification(
                status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error: {exc}"
            )
        logger.info(
            "Logged food entries",
            extra={"count": len(items), "meal_category": body.meal_category.value},
        )
        return {"status": "ok", "items": [_item_payload(item) for item in items]}

    @app.delete("/foods/{item_id}")
    async def delete_food(item_id: int, request: Request) -> dict[str, object]:
        """Delete an entry; deleting a missing id is a no-op."""
        removed = _tracker(request).delete_food(item_id)
        return {"status": "ok", "deleted": removed}

    @app.get("/history")
    async def history(request: Request) -> dict[str, object]:
        """Return all entries grouped by day, newest day first."""
        groups = _tracker(request).history()
        return {
            "days": [
                {"date": day, "items": [_item_payload(item) for item in items]}
                for day, items in groups
            ]
        }

    @app.post("/history/open")
    async def open_history(request: Request) -> dict[str, str]:
        tracker = _tracker(request)
        tracker.open_history()
        return {"screen": tracker.screen.value}

    @app.post("/history/close")
    async def close_history(request: Request) -> dict[str, str]:
        tracker = _tracker(request)
        tracker.close_history()
        return {"screen": tracker.screen.value}

    @app.get("/export/history.csv")
    async def export_history(request: Request) -> Response:
        """Download the full history as CSV."""
        return _csv_response(
            _tracker(request).export_full_history(), FULL_HISTORY_FILENAME
        )

    @app.get("/export/daily.csv")
    async def export_daily(request: Request) -> Response:
        """Download today's log as CSV."""
        return _csv_response(_tracker(request).export_daily_log(), DAILY_LOG_FILENAME)

    @app.post("/export", response_model=None)
    async def export_to_path(
        body: ExportRequest, request: Request
    ) -> dict[str, str] | JSONResponse:
        """Write an export to a destination path."""
        state_container: AppContainer = request.app.state.container
        tracker = state_container.tracker
        content = (
            tracker.export_daily_log()
            if body.kind == "daily"
            else tracker.export_full_history()
        )
        try:
            state_container.export_service.save(body.destination, content)
        except ExportDestinationError as exc:
            return _notification(status.HTTP_400_BAD_REQUEST, str(exc))
        except ExportError as exc:
            return _notification(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        message = (
            "Saved Successfully!" if body.kind == "daily" else "Full History Saved!"
        )
        return {"status": "ok", "message": message}

    return app


def _tracker(request: Request) -> TrackerController:
    state_container: AppContainer = request.app.state.container
    return state_container.tracker


def _decode_image(raw: str | None) -> bytes | None:
    if not raw:
        return None
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="image must be base64-encoded",
        ) from exc


def _notification(status_code: int, message: str) -> JSONResponse:
    """Return a transient user-facing error message."""
    return JSONResponse(
        status_code=status_code, content={"status": "error", "message": message}
    )


def _format_estimation_error(
    state_container: AppContainer, exc: FoodEstimationError
) -> str:
    """Return a user-facing estimation error with local debug info."""
    message = f"Error: {exc}"
    cause = exc.__cause__
    if state_container.settings.environment == "local" and cause is not None:
        return f"{message} (debug: {type(cause).__name__})"
    return message


def _csv_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return asdict(profile)


def _item_payload(item: FoodItem) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fat": item.fat,
        "meal_category": item.meal_category.value,
        "date": item.date_stamp,
    }


def _summary_payload(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.day,
        "calories": summary.calories,
        "protein_g": round(summary.protein_g, 1),
        "carbs_g": round(summary.carbs_g, 1),
        "fat_g": round(summary.fat_g, 1),
        "target_kcal": summary.target_kcal,
        "progress": summary.progress,
        "status": summary.status.value,
        "items": [_item_payload(item) for item in summary.items],
    }
