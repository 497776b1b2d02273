"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from calorie_counter.adapters.json_file_store import JsonFileKeyValueStore
from calorie_counter.adapters.openai_estimation_client import OpenAIEstimationClient
from calorie_counter.adapters.supabase_kv_store import SupabaseKeyValueStore
from calorie_counter.config import Settings, parse_storage_backend
from calorie_counter.services.estimation import FoodEstimationService
from calorie_counter.services.export import EXPORT_DIR, ExportService
from calorie_counter.services.storage import FoodLogStore, KeyValueStore, ProfileStore
from calorie_counter.services.tracker import TrackerController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tracker: TrackerController
    export_service: ExportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = _build_store(resolved_settings)
    openai_client = OpenAIEstimationClient.create(resolved_settings.openai_api_key)
    estimation_service = FoodEstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    tracker = TrackerController(
        profile_store=ProfileStore(store),
        food_log_store=FoodLogStore(store),
        estimation_service=estimation_service,
        timezone=resolved_settings.timezone,
    )
    tracker.load()

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        tracker=tracker,
        export_service=ExportService(
            root=Path(resolved_settings.data_dir) / EXPORT_DIR
        ),
        close_resources=close_resources,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, namespace=settings.storage_namespace)
    return JsonFileKeyValueStore.create(settings.data_dir, settings.storage_namespace)
