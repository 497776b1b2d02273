"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from calorie_counter.config import Settings
from calorie_counter.containers import AppContainer
from calorie_counter.domain.profile import UserProfile
from calorie_counter.services.estimation import (
    FoodEstimationClient,
    FoodEstimationService,
)
from calorie_counter.services.export import EXPORT_DIR, ExportService
from calorie_counter.services.storage import (
    FoodLogStore,
    KeyValueStore,
    ProfileStore,
)
from calorie_counter.services.tracker import TrackerController


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: int = 0
    write_error: Exception | None = None

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.values[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FakeEstimationClient(FoodEstimationClient):
    """Fake estimation client returning a fixed answer."""

    response: str = "Fried Egg,135,12.5g,1.2g,10g\n2 Porotta,450,10g,60g,15g"
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_data_url: str | None,
    ) -> str:
        self.calls.append({"prompt": prompt, "image_data_url": image_data_url})
        if self.error is not None:
            raise self.error
        return self.response


SAMPLE_PROFILE = UserProfile(
    weight_kg=70.0,
    height_cm=175.0,
    age=25,
    is_male=True,
    activity_factor=1.2,
    daily_calorie_target_kcal=2000,
)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        data_dir=str(tmp_path),
        environment="test",
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def estimation_client() -> FakeEstimationClient:
    return FakeEstimationClient()


@pytest.fixture
def tracker(
    kv_store: InMemoryKeyValueStore, estimation_client: FakeEstimationClient
) -> TrackerController:
    controller = TrackerController(
        profile_store=ProfileStore(kv_store),
        food_log_store=FoodLogStore(kv_store),
        estimation_service=FoodEstimationService(
            client=estimation_client,
            model="gpt-5.2",
            reasoning_effort=None,
            store=False,
        ),
        timezone="UTC",
    )
    controller.load()
    return controller


@pytest.fixture
def container(settings: Settings, tracker: TrackerController) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        tracker=tracker,
        export_service=ExportService(root=Path(settings.data_dir) / EXPORT_DIR),
        close_resources=close_resources,
    )
