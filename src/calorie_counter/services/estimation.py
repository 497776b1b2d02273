"""Food estimation service using LLMs."""

import base64
from dataclasses import dataclass
from typing import Protocol

PROMPT_TEMPLATE = """You are a nutritionist.
The user provided this description: "{description}".
If an image is attached, identify the food. If the user gives context \
(e.g., "ate half"), adjust the calories/macros accordingly!
Estimate Calories, Protein(g), Carbs(g), and Fat(g).
Output strictly in this CSV format per line: Name,Calories,Protein,Carbs,Fat
Example: 2 Porotta,450,10g,60g,15g
No headers. No markdown."""


class FoodEstimationClient(Protocol):
    """Interface for text-out LLM calls with an optional image."""

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_data_url: str | None,
    ) -> str:
        """Return the model's plain-text answer."""


@dataclass
class FoodEstimationService:
    """Service that builds the estimation prompt and calls the model."""

    client: FoodEstimationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate(self, description: str, image_bytes: bytes | None = None) -> str:
        """Return raw CSV-like estimate lines for a food description."""
        data_url = _to_data_url(image_bytes) if image_bytes else None
        return await self.client.estimate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=build_prompt(description),
            image_data_url=data_url,
        )


def build_prompt(description: str) -> str:
    """Embed the user's description in the fixed estimation prompt."""
    return PROMPT_TEMPLATE.format(description=description.strip())


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
