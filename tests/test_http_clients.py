"""Tests for the OpenAI estimation adapter."""

import asyncio

import pytest

from calorie_counter.adapters.openai_estimation_client import OpenAIEstimationClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "Egg,135,12.5g,1.2g,10g") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_client_sends_text_and_image() -> None:
    fake = _FakeOpenAI()
    client = OpenAIEstimationClient(client=fake)

    result = asyncio.run(
        client.estimate(
            model="gpt-5.2",
            reasoning_effort="high",
            store=False,
            prompt="Estimate",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
        )
    )

    assert result == "Egg,135,12.5g,1.2g,10g"
    payload = fake.responses.last_payload
    assert payload["reasoning"] == {"effort": "high"}
    content = payload["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "Estimate"}
    assert content[1]["type"] == "input_image"


def test_openai_client_text_only_request() -> None:
    fake = _FakeOpenAI()
    client = OpenAIEstimationClient(client=fake)

    asyncio.run(
        client.estimate(
            model="gpt-5.2",
            reasoning_effort=None,
            store=False,
            prompt="Estimate",
            image_data_url=None,
        )
    )

    payload = fake.responses.last_payload
    assert "reasoning" not in payload
    assert len(payload["input"][0]["content"]) == 1


def test_openai_client_rejects_empty_output() -> None:
    client = OpenAIEstimationClient(client=_FakeOpenAI(output_text=""))

    with pytest.raises(RuntimeError, match="empty response"):
        asyncio.run(
            client.estimate(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                prompt="Estimate",
                image_data_url=None,
            )
        )
