"""
Shared fixtures for the Gemini media server tests.

No test talks to Google.  GeminiClient accepts any object shaped like
genai.Client, so the tests hand it a FakeGenai that records every
generate_content call and replies with real google.genai response types.
"""

import os
import sys
from typing import Any, List

import pytest
from google.genai import types

# Ensure project root is on sys.path so 'core' and 'tools' imports resolve
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from core.gemini_client import GeminiClient  # noqa: E402
from core.models import GeminiConfig  # noqa: E402
from tools.mcp_server import MediaMcpServer  # noqa: E402


# -----------------------------------------------------------------------------
# Response builders
# -----------------------------------------------------------------------------

def text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def image_response(data: bytes, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part(text="Here is your image."),
                        types.Part.from_bytes(data=data, mime_type=mime_type),
                    ],
                )
            )
        ]
    )


def empty_response() -> types.GenerateContentResponse:
    return types.GenerateContentResponse(candidates=[])


# -----------------------------------------------------------------------------
# Fake genai.Client
# -----------------------------------------------------------------------------

class FakeModels:
    def __init__(self) -> None:
        self.responses: List[Any] = []
        self.calls: List[dict] = []

    def generate_content(self, model: str, contents: list, **kwargs: Any):
        self.calls.append({"model": model, "contents": contents})
        if not self.responses:
            raise AssertionError("FakeModels got an unexpected generate_content call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGenai:
    """Stands in for google.genai.Client; queue replies on .models.responses."""

    def __init__(self) -> None:
        self.models = FakeModels()

    def reply(self, *responses: Any) -> "FakeGenai":
        self.models.responses.extend(responses)
        return self


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path) -> str:
    # Deliberately not created; the client must create it on demand.
    return str(tmp_path / "gemini_out")


@pytest.fixture
def config(output_dir) -> GeminiConfig:
    return GeminiConfig(
        api_key="test-key",
        model="text-model",
        image_model="image-model",
        output_dir=output_dir,
    )


@pytest.fixture
def fake_genai() -> FakeGenai:
    return FakeGenai()


@pytest.fixture
def client(config, fake_genai) -> GeminiClient:
    return GeminiClient(config, genai_client=fake_genai)


@pytest.fixture
def server(client) -> MediaMcpServer:
    return MediaMcpServer(client)


@pytest.fixture
def media_file(tmp_path):
    """Factory: write bytes to <tmp>/inputs/<name> and return the path."""
    inputs = tmp_path / "inputs"
    inputs.mkdir()

    def _make(name: str, data: bytes = b"\x89PNG fake image bytes") -> str:
        path = inputs / name
        path.write_bytes(data)
        return str(path)

    return _make
