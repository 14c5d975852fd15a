"""Shared fixtures: settings, a recording fake gateway, and a test client factory."""

import base64

import pytest
from fastapi.testclient import TestClient

from pantryscan.config import Settings
from pantryscan.main import create_app

RECEIPT_JSON = (
    '{"store": "Fresh Market", "date": "3/14/2024", "items": ['
    '{"name": "Large Eggs", "quantity": 12, "unit": "pieces", "price": 3.49, "category": "Dairy"}'
    '], "total": 3.49}'
)
MEAL_JSON = (
    '{"meal_name": "Omelette", "ingredients": ["eggs", "cheese"], '
    '"estimated_portions": {"eggs": 1.0, "cheese": 0.25}}'
)


class FakeGateway:
    """Stands in for OpenAIVisionGateway and records every call."""

    def __init__(self, content=RECEIPT_JSON, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def complete(self, prompt, image):
        self.calls.append((prompt, image))
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def valid_image():
    # syntactically valid base64, long enough to pass the guard
    return base64.b64encode(b"\xff\xd8\xff\xe0" + b"fake-jpeg-bytes" * 20).decode()


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(settings, gateway):
    return TestClient(create_app(settings, gateway))
