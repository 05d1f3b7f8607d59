from __future__ import annotations

from typing import Any

import boto3
import pytest
from botocore.config import Config
from fastapi.testclient import TestClient

from blogsphere.core.errors import ProviderError
from blogsphere.core.federated import get_identity_verifier
from blogsphere.main import app
from blogsphere.services.uploads import UploadBroker, get_upload_broker


PASSWORD = "Secret12"


class FakeVerifier:
    """Identity provider double: only tokens registered up front verify."""

    def __init__(self) -> None:
        self.tokens: dict[str, dict[str, Any]] = {}

    def register(self, token: str, **claims: Any) -> None:
        self.tokens[token] = claims

    def verify(self, token: str) -> dict[str, Any]:
        if token not in self.tokens:
            raise ProviderError("Failed to authenticate you with google. Try with some other google account")
        return self.tokens[token]


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def upload_broker() -> UploadBroker:
    s3 = boto3.client(
        "s3",
        region_name="ap-south-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )
    return UploadBroker(s3=s3, bucket="test-bucket", expires=1000)


@pytest.fixture
def client(monkeypatch, verifier, upload_broker):
    monkeypatch.setenv("USE_FAKE_REDIS", "1")
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    app.dependency_overrides[get_upload_broker] = lambda: upload_broker
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def signup(client: TestClient, fullname: str, email: str, password: str = PASSWORD) -> dict[str, Any]:
    r = client.post("/signup", json={"fullname": fullname, "email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def blog_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "A day in the hills",
        "des": "Notes from a long walk",
        "banner": "https://cdn.example.com/banner.jpeg",
        "tags": ["Travel"],
        "content": {"time": 1700000000, "blocks": [{"type": "paragraph", "data": {"text": "We walked."}}]},
        "draft": False,
    }
    payload.update(overrides)
    return payload


def publish(client: TestClient, token: str, **overrides: Any) -> str:
    r = client.post("/create-blog", json=blog_payload(**overrides), headers=auth(token))
    assert r.status_code == 200, r.text
    return r.json()["id"]


@pytest.fixture
def alice(client) -> dict[str, Any]:
    return signup(client, "Alice Liddell", "alice@example.com")


@pytest.fixture
def bob(client) -> dict[str, Any]:
    return signup(client, "Bob Builder", "bob@example.com")
