# tests/test_api_profile.py

import pytest
from fastapi.testclient import TestClient

from billbook.api.v1.deps import get_current_profile, get_profile_repository
from billbook.infrastructure.db.repositories.base import StoreResult
from billbook.main import app


class InMemoryProfiles:
    def __init__(self):
        self.saved = None

    async def save(self, profile):
        self.saved = profile
        return StoreResult.ok(profile)


@pytest.fixture
def profiles():
    return InMemoryProfiles()


@pytest.fixture
def client(profiles, gujarat_profile):
    app.dependency_overrides[get_current_profile] = lambda: gujarat_profile
    app.dependency_overrides[get_profile_repository] = lambda: profiles
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_get_profile(client):
    data = client.get("/api/v1/profile").json()["data"]
    assert data["legal_name"] == "Acme Traders"
    assert data["effective_prefix"] == "ACME"


def test_update_profile_keeps_owner_and_email(client, profiles):
    body = {
        "legal_name": "Sharma Electricals",
        "registration_state": "Rajasthan",
        "tax_id": "08aabcu9603r1zm",
        "pan_number": "aabcu9603r",
        "invoice_prefix": "",
        "bank_details": {"bank_name": "HDFC", "account_number": "123", "ifsc_code": "HDFC0000123"},
    }
    resp = client.put("/api/v1/profile", json=body)
    assert resp.status_code == 200, resp.text
    assert profiles.saved.owner_id == "owner-1"
    assert profiles.saved.email == "accounts@acme.example"
    assert profiles.saved.tax_id == "08AABCU9603R1ZM"


def test_malformed_prefix_is_rejected(client):
    resp = client.put("/api/v1/profile", json={"invoice_prefix": "bad-prefix"})
    assert resp.status_code == 422


def test_invalid_gstin_is_rejected(client):
    resp = client.put("/api/v1/profile", json={"tax_id": "12345"})
    assert resp.status_code == 422


def test_blank_prefix_falls_back_to_business_name(client):
    data = client.put("/api/v1/profile", json={"legal_name": "Sharma Electricals", "invoice_prefix": ""}).json()["data"]
    assert data["invoice_prefix"] == ""
    assert data["effective_prefix"] == "SHAR"
