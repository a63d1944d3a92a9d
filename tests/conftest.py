import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from checkout_api.config import Settings
from checkout_api.app_setup.factory import create_app


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakePreferenceClient:
    """Remplace MercadoPagoPreferenceClient: enregistre les appels, renvoie ou lève ce qu'on lui dit."""

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[BaseException] = None):
        self.response = response if response is not None else {
            "id": "123-pref",
            "init_point": "https://pay.example/abc",
            "sandbox_init_point": "https://sandbox.pay.example/abc",
        }
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create(self, preference: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(preference)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mp_access_token="TEST-0000000000-token",
        base_url="https://tienda.example",
        rate_limit_disabled=True,
    )


@pytest.fixture
def preference_client() -> FakePreferenceClient:
    return FakePreferenceClient()


@pytest.fixture
def app(settings, preference_client):
    return create_app(settings=settings, preference_client=preference_client)


@pytest.fixture
def make_client(settings):
    """Fabrique (TestClient, fake) avec un client Mercado Pago configurable."""
    opened: List[TestClient] = []

    def _make(response=None, error=None, settings_override: Optional[Settings] = None):
        fake = FakePreferenceClient(response=response, error=error)
        c = TestClient(create_app(settings=settings_override or settings, preference_client=fake))
        c.__enter__()
        opened.append(c)
        return c, fake

    yield _make
    for c in opened:
        c.__exit__(None, None, None)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
