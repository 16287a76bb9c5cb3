import os
import tempfile
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    # Cheap password hashing and a throwaway upload directory
    os.environ.setdefault("BCRYPT_ROUNDS", "4")
    os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="storefront-uploads-"))
    os.environ.pop("STRIPE_SECRET_KEY", None)

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def fake_gateway():
    """Every test talks to a fresh in-memory payment gateway."""
    from storefront.payments.gateway import reset_gateway, set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)

    yield gateway

    reset_gateway()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared storefront fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def category_id():
    from protean import current_domain

    from storefront.catalogue.category.management import CreateCategory

    return current_domain.process(CreateCategory(name="Ceramics"), asynchronous=False)


@pytest.fixture()
def make_product(category_id):
    """Factory creating products in the shared category."""
    from protean import current_domain

    from storefront.catalogue.product.management import CreateProduct

    def _make(name="Stoneware Mug", price=24.0, quantity=10, **overrides):
        fields = {
            "name": name,
            "description": f"{name} from the studio",
            "price": price,
            "quantity": quantity,
            "category_id": category_id,
        }
        fields.update(overrides)
        return current_domain.process(CreateProduct(**fields), asynchronous=False)

    return _make


@pytest.fixture()
def make_user():
    """Factory registering accounts; returns the user id."""
    from protean import current_domain

    from storefront.identity.user.registration import RegisterUser

    def _make(email="shopper@example.com", password="s3cret-pass", name="Jane Doe", role="USER"):
        return current_domain.process(
            RegisterUser(email=email, password=password, name=name, role=role),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from storefront.web import build_app

    return TestClient(build_app())


@pytest.fixture()
def auth_headers():
    """Build an ``Authorization`` header for a stored user id."""
    from protean import current_domain

    from storefront.identity.security import issue_token
    from storefront.identity.user.user import User

    def _headers(user_id):
        user = current_domain.repository_for(User).get(user_id)
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _headers


@pytest.fixture()
def shopper(make_user, auth_headers):
    user_id = make_user()
    return {"id": user_id, "headers": auth_headers(user_id)}


@pytest.fixture()
def admin(make_user, auth_headers):
    user_id = make_user(email="admin@example.com", name="Shop Admin", role="ADMIN")
    return {"id": user_id, "headers": auth_headers(user_id)}
