import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sweet_moment.dependencies import get_away_mode, get_engine, get_product_client, get_store
from sweet_moment.main import app
from sweet_moment.models import Base
from sweet_moment.pricing import PricingEngine
from sweet_moment.schemas.settings import AwayModeSettings
from sweet_moment.services.cart import CartStore
from sweet_moment.services.currency import NormalizationPolicy
from sweet_moment.services.diagnostics import DiagnosticsRecorder
from sweet_moment.services.storage import MemoryStorage, SqlStorage
from tests.helpers import StubProductClient, make_product, make_product_data


@pytest.fixture
def recorder():
    """Diagnostics recorder that keeps every event for assertions."""
    return DiagnosticsRecorder()


@pytest.fixture
def engine(recorder):
    return PricingEngine(policy=NormalizationPolicy(), recorder=recorder, default_piece_count=6)


@pytest.fixture
def product():
    return make_product()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def cart_store(memory_storage, recorder):
    return CartStore(memory_storage, storage_key="cart", recorder=recorder)


@pytest.fixture
def sql_session_factory():
    """In-memory SQLite shared across connections via StaticPool."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def sql_storage(sql_session_factory):
    return SqlStorage(sql_session_factory)


@pytest.fixture
def away_mode():
    """Mutable away-mode settings returned by the overridden dependency."""
    return AwayModeSettings()


@pytest.fixture
def product_client():
    return StubProductClient({"47": make_product_data()})


@pytest.fixture
def client(engine, cart_store, away_mode, product_client):
    """FastAPI TestClient with engine, cart store, away mode and product API overridden."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_store] = lambda: cart_store
    app.dependency_overrides[get_away_mode] = lambda: away_mode
    app.dependency_overrides[get_product_client] = lambda: product_client

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
