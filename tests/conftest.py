import os

# app を import する前に、メモリDB・ファイルログなしにしておく
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.utils.kv_store import KeyValueStore
from app.utils.state import get_template_client


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def kv(db):
    return KeyValueStore(db)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def serve_templates():
    """テンプレート取得先を MockTransport に差し替える。handler を渡して使う。"""

    def _install(handler):
        async def _client():
            transport = httpx.MockTransport(handler)
            async with httpx.AsyncClient(transport=transport, base_url="http://templates.test/t") as c:
                yield c

        app.dependency_overrides[get_template_client] = _client

    return _install
