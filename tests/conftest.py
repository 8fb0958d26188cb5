import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_mindcare.db")

import pytest
from fastapi.testclient import TestClient
from mindcare.main import app
from mindcare.core.db import Base, engine
from mindcare.core.config import settings
from mindcare.core.security import create_access_token

@pytest.fixture(autouse=True, scope="session")
def setup_db():
    # fresh db for tests
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(autouse=True)
def no_typing_delay(monkeypatch):
    monkeypatch.setattr(settings, "TYPING_DELAY_MIN_SECONDS", 0.0)
    monkeypatch.setattr(settings, "TYPING_DELAY_MAX_SECONDS", 0.0)

@pytest.fixture()
def client():
    settings.ALLOW_DEV_DEBUG_META = True
    return TestClient(app)

@pytest.fixture()
def user_id():
    return f"user-{uuid.uuid4().hex[:8]}"

@pytest.fixture()
def auth(user_id):
    token, _ = create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}
