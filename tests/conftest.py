import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from deptportal import database
from deptportal.main import app
from deptportal.settings import institution
from deptportal.store import MemoryStore, SqlStore, get_store


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store():
    store = SqlStore(database.make_engine("sqlite://"))
    store.seed_demo()
    return store


@pytest.fixture(params=["memory", "sql"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(memory_store):
    app.dependency_overrides[get_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_institution():
    saved = institution.get()
    yield
    institution._values = saved
    institution._listeners = []


@pytest.fixture
def xlsx_bytes():
    def build(rows):
        buffer = io.BytesIO()
        pd.DataFrame(rows).to_excel(buffer, index=False, engine="openpyxl")
        return buffer.getvalue()
    return build
