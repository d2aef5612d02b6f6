import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def tmp_db_path(tmp_path):
    path = str(tmp_path / "registry_test.db")
    from pet_registry.services.schema_svc import ensure_registry_schema
    ensure_registry_schema(path)
    return path


@pytest.fixture()
def owners(tmp_db_path):
    from pet_registry.services.owner_svc import OwnerService
    return OwnerService(tmp_db_path)


@pytest.fixture()
def pets(tmp_db_path):
    from pet_registry.services.pet_svc import PetService
    return PetService(tmp_db_path)


@pytest.fixture()
def client(tmp_db_path):
    from pet_registry.api import create_app
    from fastapi.testclient import TestClient
    # entering the client runs the app lifespan, which prepares the schema
    with TestClient(create_app(tmp_db_path)) as c:
        yield c
