"""Storage failures reach the caller; history write failures do not change results."""
import pytest

from pet_registry.audit import ChangeRecorder
from pet_registry.errors import StorageError
from pet_registry.services.owner_svc import OwnerService
from pet_registry.services.pet_svc import PetService


@pytest.fixture()
def broken_path(tmp_path):
    # parent directory does not exist, so sqlite cannot open the file
    return str(tmp_path / "missing" / "registry.db")


def test_owner_service_raises_storage_error(broken_path):
    svc = OwnerService(broken_path)
    with pytest.raises(StorageError):
        svc.add_owner("Matti", "0401234567", "Esimerkkikatu 1")
    with pytest.raises(StorageError):
        svc.get_owners()
    with pytest.raises(StorageError):
        svc.search_owner_phone_by_pet_name("Rex")
    with pytest.raises(StorageError):
        svc.update_phone("0401234567", "0407654321")


def test_pet_service_raises_storage_error(broken_path):
    svc = PetService(broken_path)
    with pytest.raises(StorageError):
        svc.add_pet("Rex", 1, "Koira")
    with pytest.raises(StorageError):
        svc.get_pets()


def test_empty_search_needs_no_store(broken_path):
    assert OwnerService(broken_path).search_owner_phone_by_pet_name("") is None


def test_history_failure_keeps_results(owners, pets, monkeypatch):
    def fail(self, result="OK", detail=None):
        raise StorageError("history table unavailable")

    monkeypatch.setattr(ChangeRecorder, "commit", fail)

    matti = owners.add_owner("Matti", "0401234567", "Esimerkkikatu 1")
    rex = pets.add_pet("Rex", matti.id, "Koira")
    res = owners.update_phone("0401234567", "0407654321")

    assert res.ok
    assert owners.get_owners()[0].phone == "0407654321"
    assert pets.get_pets()[0].id == rex.id
