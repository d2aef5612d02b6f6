import pytest

from pet_registry.domain.records import Pet
from pet_registry.errors import OwnerReferenceError, ValidationError


@pytest.fixture()
def matti(owners):
    return owners.add_owner("Matti", "0401234567", "Esimerkkikatu 1")


def test_add_pet_then_listed(pets, matti):
    rex = pets.add_pet("Rex", matti.id, "Koira")
    assert pets.get_pets() == [Pet(rex.id, matti.id, "Rex", "Koira")]


def test_add_pet_unknown_owner(pets, matti):
    with pytest.raises(OwnerReferenceError):
        pets.add_pet("Rex", matti.id + 100, "Koira")
    assert pets.get_pets() == []


@pytest.mark.parametrize("name,species", [("", "Koira"), ("Rex", ""), ("Rex", None)])
def test_add_pet_requires_name_and_species(pets, matti, name, species):
    with pytest.raises(ValidationError):
        pets.add_pet(name, matti.id, species)
    assert pets.count() == 0


def test_add_pet_owner_id_must_be_integer(pets, matti):
    with pytest.raises(ValidationError):
        pets.add_pet("Rex", "abc", "Koira")


def test_pets_by_owner(pets, owners, matti):
    maija = owners.add_owner("Maija", "0509876543", "Toinenkatu 2")
    rex = pets.add_pet("Rex", matti.id, "Koira")
    pets.add_pet("Mirri", maija.id, "Kissa")
    musti = pets.add_pet("Musti", matti.id, "Koira")
    assert [p.id for p in pets.get_pets_by_owner(matti.id)] == [rex.id, musti.id]
    assert [p.name for p in pets.get_pets_by_owner(maija.id)] == ["Mirri"]


def test_pets_by_missing_owner(pets):
    with pytest.raises(OwnerReferenceError):
        pets.get_pets_by_owner(42)


def test_example_flow(owners, pets):
    matti = owners.add_owner("Matti", "0401234567", "Esimerkkikatu 1")
    pets.add_pet("Rex", matti.id, "Koira")
    assert owners.search_owner_phone_by_pet_name("Rex") == "0401234567"
