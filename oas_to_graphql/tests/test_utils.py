import pytest

from oas_to_graphql.utils import (
    gen_field_name,
    gen_operation_name,
    gen_param_name,
    get_ref_name,
    sanitise_field_for_select,
    snake_to_pascal_case,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("first_name", "FirstName"),
        ("pet-store", "PetStore"),
        ("actionTemplate", "ActionTemplate"),
        ("first 3 rows", "First3Rows"),
        ("Pet", "Pet"),
        ("", ""),
    ],
)
def test_snake_to_pascal_case(text, expected):
    assert snake_to_pascal_case(text) == expected


@pytest.mark.parametrize(
    "ref, expected",
    [
        ("#/components/schemas/Pet", "Pet"),
        ("#/definitions/pet_owner", "PetOwner"),
        ("#/components/schemas/PetDTO", "PetDTO"),
        ("#/components/schemas/v1.Order", "V1Order"),
        ("Pet", "Pet"),
    ],
)
def test_get_ref_name(ref, expected):
    assert get_ref_name(ref) == expected


def test_field_and_param_names_are_legal_graphql_names():
    assert gen_field_name("name") == "name"
    assert gen_field_name("first-name") == "first_name"
    assert gen_field_name("2fa") == "_2fa"
    assert gen_param_name("X-Request-Id") == "X_Request_Id"


def test_sanitise_field_for_select_strips_at_sign():
    assert sanitise_field_for_select("@type") == "type"
    assert sanitise_field_for_select("content-type") == "content_type"


def test_gen_operation_name():
    assert gen_operation_name("get", "/pets", "listPets") == "listPets"
    assert gen_operation_name("get", "/pets/{petId}") == "getPetsPetId"
    assert gen_operation_name("GET", "/store/inventory") == "getStoreInventory"
