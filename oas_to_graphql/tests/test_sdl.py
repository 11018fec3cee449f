from pathlib import Path

import pytest

from oas_to_graphql import Converter, GeneratorConfig, OpenApiDocument
from oas_to_graphql.generators import format_default_value
from oas_to_graphql.prompt import Answer, PlayerPrompt

TEST_DATA = Path(__file__).parent / "test_data"


def generate(name, prompt=None, **config):
    document = OpenApiDocument.from_file(TEST_DATA / name)
    return Converter(document, GeneratorConfig.from_dict(config), prompt).generate_sdl()


def normalize(text):
    """Collapse all whitespace so that assertions read like one-line SDL"""
    return " ".join(text.split())


def test_petstore_sdl():
    expected = """# Generated by oas_to_graphql 0.1.0

type Pet {
  name: String!
  id: Int = 0
}

type Cat {
  name: String!
  id: Int = 0
  color: String
}

type Query {
  listPets(limit: Int = 20, tag: String!): [Pet]
  getPetsPetId(petId: String!): Cat
}

"""
    assert generate("petstore.yaml") == expected


def test_required_and_default_rendering():
    out = normalize(generate("petstore.yaml", add_generation_comment=False))
    assert out.startswith("type Pet { name: String! id: Int = 0 }")


def test_all_of_merges_in_first_seen_order():
    out = normalize(generate("composed.yaml"))
    assert "type Cat { name: String! id: String tag: String color: String }" in out
    assert "type Kitten { name: String! id: String tag: String color: String age: Int }" in out


def test_all_of_subset_from_recording():
    # Cat: yes; Kitten: subset keeping name, tag and age
    answers = [Answer.YES, Answer.SUBSET, Answer.YES, Answer.NO, Answer.YES, Answer.NO, Answer.YES]
    prompt = PlayerPrompt(answers)
    out = normalize(generate("composed.yaml", prompt))
    assert "type Kitten { name: String! tag: String age: Int }" in out
    assert prompt.remaining == 0


def test_all_of_without_selected_properties_emits_no_type():
    out = generate("composed.yaml", PlayerPrompt([Answer.YES, Answer.NO]))
    assert "type Kitten" not in out
    assert "type Cat {" in out


def test_one_of_delegates_to_retained_variant():
    out = normalize(generate("composed.yaml"))
    assert "type Shape" not in out
    assert "union " not in out
    assert "type Circle { radius: Float }" in out
    assert "type Drawing { shape: Circle shapes: [Circle] tags: [String] meta: DrawingMeta }" in out


def test_inline_object_is_emitted_after_its_owner():
    out = generate("composed.yaml")
    assert out.index("type Drawing {") < out.index("type DrawingMeta {")
    assert "type DrawingMeta {\n  author: String\n}\n" in out


def test_anonymous_one_of_variant_takes_the_composition_name():
    document = OpenApiDocument(
        {
            "openapi": "3.0.0",
            "components": {
                "schemas": {
                    "Payment": {
                        "oneOf": [
                            {"type": "object", "properties": {"iban": {"type": "string"}}},
                            {"type": "object", "properties": {"card": {"type": "string"}}},
                        ]
                    },
                    "Order": {"type": "object", "properties": {"payment": {"$ref": "#/components/schemas/Payment"}}},
                }
            },
        }
    )
    out = normalize(Converter(document).generate_sdl())
    assert "type Payment { iban: String }" in out
    assert "type Order { payment: Payment }" in out
    assert "card" not in out


def test_one_of_name_does_not_depend_on_declaration_order(caplog):
    document = OpenApiDocument(
        {
            "openapi": "3.0.0",
            "components": {
                "schemas": {
                    "Order": {"type": "object", "properties": {"payment": {"$ref": "#/components/schemas/Payment"}}},
                    "Payment": {
                        "oneOf": [
                            {"type": "object", "properties": {"iban": {"type": "string"}}},
                            {"type": "object", "properties": {"card": {"type": "string"}}},
                        ]
                    },
                }
            },
        }
    )
    out = Converter(document, GeneratorConfig(add_generation_comment=False)).generate_sdl()
    assert out == "type Order {\n  payment: Payment\n}\n\ntype Payment {\n  iban: String\n}\n\n"
    assert "No type name" not in caplog.text


def test_recursive_types():
    out = normalize(generate("recursive.yaml", add_generation_comment=False))
    assert "type TreeNode { label: String parent: TreeNode children: [TreeNode] owner: Owner }" in out
    assert "type Owner { name: String nodes: [TreeNode] }" in out
    assert "type Category { title: String subcategories: [Category] }" in out
    assert "type Query { getNode(id: String!): TreeNode }" in out


def test_swagger_defaults_and_json_scalar():
    out = generate("swagger.json", add_generation_comment=False)
    assert out.startswith("scalar JSON\n\n")
    out = normalize(out)
    assert 'type User { login: String! score: Float = 1.5 active: Boolean role: String = "member" settings: JSON }' in out
    assert "type Query { listUsers(page: Int = 1, limit: Int!): [User] }" in out


def test_config_overrides():
    out = generate(
        "swagger.json",
        add_generation_comment=False,
        json_scalar="Any",
        query_type_name="Root",
        field_indent="    ",
        scalar_types={"string": "ID", "integer": "Long", "number": "Float", "boolean": "Boolean"},
    )
    assert "scalar Any" in out
    assert "type Root {" in out
    assert "    login: ID!\n" in out
    assert "listUsers(page: Long = 1, limit: Long!)" in out


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (1.5, "1.5"),
        ("pending", '"pending"'),
        ('say "hi"', '"say \\"hi\\""'),
        (True, None),
        ([1, 2], None),
        ({"a": 1}, None),
        (None, None),
    ],
)
def test_format_default_value(value, expected):
    assert format_default_value(value) == expected
