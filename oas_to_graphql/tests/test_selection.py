import logging
from io import StringIO
from pathlib import Path

from oas_to_graphql import Converter, OpenApiDocument
from oas_to_graphql.generators import SelectionGenerator, is_compound
from oas_to_graphql.graph import Context, Factory, GraphBuilder, Object
from oas_to_graphql.prompt import Answer, PlayerPrompt

TEST_DATA = Path(__file__).parent / "test_data"


def select(name, prompt=None):
    document = OpenApiDocument.from_file(TEST_DATA / name)
    return Converter(document, prompt=prompt).generate_selection()


def test_composed_selection():
    expected = """getDrawing {
 shape {
   radius
 }
 shapes {
   radius
 }
 tags
 meta {
  author
 }
}
listCats {
 name
 id
 tag
 color
 age
}
"""
    assert select("composed.yaml") == expected


def test_path_and_field_selection_from_recording():
    # skip /drawings/{id}, visit /cats, keep a subset of Kitten's fields
    answers = [Answer.NO, Answer.YES, Answer.SUBSET, Answer.YES, Answer.NO, Answer.YES, Answer.NO, Answer.YES]
    prompt = PlayerPrompt(answers)
    assert select("composed.yaml", prompt) == "listCats {\n name\n tag\n age\n}\n"
    assert prompt.remaining == 0


def test_recursive_fields_are_left_out_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="oas_to_graphql.generators.selection"):
        out = select("recursive.yaml")

    expected = """getNode {
 label
 owner {
  name
 }
}
"""
    assert out == expected
    assert "{\n }" not in out
    assert "Skipping field 'parent'" in caplog.text
    assert "Skipping field 'nodes'" in caplog.text


def test_scalar_fields_have_no_brackets():
    document = OpenApiDocument({})
    context = Context(document)
    query = Object(name="Query")
    field = Factory.from_property(query, "@count", {"type": "integer"})
    tags = Factory.from_property(query, "tags", {"type": "array", "items": {"type": "string"}})
    GraphBuilder(context).visit(field)
    GraphBuilder(context).visit(tags)

    out = StringIO()
    SelectionGenerator(context).write([field, tags], out)
    assert out.getvalue() == "count\ntags\n"


def test_is_compound():
    def visited(schema, prompt=None):
        node = Factory.from_schema(None, schema)
        GraphBuilder(Context(OpenApiDocument({}), prompt)).visit(node)
        return node

    obj = {"type": "object", "properties": {"a": {"type": "string"}}}
    assert is_compound(visited(obj))
    assert is_compound(visited({"type": "array", "items": {"type": "array", "items": obj}}))
    assert is_compound(visited({"oneOf": [obj, {"type": "string"}]}))
    assert is_compound(visited({"allOf": [obj]}))
    assert not is_compound(visited({"type": "string"}))
    assert not is_compound(visited({"type": "array", "items": {"type": "string"}}))
    assert not is_compound(visited({"type": "object"}))
    assert not is_compound(visited({"oneOf": [{"type": "string"}, obj]}))
    assert not is_compound(visited({"allOf": [obj]}, PlayerPrompt([Answer.NO])))


def test_fields_without_object_type_have_no_brackets():
    context = Context(OpenApiDocument({}), PlayerPrompt([Answer.NO]))
    query = Object(name="Query")
    kind = Factory.from_property(query, "kind", {"oneOf": [{"type": "string"}, {"type": "integer"}]})
    extra = Factory.from_property(query, "extra", {"allOf": [{"type": "object", "properties": {"a": {"type": "string"}}}]})
    GraphBuilder(context).visit(kind)
    GraphBuilder(context).visit(extra)

    out = StringIO()
    SelectionGenerator(context).write([kind, extra], out)
    assert out.getvalue() == "kind\nextra\n"
