import pytest

from oas_to_graphql.document import OpenApiDocument
from oas_to_graphql.errors import MalformedReferenceError
from oas_to_graphql.graph import Composed, ComposedKind, Context, Object, Scalar, TypeStore
from oas_to_graphql.prompt import YesPrompt


def make_context():
    return Context(OpenApiDocument({"components": {"schemas": {"Pet": {"type": "object"}}}}))


class TestTypeStore:
    """Test the insert-once type store"""

    def test_first_writer_wins(self):
        store = TypeStore()
        first, second = Object(name="#/a"), Object(name="#/a")

        assert store.put("#/a", first) is first
        assert store.put("#/a", second) is first
        assert store.get("#/a") is first
        assert len(store) == 1

    def test_storing_the_same_node_again_is_a_no_op(self):
        store = TypeStore()
        node = Scalar(type_name="string")
        store.put("#/s", node)
        store.put("#/s", node)
        assert list(store) == ["#/s"]
        assert "#/s" in store


class TestContext:
    """Test the traversal context"""

    def test_defaults_to_yes_prompt(self):
        assert isinstance(make_context().prompt, YesPrompt)

    def test_enter_and_leave(self):
        context = make_context()
        a, b = Object(), Scalar()
        context.enter(a)
        context.enter(b)
        assert context.depth == 2
        assert context.leave() is b
        assert context.stack == [a]

    def test_entered_pops_on_error(self):
        context = make_context()
        with pytest.raises(RuntimeError):
            with context.entered(Object()):
                assert context.depth == 1
                raise RuntimeError("boom")
        assert context.depth == 0

    def test_in_compose_context(self):
        context = make_context()
        outer = Composed(kind=ComposedKind.ALL_OF)
        inner = Composed(kind=ComposedKind.ONE_OF)

        context.enter(outer)
        assert context.in_compose_context(outer) is False

        context.enter(Object())
        context.enter(inner)
        assert context.in_compose_context(inner) is True

        context.leave()
        context.leave()
        context.leave()
        assert context.compose_depth == 0
        assert context.in_compose_context(inner) is False

    def test_store_and_get(self):
        context = make_context()
        node = Object()
        assert context.store("#/components/schemas/Pet", node) is node
        assert context.get("#/components/schemas/Pet") is node
        assert context.get("#/components/schemas/Cat") is None

    def test_lookup_ref(self):
        context = make_context()
        assert context.lookup_ref("#/components/schemas/Pet") == {"type": "object"}
        with pytest.raises(MalformedReferenceError):
            context.lookup_ref("#/components/schemas/Cat")
