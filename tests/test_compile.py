import pytest

from named_jsonschema import (
    CompilationError,
    MissingReferenceError,
    SchemaRegistry,
    Validator,
)
from named_jsonschema.builder import closure_compiler
from named_jsonschema.builder.closure_compiler import ClosureCompiler, to_locator
from named_jsonschema.models.schema_engine import SchemaLoader
from named_jsonschema.resolvers.reference_checker import MissingReference, find_missing_references

from conftest import BROKEN_SCHEMA_DIR, FIXTURE_SCHEMA_NAMES


class RecordingLoader(SchemaLoader):
    """SchemaLoader that records the locators added to it."""

    added = []

    def add_schema(self, locator, body):
        RecordingLoader.added.append(locator)
        super().add_schema(locator, body)


@pytest.fixture
def recording_loader(monkeypatch):
    RecordingLoader.added = []
    monkeypatch.setattr(closure_compiler, "SchemaLoader", RecordingLoader)
    return RecordingLoader


def test_compile_succeeds_when_reference_is_present(registry):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}}}')
    registry.add_schema("B", b'{"type": "string"}')

    validator = registry.compile()

    assert isinstance(validator, Validator)
    assert validator.names() == ["A", "B"]


def test_missing_reference_names_both_ends(registry):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}}}')

    with pytest.raises(MissingReferenceError) as exc_info:
        registry.compile()

    message = str(exc_info.value)
    assert "missing required references" in message
    assert "B" in message and "A" in message
    assert exc_info.value.missing == [("B", "A")]


def test_missing_references_are_all_reported(registry):
    registry.add_file("", BROKEN_SCHEMA_DIR / "MissingRefs.json")
    registry.add_schema("Other", b'{"items": {"$ref": "{DoesNotExist}"}}')

    with pytest.raises(MissingReferenceError) as exc_info:
        registry.compile()

    assert exc_info.value.missing == [
        ("AlsoMissing", "MissingRefs"),
        ("DoesNotExist", "MissingRefs"),
        ("DoesNotExist", "Other"),
    ]


def test_compile_can_be_retried_after_adding_missing_schema(registry):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}}}')
    with pytest.raises(MissingReferenceError):
        registry.compile()
    assert set(registry.get_schemas()) == {"A"}

    registry.add_schema("B", b'{"type": "string"}')
    validator = registry.compile()

    assert validator.validate("A", b'{"b": "ok"}').valid
    assert not validator.validate("A", b'{"b": 1}').valid


def test_find_missing_references_on_closed_graph(fixture_registry):
    assert find_missing_references(fixture_registry.schemas) == []


def test_find_missing_references_returns_named_pairs(registry):
    registry.add_schema("A", b'{"$ref": "{Z}"}')
    missing = find_missing_references(registry.schemas)
    assert missing == [MissingReference(missing="Z", referenced_from="A")]
    assert missing[0].referenced_from == "A"


def test_mutually_referential_schemas_compile(registry):
    registry.add_schema("A", b'{"type": "object", "properties": {"b": {"$ref": "{B}"}}}')
    registry.add_schema("B", b'{"type": "object", "properties": {"a": {"$ref": "{A}"}}}')

    validator = registry.compile()

    assert validator.names() == ["A", "B"]


def test_compile_whole_fixture_directory(fixture_registry):
    validator = fixture_registry.compile()
    assert set(validator.names()) == FIXTURE_SCHEMA_NAMES


def test_each_compile_returns_an_independent_validator(registry):
    registry.add_schema("A", b'{"type": "string"}')
    first = registry.compile()

    registry.add_schema("B", b'{"type": "integer"}')
    second = registry.compile()

    assert first is not second
    assert "B" not in first
    assert "B" in second
    assert first.validate("A", b'"x"').valid
    assert second.validate("A", b'"x"').valid


def test_invalid_schema_body_is_a_compilation_error(registry):
    registry.add_schema("Bad", b'{"type": "object", "properties": {"a": {"type": 12}}}')

    with pytest.raises(CompilationError) as exc_info:
        registry.compile()

    assert exc_info.value.schema_name == "Bad"
    assert "Bad" in str(exc_info.value)


def test_invalid_dependency_names_the_dependency(registry):
    registry.add_schema("Bad", b'{"minLength": -1}')
    registry.add_schema("User", b'{"properties": {"x": {"$ref": "{Bad}"}}}')

    compiler = ClosureCompiler(registry.schemas)
    with pytest.raises(CompilationError) as exc_info:
        compiler.compile_target("User")

    assert exc_info.value.schema_name == "Bad"
    assert "failed to load schema with name: Bad" in str(exc_info.value)


def test_compilation_failure_leaves_registry_usable(registry):
    registry.add_schema("Bad", b'{"type": 12}')
    registry.add_schema("Good", b'{"type": "string"}')
    before = registry.get_schemas()

    with pytest.raises(CompilationError):
        registry.compile()

    assert registry.get_schemas() == before


def test_closure_registers_dependencies_before_dependents(registry, recording_loader):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}}}')
    registry.add_schema("B", b'{"properties": {"c": {"$ref": "{C}"}}}')
    registry.add_schema("C", b'{"type": "string"}')
    registry.add_schema("Unrelated", b'{"type": "null"}')

    ClosureCompiler(registry.schemas).compile_target("A")

    assert recording_loader.added == [to_locator("C"), to_locator("B")]


def test_closure_registers_shared_dependency_once(registry, recording_loader):
    registry.add_schema("Top", b'{"properties": {"l": {"$ref": "{Left}"}, "r": {"$ref": "{Right}"}}}')
    registry.add_schema("Left", b'{"properties": {"s": {"$ref": "{Shared}"}}}')
    registry.add_schema("Right", b'{"properties": {"s": {"$ref": "{Shared}"}}}')
    registry.add_schema("Shared", b'{"type": "integer"}')

    ClosureCompiler(registry.schemas).compile_target("Top")

    assert sorted(recording_loader.added) == sorted(to_locator(n) for n in ("Left", "Right", "Shared"))
    assert recording_loader.added.index(to_locator("Shared")) < recording_loader.added.index(to_locator("Left"))


def test_closure_skips_back_edges_and_never_adds_the_target(registry, recording_loader):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}, "self": {"$ref": "{A}"}}}')
    registry.add_schema("B", b'{"properties": {"c": {"$ref": "{C}"}}}')
    registry.add_schema("C", b'{"properties": {"a": {"$ref": "{A}"}, "b": {"$ref": "{B}"}}}')

    ClosureCompiler(registry.schemas).compile_target("A")

    assert recording_loader.added == [to_locator("C"), to_locator("B")]


def test_each_target_gets_its_own_loader(registry, recording_loader):
    registry.add_schema("A", b'{"properties": {"b": {"$ref": "{B}"}}}')
    registry.add_schema("B", b'{"type": "string"}')

    ClosureCompiler(registry.schemas).compile_all()

    # B is added once for target A; target B has no dependencies
    assert recording_loader.added == [to_locator("B")]


def test_long_reference_chain_compiles(registry):
    depth = 300
    for i in range(depth):
        registry.add_schema(f"N{i}", '{"properties": {"next": {"$ref": "{N%d}"}}}' % (i + 1))
    registry.add_schema(f"N{depth}", b'{"type": "object"}')

    compiled = ClosureCompiler(registry.schemas).compile_target("N0")

    assert compiled.validate({"next": {"next": {}}}).valid


def test_locator_keeps_special_characters_out_of_fragment():
    assert to_locator("Plain") == "urn:named-jsonschema:Plain"
    assert to_locator("A#1") == "urn:named-jsonschema:A%231"
    assert "#" not in to_locator("A#1/x")
