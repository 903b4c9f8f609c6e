from named_jsonschema.utils.references import find_references, rewrite_references


def test_find_references_returns_symbolic_names_only():
    source = b'{"a":{"$ref":"{Address}"},"b":{"$ref":"#/properties/a"},"c":{"$ref":"other.json"}}'
    assert find_references(source) == {"Address"}


def test_find_references_tolerates_whitespace_around_colon():
    source = '{"a": {"$ref" :  "{One}"}, "b": {"$ref"\n:\t"{Two}"}}'
    assert find_references(source) == {"One", "Two"}


def test_find_references_deduplicates():
    source = b'[{"$ref":"{X}"},{"$ref":"{X}"},{"$ref":"{Y}"}]'
    assert find_references(source) == {"X", "Y"}


def test_find_references_ignores_empty_braces():
    assert find_references(b'{"$ref":"{}"}') == set()


def test_find_references_on_schema_without_refs():
    assert find_references(b'{"type":"string"}') == set()


def test_rewrite_references_replaces_only_the_braced_name():
    source = b'{"a": {"$ref" : "{Address}"}, "b": {"$ref": "#/x"}}'
    rewritten = rewrite_references(source, lambda name: "urn:test:" + name)
    assert rewritten == b'{"a": {"$ref" : "urn:test:Address"}, "b": {"$ref": "#/x"}}'


def test_rewrite_references_keeps_input_type():
    assert isinstance(rewrite_references(b'{"$ref":"{A}"}', str.lower), bytes)
    assert rewrite_references('{"$ref":"{A}"}', str.lower) == '{"$ref":"a"}'


def test_rewrite_references_calls_replace_for_every_occurrence():
    seen = []

    def replace(name):
        seen.append(name)
        return name + "!"

    assert rewrite_references('[{"$ref":"{A}"},{"$ref":"{B}"},{"$ref":"{A}"}]', replace) == (
        '[{"$ref":"A!"},{"$ref":"B!"},{"$ref":"A!"}]'
    )
    assert seen == ["A", "B", "A"]


def test_rewrite_references_without_refs_is_identity():
    source = b'{"type": "object", "properties": {"$ref": {"type": "string"}}}'
    assert rewrite_references(source, lambda name: "unused") == source


def test_find_references_decodes_json_escapes():
    source = '{"a":{"$ref":"{A\\\\B}"},"b":{"$ref":"{\\u00c9t\\u00e9}"}}'
    assert find_references(source) == {"A\\B", "Été"}


def test_rewrite_references_passes_decoded_name_and_escapes_result():
    seen = []

    def replace(name):
        seen.append(name)
        return name + "\\"

    assert rewrite_references(b'{"$ref":"{A\\\\B}"}', replace) == b'{"$ref":"A\\\\B\\\\"}'
    assert seen == ["A\\B"]
