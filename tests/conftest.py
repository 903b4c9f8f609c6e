from pathlib import Path

import pytest

from named_jsonschema import SchemaRegistry

TESTS_DIR = Path(__file__).resolve().parent
SCHEMA_DIR = TESTS_DIR / "schemas"
BROKEN_SCHEMA_DIR = SCHEMA_DIR / "broken"
PAYLOAD_DIR = TESTS_DIR / "payloads"

FIXTURE_SCHEMA_NAMES = {
    "Circular",
    "F1",
    "F2",
    "HasRefs",
    "HasRefsOne",
    "HasRefsTwo",
    "HasRefsTwoLabel",
    "Simple",
    "SimpleAbc",
}


def read_payload(name: str) -> bytes:
    return (PAYLOAD_DIR / name).read_bytes()


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def fixture_registry() -> SchemaRegistry:
    reg = SchemaRegistry()
    reg.add_dir("", SCHEMA_DIR)
    return reg
