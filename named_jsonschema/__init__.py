# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Registry of JSON Schemas that reference each other by symbolic name.

Schemas are added under a name, reference other schemas with
``"$ref": "{Name}"`` and are compiled together into a Validator::

    registry = SchemaRegistry()
    registry.add_dir("", "schemas/")
    validator = registry.compile()
    result = validator.validate("Order", b'{"id": 1}')
"""

from .builder.schema_registry import SchemaRegistry
from .config import RegistryConfig
from .exceptions import (
    CompilationError,
    FormatError,
    MissingReferenceError,
    NameCollisionError,
    NamedSchemaError,
    SchemaIOError,
    UnknownSchemaError,
    UnresolvableReferenceError,
)
from .models.schema_document import SchemaDocument, SchemaIssue, ValidationResult
from .utils.references import find_references, rewrite_references
from .validator import Validator

__all__ = [
    "SchemaRegistry",
    "RegistryConfig",
    "Validator",
    "SchemaDocument",
    "SchemaIssue",
    "ValidationResult",
    "find_references",
    "rewrite_references",
    "NamedSchemaError",
    "SchemaIOError",
    "FormatError",
    "NameCollisionError",
    "MissingReferenceError",
    "CompilationError",
    "UnknownSchemaError",
    "UnresolvableReferenceError",
]
