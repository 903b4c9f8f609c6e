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

"""Adapter around the ``jsonschema`` engine.

The registry only needs two capabilities from the engine:

- ``SchemaLoader.add_schema(locator, body)`` makes a schema addressable by a URI
- ``SchemaLoader.compile(body)`` builds a validator that can follow refs to
  every schema added to that loader

Both raise ``jsonschema.exceptions.SchemaError`` for bodies that do not
conform to their metaschema; callers attach the schema name.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import ValidationError
from jsonschema.protocols import Validator as ValidatorProtocol
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT7, specification_with

from ..config import DRAFT7_DIALECT
from .schema_document import SchemaIssue, ValidationResult


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def issue_from_error(error: ValidationError) -> SchemaIssue:
    """Convert a ``jsonschema`` error into a SchemaIssue."""
    parts = [str(p) for p in error.absolute_path]
    return SchemaIssue(
        message=error.message,
        path=".".join(parts) if parts else "(root)",
        json_pointer="".join(f"/{_jp_escape(p)}" for p in parts),
        keyword=str(error.validator) if error.validator is not None else "",
        schema_path=".".join(str(p) for p in error.absolute_schema_path),
    )


class CompiledSchema:
    """Validator for exactly one schema, closed over its dependencies."""

    def __init__(self, validator: ValidatorProtocol):
        self._validator = validator

    def validate(self, instance: Any) -> ValidationResult:
        """Validate a decoded instance.

        Raises:
            referencing.exceptions.Unresolvable: If a $ref cannot be resolved
        """
        issues = tuple(issue_from_error(e) for e in self._validator.iter_errors(instance))
        return ValidationResult(valid=not issues, issues=issues)


class SchemaLoader:
    """Collects addressable schemas for one compilation target."""

    def __init__(self, default_dialect: str = DRAFT7_DIALECT, format_checking: bool = False):
        self._default_cls: Type[ValidatorProtocol] = validator_for(
            {"$schema": default_dialect}, default=Draft7Validator
        )
        self._default_spec = specification_with(default_dialect, default=DRAFT7)
        self._format_checker: Optional[FormatChecker] = FormatChecker() if format_checking else None
        self._registry: Registry = Registry()

    def __len__(self) -> int:
        return len(self._registry)

    def _validator_class(self, body: Dict[str, Any]) -> Type[ValidatorProtocol]:
        return validator_for(body, default=self._default_cls)

    def add_schema(self, locator: str, body: Dict[str, Any]) -> None:
        self._validator_class(body).check_schema(body)
        resource = Resource.from_contents(body, default_specification=self._default_spec)
        self._registry = self._registry.with_resource(locator, resource)

    def compile(self, body: Dict[str, Any], locator: Optional[str] = None) -> CompiledSchema:
        """Build a validator for ``body`` that resolves refs against this loader.

        When ``locator`` is given, ``body`` is also addressable under it, so
        references back to the schema being compiled resolve.
        """
        cls = self._validator_class(body)
        cls.check_schema(body)
        registry = self._registry
        if locator is not None:
            resource = Resource.from_contents(body, default_specification=self._default_spec)
            registry = registry.with_resource(locator, resource)
        validator = cls(body, registry=registry, format_checker=self._format_checker)
        return CompiledSchema(validator)
