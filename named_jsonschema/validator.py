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

import json
import logging
from typing import Any, Dict, List, Mapping, Union

from referencing.exceptions import Unresolvable

from .exceptions import FormatError, UnknownSchemaError, UnresolvableReferenceError
from .models.schema_document import ValidationResult
from .models.schema_engine import CompiledSchema

logger = logging.getLogger(__name__)


class Validator:
    """Validates JSON instances against compiled, named schemas.

    Produced by ``SchemaRegistry.compile()``. Immutable once built.
    """

    def __init__(self, schemas: Mapping[str, CompiledSchema]):
        self._schemas: Dict[str, CompiledSchema] = dict(schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> List[str]:
        return sorted(self._schemas)

    def validate(self, schema_name: str, instance: Union[bytes, str]) -> ValidationResult:
        """Validate a serialized JSON instance against the schema named ``schema_name``.

        Args:
            schema_name: Registered schema name
            instance: JSON document as bytes or str

        Returns:
            ValidationResult as reported by the schema engine

        Raises:
            UnknownSchemaError: If no schema is registered under ``schema_name``
            FormatError: If ``instance`` is not valid JSON
            UnresolvableReferenceError: If a $ref cannot be resolved
        """
        compiled = self._get(schema_name)
        try:
            data = json.loads(instance)
        except ValueError as exc:
            raise FormatError(f"instance for schema '{schema_name}' is not valid json: {exc}") from exc
        return self._run(schema_name, compiled, data)

    def validate_data(self, schema_name: str, data: Any) -> ValidationResult:
        """Validate an already decoded instance."""
        return self._run(schema_name, self._get(schema_name), data)

    def _get(self, schema_name: str) -> CompiledSchema:
        compiled = self._schemas.get(schema_name)
        if compiled is None:
            raise UnknownSchemaError(schema_name)
        return compiled

    @staticmethod
    def _run(schema_name: str, compiled: CompiledSchema, data: Any) -> ValidationResult:
        logger.debug(f"Validating instance against schema '{schema_name}'")
        try:
            return compiled.validate(data)
        except Unresolvable as exc:
            raise UnresolvableReferenceError(
                f"failed to resolve reference while validating against '{schema_name}': {exc}",
                schema_name=schema_name,
            ) from exc
