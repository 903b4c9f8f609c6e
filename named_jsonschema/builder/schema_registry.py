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
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Union

from ..config import RegistryConfig
from ..exceptions import FormatError, NamedSchemaError, NameCollisionError
from ..file_io.schema_files import list_schema_files, read_schema_file, schema_name_for_file
from ..models.schema_document import SchemaDocument
from ..resolvers.definition_flattener import DefinitionFlattener
from ..resolvers.reference_checker import check_references
from ..validator import Validator
from .closure_compiler import ClosureCompiler

logger = logging.getLogger(__name__)

SchemaInput = Union[bytes, str, Dict[str, Any]]


class SchemaRegistry:
    """Collection of named schemas that can be compiled into a Validator.

    Schemas reference each other with symbolic refs (``"$ref": "{Name}"``).
    Registered documents are never replaced or removed.
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self.schemas: Dict[str, SchemaDocument] = {}
        self._flattener = DefinitionFlattener(
            definitions_key=self.config.definitions_key,
            max_depth=self.config.max_definition_depth,
        )

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def __len__(self) -> int:
        return len(self.schemas)

    def names(self) -> List[str]:
        return sorted(self.schemas)

    def get(self, name: str, default=None) -> Optional[SchemaDocument]:
        """Get schema document by name with default value."""
        return self.schemas.get(name, default)

    def required_references(self, name: str) -> FrozenSet[str]:
        return self.schemas[name].required_references

    def add_dir(self, prefix: str, dir_path: Union[str, Path]) -> None:
        """Add every schema file directly inside ``dir_path`` (not recursive).

        Each file ``X.json`` is registered as ``prefix + X``; its definitions
        as ``prefix + X + key``.
        """
        files = list_schema_files(dir_path, suffix=self.config.schema_suffix)
        logger.debug(f"Adding {len(files)} schema file(s) from: {dir_path}")
        for file_path in files:
            self.add_file(prefix, file_path)

    def add_file(self, prefix: str, file_path: Union[str, Path]) -> None:
        """Read a schema file and register it as ``prefix`` + file base name."""
        name = schema_name_for_file(prefix, file_path, suffix=self.config.schema_suffix)
        contents = read_schema_file(file_path)
        try:
            self.add_schema(name, contents)
        except FormatError as exc:
            raise FormatError(f"failed to add schema from file: {file_path}: {exc}", path=str(file_path)) from exc
        except NamedSchemaError as exc:
            logger.error(f"Failed to add schema from {file_path}: {exc}")
            raise

    def add_schema(self, name: str, schema: SchemaInput) -> None:
        """Register ``schema`` as ``name``, hoisting its definitions.

        Either every document produced by the schema is registered or, on
        error, none is.

        Args:
            name: Registry name of the root schema
            schema: JSON object as bytes, str or an already decoded dict

        Raises:
            FormatError: If the schema or its definitions are not JSON objects
            NameCollisionError: If any produced name is already registered
        """
        documents = self._flattener.flatten(name, self._decode(name, schema))

        pending: Dict[str, SchemaDocument] = {}
        for document in documents:
            if document.name in self.schemas or document.name in pending:
                raise NameCollisionError(document.name)
            pending[document.name] = document

        self.schemas.update(pending)
        logger.debug(f"Registered schema '{name}' as {len(pending)} document(s): {sorted(pending)}")

    @staticmethod
    def _decode(name: str, schema: SchemaInput) -> Dict[str, Any]:
        try:
            if isinstance(schema, (bytes, str)):
                decoded = json.loads(schema)
            else:
                # Round-trip to copy the caller's object and reject non-JSON values
                decoded = json.loads(json.dumps(schema))
        except (TypeError, ValueError, RecursionError) as exc:
            raise FormatError(f"schema '{name}' is not in correct json format: {exc}") from exc

        if not isinstance(decoded, dict):
            raise FormatError(
                f"schema '{name}' must be a json object, got {type(decoded).__name__}"
            )
        return decoded

    def get_schemas(self) -> Dict[str, bytes]:
        """Return a mapping of name to copies of the schemas.

        Bodies have their definitions removed and symbolic refs exactly as
        registered.
        """
        return {name: bytes(document.source) for name, document in self.schemas.items()}

    def compile(self) -> Validator:
        """Compile every registered schema into a new, independent Validator.

        The registry is not modified; on failure, schemas may be added and
        compile() called again.

        Raises:
            MissingReferenceError: If any symbolic reference is unresolved
            CompilationError: If the schema engine rejects a schema
        """
        logger.info(f"Compiling {len(self.schemas)} schema(s)")
        snapshot = dict(self.schemas)
        check_references(snapshot)
        try:
            compiled = ClosureCompiler(snapshot, self.config).compile_all()
        except NamedSchemaError as exc:
            logger.error(f"Compilation failed: {exc}")
            raise
        logger.info(f"Compiled {len(compiled)} schema(s)")
        return Validator(compiled)
