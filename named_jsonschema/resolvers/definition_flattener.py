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
from typing import Any, Dict, List

from ..exceptions import FormatError
from ..models.schema_document import SchemaDocument
from ..utils.references import find_references

logger = logging.getLogger(__name__)


def to_canonical_json(body: Dict[str, Any]) -> bytes:
    """Serialize a schema body with sorted keys and no insignificant whitespace."""
    return json.dumps(body, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class DefinitionFlattener:
    """Hoists nested definitions into top-level named schema documents.

    A schema ``P`` holding ``definitions: {K: {...}}`` yields a document for
    ``P`` (definitions removed) and one for ``P+K``. Nested definitions
    repeat the rule, producing ``P+K+M`` and so on.
    """

    def __init__(self, definitions_key: str = "definitions", max_depth: int = 64):
        self.definitions_key = definitions_key
        self.max_depth = max_depth

    def flatten(self, name: str, schema: Dict[str, Any]) -> List[SchemaDocument]:
        """Flatten one decoded schema object.

        The input is not modified. Definitions come before the schema that
        declares them in the returned list.

        Args:
            name: Name of the root schema
            schema: Decoded JSON object

        Returns:
            List of SchemaDocument, one per schema and nested definition

        Raises:
            FormatError: If a definitions block or a definition is not an
                object, or nesting exceeds max_depth
        """
        documents: List[SchemaDocument] = []
        self._flatten(name, schema, documents, depth=0)
        return documents

    def _flatten(self, name: str, schema: Dict[str, Any], documents: List[SchemaDocument], depth: int) -> None:
        if depth > self.max_depth:
            raise FormatError(f"definitions nested deeper than {self.max_depth} levels at: {name}")

        if self.definitions_key in schema:
            definitions = schema[self.definitions_key]
            if not isinstance(definitions, dict):
                raise FormatError(f"expected '{self.definitions_key}' key of schema '{name}' to be an object")
            for def_key, definition in definitions.items():
                def_name = name + def_key
                if not isinstance(definition, dict):
                    raise FormatError(f"expected definition for '{def_key}' to be an object at path: {def_name}")
                self._flatten(def_name, definition, documents, depth + 1)

        body = {key: value for key, value in schema.items() if key != self.definitions_key}
        source = to_canonical_json(body)
        references = frozenset(find_references(source))
        logger.debug(f"Flattened schema '{name}' (references: {sorted(references)})")
        documents.append(SchemaDocument(name=name, source=source, required_references=references))
