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

"""Per-schema dependency closure compilation.

Every registered schema is compiled against its own loader, holding exactly
the schemas it reaches through symbolic references. Symbolic references are
rewritten to synthetic locators so the engine can resolve them natively.
Reference cycles are allowed: the engine resolves refs lazily, so a
back-edge only needs its target to be present in the loader by the time
validation runs. The schema being compiled is never added to the loader as a
dependency; it is compiled last and made addressable under its own locator.
"""

import json
import logging
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import quote

from jsonschema.exceptions import SchemaError

from ..config import RegistryConfig
from ..exceptions import CompilationError
from ..models.schema_document import SchemaDocument
from ..models.schema_engine import CompiledSchema, SchemaLoader
from ..utils.references import rewrite_references

logger = logging.getLogger(__name__)

SYNTHETIC_LOCATOR_PREFIX = "urn:named-jsonschema:"


def to_locator(name: str) -> str:
    """Map a schema name to the URI the engine knows it by.

    The name is percent-encoded so characters such as ``#`` or ``/`` stay
    part of the locator instead of starting a fragment or a path.
    """
    return SYNTHETIC_LOCATOR_PREFIX + quote(name, safe="")


class VisitState(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


class ClosureCompiler:
    """Compiles every schema of a closed registry into a CompiledSchema."""

    def __init__(self, documents: Mapping[str, SchemaDocument], config: Optional[RegistryConfig] = None):
        self._documents = documents
        self._config = config or RegistryConfig()

    def compile_all(self) -> Dict[str, CompiledSchema]:
        """Compile every schema; the first engine rejection aborts the whole pass.

        Raises:
            CompilationError: If the engine rejects any schema body
        """
        compiled: Dict[str, CompiledSchema] = {}
        for name in sorted(self._documents):
            compiled[name] = self.compile_target(name)
        return compiled

    def compile_target(self, target: str) -> CompiledSchema:
        loader = SchemaLoader(
            default_dialect=self._config.default_dialect,
            format_checking=self._config.format_checking,
        )
        status: Dict[str, VisitState] = {target: VisitState.IN_PROGRESS}
        for dependency in sorted(self._documents[target].required_references):
            self._register_closure(dependency, status, loader)

        try:
            schema = loader.compile(self._rewritten_body(target), locator=to_locator(target))
        except SchemaError as exc:
            raise CompilationError(
                f"failed to compile schema with name: {target}: {exc.message}", schema_name=target
            ) from exc

        logger.debug(f"Compiled schema '{target}' with {len(loader)} dependencies")
        return schema

    def _register_closure(self, root: str, status: Dict[str, VisitState], loader: SchemaLoader) -> None:
        """Add ``root`` and everything it reaches to ``loader``, dependencies first.

        Iterative post-order DFS; names already in progress (back-edges) or
        done are skipped.
        """
        if status.get(root, VisitState.UNVISITED) is not VisitState.UNVISITED:
            return

        status[root] = VisitState.IN_PROGRESS
        stack: List[Tuple[str, Iterator[str]]] = [(root, self._dependencies(root))]
        while stack:
            name, pending = stack[-1]
            for dependency in pending:
                if status.get(dependency, VisitState.UNVISITED) is VisitState.UNVISITED:
                    status[dependency] = VisitState.IN_PROGRESS
                    stack.append((dependency, self._dependencies(dependency)))
                    break
            else:
                stack.pop()
                self._add_to_loader(name, loader)
                status[name] = VisitState.DONE

    def _dependencies(self, name: str) -> Iterator[str]:
        return iter(sorted(self._documents[name].required_references))

    def _add_to_loader(self, name: str, loader: SchemaLoader) -> None:
        try:
            loader.add_schema(to_locator(name), self._rewritten_body(name))
        except SchemaError as exc:
            raise CompilationError(
                f"failed to load schema with name: {name}: {exc.message}", schema_name=name
            ) from exc

    def _rewritten_body(self, name: str) -> dict:
        return json.loads(rewrite_references(self._documents[name].source, to_locator))
