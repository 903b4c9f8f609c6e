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

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple


@dataclass(frozen=True)
class SchemaDocument:
    """One flattened, named schema body held by the registry."""

    name: str
    source: bytes
    required_references: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def body(self) -> Dict[str, Any]:
        # Fresh copy on every access; the stored bytes are never mutated.
        return json.loads(self.source)


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    path: str = "(root)"
    json_pointer: str = ""
    keyword: str = ""
    schema_path: str = ""


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    issues: Tuple[SchemaIssue, ...] = ()

    def __bool__(self) -> bool:
        return self.valid
