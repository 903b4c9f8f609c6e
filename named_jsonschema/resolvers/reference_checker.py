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

"""Completeness check over the symbolic reference graph."""

import logging
from typing import List, Mapping, NamedTuple

from ..exceptions import MissingReferenceError
from ..models.schema_document import SchemaDocument

logger = logging.getLogger(__name__)


class MissingReference(NamedTuple):
    missing: str
    referenced_from: str


def find_missing_references(documents: Mapping[str, SchemaDocument]) -> List[MissingReference]:
    """Collect every symbolic reference that names an unregistered schema.

    Args:
        documents: Registry contents, keyed by name

    Returns:
        Sorted list of (missing, referenced_from) pairs; empty if the graph is closed
    """
    missing: List[MissingReference] = []
    for name, document in documents.items():
        for reference in document.required_references:
            if reference not in documents:
                missing.append(MissingReference(reference, name))
    return sorted(missing)


def check_references(documents: Mapping[str, SchemaDocument]) -> None:
    """Raise MissingReferenceError listing all unresolved references, if any."""
    missing = find_missing_references(documents)
    if missing:
        logger.error(f"{len(missing)} unresolved symbolic reference(s) across {len(documents)} schemas")
        raise MissingReferenceError(missing)
