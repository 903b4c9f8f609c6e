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

"""Symbolic reference helpers.

A symbolic reference is a ``$ref`` whose value is wrapped in braces, e.g.
``"$ref": "{Address}"``. It names a schema in the registry instead of a URI.
"""

import json
import re
from typing import Callable, Set, TypeVar, Union

# Groups: 1 = '"$ref"<ws>:<ws>"', 2 = name (JSON-escaped), 3 = closing quote
SYMBOLIC_REF_PATTERN = re.compile(r'("\$ref"\s*:\s*")\{([^"]+?)\}(")')

Source = TypeVar("Source", bytes, str)


def _as_text(source: Union[bytes, str]) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8")
    return source


def _unescape(escaped: str) -> str:
    return json.loads(f'"{escaped}"')


def _escape(name: str) -> str:
    return json.dumps(name, ensure_ascii=False)[1:-1]


def find_references(source: Union[bytes, str]) -> Set[str]:
    """Return the names of every symbolic reference in a serialized schema.

    Args:
        source: Serialized JSON (bytes or str)

    Returns:
        Set of referenced names, braces stripped and JSON escapes decoded
    """
    return {_unescape(match.group(2)) for match in SYMBOLIC_REF_PATTERN.finditer(_as_text(source))}


def rewrite_references(source: Source, replace: Callable[[str], str]) -> Source:
    """Replace every symbolic reference ``{Name}`` with ``replace(Name)``.

    Only the braces and the name are substituted; the key, the colon and the
    surrounding whitespace are kept as they were. ``replace`` receives the
    decoded name and its result is escaped back into the JSON string.
    Non-symbolic refs are left untouched. The result has the same type as
    ``source``.
    """
    text = _as_text(source)
    rewritten = SYMBOLIC_REF_PATTERN.sub(
        lambda m: f"{m.group(1)}{_escape(replace(_unescape(m.group(2))))}{m.group(3)}",
        text,
    )
    if isinstance(source, bytes):
        return rewritten.encode("utf-8")
    return rewritten
