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

"""File system access for schema documents."""

import logging
from pathlib import Path
from typing import List, Union

from ..exceptions import FormatError, SchemaIOError

logger = logging.getLogger(__name__)


def schema_name_for_file(prefix: str, file_path: Union[str, Path], suffix: str = ".json") -> str:
    """Derive the registry name for a schema file: ``prefix`` + base name without suffix."""
    path = Path(file_path)
    if not path.name.endswith(suffix) or len(path.name) == len(suffix):
        raise FormatError(
            f"failed to add file as schema - file must have a {suffix} ext: {path}", path=str(path)
        )
    return prefix + path.name[: -len(suffix)]


def read_schema_file(file_path: Union[str, Path]) -> bytes:
    """Read the raw bytes of a schema file.

    Raises:
        SchemaIOError: If the file cannot be read
    """
    path = Path(file_path)
    try:
        logger.debug(f"Reading schema file: {path}")
        return path.read_bytes()
    except OSError as exc:
        raise SchemaIOError(f"failed to read file: {path}: {exc}", path=str(path)) from exc


def list_schema_files(dir_path: Union[str, Path], suffix: str = ".json") -> List[Path]:
    """List schema files directly inside ``dir_path`` (not recursive), sorted by name.

    Raises:
        SchemaIOError: If the directory cannot be listed
    """
    path = Path(dir_path)
    if not path.is_dir():
        raise SchemaIOError(f"failed during directory walk of {path}: not a directory", path=str(path))
    try:
        entries = list(path.iterdir())
    except OSError as exc:
        raise SchemaIOError(f"failed during directory walk of {path}: {exc}", path=str(path)) from exc
    return sorted(p for p in entries if p.is_file() and p.name.endswith(suffix))
