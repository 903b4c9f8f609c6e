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

"""Instance document loading for JSON and YAML files."""

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from ..exceptions import FormatError, SchemaIOError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_instance(file_path: Union[str, Path]) -> Any:
    """Load an instance document to validate.

    ``.yaml``/``.yml`` files are parsed with PyYAML's safe loader, anything
    else as JSON.

    Args:
        file_path: Path to the instance file

    Returns:
        Decoded instance

    Raises:
        SchemaIOError: If the file cannot be read
        FormatError: If the content cannot be parsed
    """
    path = Path(file_path)

    if not path.is_file():
        raise SchemaIOError(f"Instance file not found: {path}", path=str(path))

    try:
        logger.debug(f"Loading instance file: {path}")
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaIOError(f"Failed to read instance file {path}: {exc}", path=str(path)) from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise FormatError(f"Failed to parse YAML file {path}: {exc}", path=str(path)) from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Failed to parse JSON file {path}: {exc}", path=str(path)) from exc
