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

"""Configuration for the schema registry."""

import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging

DRAFT7_DIALECT = "http://json-schema.org/draft-07/schema#"


@dataclass
class RegistryConfig:
    """Configuration class for schema registration and compilation."""
    definitions_key: str = "definitions"
    schema_suffix: str = ".json"
    max_definition_depth: int = 64

    # engine
    default_dialect: str = DRAFT7_DIALECT
    format_checking: bool = False

    # logging
    log_level: str = "INFO"
    print_level: str = "ERROR"

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)
