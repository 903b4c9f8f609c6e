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

"""Custom exceptions for the named JSON Schema registry."""

from typing import Iterable, List, Optional, Tuple


class NamedSchemaError(Exception):
    """Base exception for schema registry related errors."""
    pass


class SchemaIOError(NamedSchemaError):
    """Exception raised when a schema file or directory cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FormatError(NamedSchemaError):
    """Exception raised for malformed schema documents or instances."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NameCollisionError(NamedSchemaError):
    """Exception raised when a schema name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"multiple definitions for schema with name: {name}")
        self.name = name


class MissingReferenceError(NamedSchemaError):
    """Exception raised when symbolic references point at unregistered names.

    ``missing`` holds every ``(missing_name, referenced_from)`` pair found in
    one compile attempt.
    """

    def __init__(self, missing: Iterable[Tuple[str, str]]):
        self.missing: List[Tuple[str, str]] = list(missing)
        details = ", ".join(f"{name}({source})" for name, source in self.missing)
        super().__init__(f"missing required references: {details}")


class CompilationError(NamedSchemaError):
    """Exception raised when the schema engine rejects a schema body."""

    def __init__(self, message: str, schema_name: str):
        super().__init__(message)
        self.schema_name = schema_name


class UnknownSchemaError(NamedSchemaError):
    """Exception raised when validating against an unregistered schema."""

    def __init__(self, name: str):
        super().__init__(f"schema does not exist with name: {name}")
        self.name = name


class UnresolvableReferenceError(NamedSchemaError):
    """Exception raised when a non-symbolic $ref cannot be resolved during validation."""

    def __init__(self, message: str, schema_name: str):
        super().__init__(message)
        self.schema_name = schema_name
