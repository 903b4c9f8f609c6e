"""File I/O related utilities.

Reading schema files and directories for the registry, and loading instance
documents (JSON or YAML) for validation.
"""

from .schema_files import list_schema_files, read_schema_file, schema_name_for_file
from .instance_loader import load_instance

__all__ = [
    "list_schema_files",
    "read_schema_file",
    "schema_name_for_file",
    "load_instance",
]
