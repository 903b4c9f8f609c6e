#!/usr/bin/env python3
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

"""CLI entry point for listing, compiling and validating against named schemas."""

import argparse
import json
import sys
from typing import List

from ..builder.schema_registry import SchemaRegistry
from ..config import RegistryConfig
from ..exceptions import NamedSchemaError
from ..file_io.instance_loader import load_instance
from ..validator import Validator


def build_registry(args: argparse.Namespace) -> SchemaRegistry:
    """Create a registry from the --dir and --file arguments."""
    config = RegistryConfig(
        log_level=args.log_level,
        print_level="WARNING",
        format_checking=args.format_checking,
    )
    config.set_logging()

    registry = SchemaRegistry(config)
    for dir_path in args.dirs:
        registry.add_dir(args.prefix, dir_path)
    for file_path in args.files:
        registry.add_file(args.prefix, file_path)
    return registry


def _cmd_list(registry: SchemaRegistry, args: argparse.Namespace) -> int:
    for name in registry.names():
        refs = ", ".join(sorted(registry.required_references(name)))
        print(f"{name}" + (f" -> {refs}" if refs else ""))
    return 0


def _cmd_check(registry: SchemaRegistry, args: argparse.Namespace) -> int:
    validator = registry.compile()
    print(f"Compiled {len(validator)} schema(s) with no errors.")
    return 0


def _cmd_validate(registry: SchemaRegistry, args: argparse.Namespace) -> int:
    validator: Validator = registry.compile()

    results = []
    for instance_path in args.instances:
        result = validator.validate_data(args.schema, load_instance(instance_path))
        results.append((instance_path, result))

    if args.format == 'json':
        output = {
            'schema': args.schema,
            'instances': len(results),
            'invalid': sum(1 for _, r in results if not r.valid),
            'results': [
                {
                    'file': path,
                    'valid': r.valid,
                    'errors': [
                        {'path': i.path, 'pointer': i.json_pointer, 'keyword': i.keyword, 'message': i.message}
                        for i in r.issues
                    ],
                }
                for path, r in results
            ],
        }
        print(json.dumps(output, indent=2))
    else:  # human-readable
        for path, result in results:
            if result.valid:
                print(f"{path}: OK")
                continue
            print(f"\n{path}:")
            for issue in result.issues:
                print(f"  ERROR {issue.path}: {issue.message}")

    return 1 if any(not r.valid for _, r in results) else 0


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description='Register JSON Schemas that reference each other by name and validate instances',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--dir',
        dest='dirs',
        action='append',
        default=[],
        help='Directory whose .json files are added as schemas (not recursive, repeatable)',
    )
    parser.add_argument(
        '--file',
        dest='files',
        action='append',
        default=[],
        help='Schema file to add (repeatable)',
    )
    parser.add_argument(
        '--prefix',
        default='',
        help='Prefix prepended to every schema name (default: none)',
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        help='Log level (default: WARNING)',
    )
    parser.add_argument(
        '--format-checking',
        action='store_true',
        help='Enable "format" keyword assertions',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)
    list_parser = subparsers.add_parser('list', help='List registered schemas and their references')
    list_parser.set_defaults(handler=_cmd_list)

    check_parser = subparsers.add_parser('check', help='Compile all schemas and report errors')
    check_parser.set_defaults(handler=_cmd_check)

    validate_parser = subparsers.add_parser('validate', help='Validate instance files against a schema')
    validate_parser.add_argument('schema', help='Name of the schema to validate against')
    validate_parser.add_argument('instances', nargs='+', help='JSON or YAML instance files')
    validate_parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    validate_parser.set_defaults(handler=_cmd_validate)

    args = parser.parse_args(argv)

    try:
        registry = build_registry(args)
        exit_code = args.handler(registry, args)
    except NamedSchemaError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
