"""Module entrypoint for `python -m named_jsonschema`.

Delegates to the CLI implementation.
"""

from .cli.run_cli import main


if __name__ == "__main__":
    main()
