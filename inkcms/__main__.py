"""Entry point for the Ink CLI.

Allows running the tool as ``python -m inkcms``.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
