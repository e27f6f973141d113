"""Allow ``python -m acon``."""

from .cli import main

main()
