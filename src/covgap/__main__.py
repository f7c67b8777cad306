"""Allow ``python -m covgap``."""

from covgap.cli import main

main()
