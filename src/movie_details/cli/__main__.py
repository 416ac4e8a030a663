"""Allow running the CLI with ``python -m movie_details.cli``."""

from .main import main

main()
