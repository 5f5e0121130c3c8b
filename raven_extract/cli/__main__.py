"""Allow ``python -m raven_extract.cli`` execution."""

from raven_extract.cli.extract import main

main()
