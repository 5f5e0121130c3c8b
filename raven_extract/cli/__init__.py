"""Command-line tools for raven-extract.

- ``python -m raven_extract.cli`` -- extract and join the text of files.

CLI modules use argparse and defer heavy imports (providers, models)
until arguments have been validated.
"""
