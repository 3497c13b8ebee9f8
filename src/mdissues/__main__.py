"""Allow ``python -m mdissues``."""

from .cli import run

run()
