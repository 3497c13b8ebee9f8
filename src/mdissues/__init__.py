"""
md-issues - Two-way sync between GitHub issues and markdown files.

Open issues live in ``issues/``, closed ones in ``issues/closed/``. Each file
is named ``{number}-{slug}.md`` and starts with a small metadata block.
"""

__version__ = "0.3.0"
