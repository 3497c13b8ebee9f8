"""
Naming - Slugs and canonical filenames for issue files.

An issue file is named ``{number}-{slug(title)}.md``. The older bare
``{number}.md`` form is still recognized so it can be cleaned up.
"""

import re
from pathlib import Path
from typing import Optional

DEFAULT_EXTENSION = ".md"

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]")
_MULTI_HYPHEN = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    Turn a title into a filesystem-safe token.

    The result may be empty when the title has no letters or digits,
    e.g. ``slugify("!!!") == ""``.
    """
    slug = title.lower().replace(" ", "-")
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    return slug.strip("-")


def canonical_filename(number: int, title: str, extension: str = DEFAULT_EXTENSION) -> str:
    """The single correct filename for an issue's current number and title."""
    return f"{number}-{slugify(title)}{extension}"


def legacy_filename(number: int, extension: str = DEFAULT_EXTENSION) -> str:
    return f"{number}{extension}"


def parse_issue_number(filename: str) -> Optional[int]:
    """
    Extract the issue number from a filename.

    Takes the part of the stem before the first hyphen (or the whole stem).
    Returns None if that is not an integer, meaning the file is not an
    issue file.
    """
    stem = Path(filename).stem
    candidate = stem.split("-", 1)[0]
    if not candidate.isdigit():
        return None
    return int(candidate)


def find_issue_files(
    number: int,
    directory: Path,
    extension: str = DEFAULT_EXTENSION,
) -> list[Path]:
    """
    List every file in ``directory`` that represents issue ``number``.

    Matches ``{number}-*{extension}`` and the legacy ``{number}{extension}``.
    Reads the directory on every call; callers must not cache the result
    across a batch because earlier items may have changed the layout.
    """
    if not directory.is_dir():
        return []

    prefix = f"{number}-"
    legacy = legacy_filename(number, extension)
    matches = []
    for entry in directory.iterdir():
        if not entry.is_file():
            continue
        name = entry.name
        if name == legacy or (name.startswith(prefix) and name.endswith(extension)):
            matches.append(entry)
    return sorted(matches)
