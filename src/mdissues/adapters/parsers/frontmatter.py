"""
Frontmatter Codec - Parse and serialize issue files.

Expected format:

    ---
    number: 42
    title: "Fix login"
    state: open
    labels:
    - bug
    - auth
    ---

    Body text...

This is a deliberately small line-based dialect, not a YAML parser. Lines
without a colon are skipped and unknown fields are kept only as raw text.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ...core.domain.entities import Issue, IssueDocument, IssueState

MARKER = "---"
LABELS_KEY = "labels"


class FrontmatterCodec:
    """
    Codec between issue file text and IssueDocument.

    Metadata round-trips losslessly only for number, title, state and
    labels. Use ``inject_number`` to write back a freshly assigned number
    without dropping fields the typed view does not model.
    """

    def __init__(self):
        self.logger = logging.getLogger("FrontmatterCodec")

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def parse(self, text: str) -> IssueDocument:
        """
        Parse file content into a document.

        A missing or unterminated metadata block is not an error: the whole
        input becomes the body and the metadata is empty.
        """
        raw_metadata, body = self.split(text.replace("\r", ""))
        document = IssueDocument(body=_clean_body(body))
        if raw_metadata is None:
            return document

        document.raw_metadata = raw_metadata.strip()
        scalars: dict[str, str] = {}
        in_labels = False

        for line in raw_metadata.splitlines():
            stripped = line.strip()
            if not stripped:
                continue

            if in_labels and stripped.startswith("-"):
                label = _unquote(stripped[1:].strip())
                if label:
                    document.labels.append(label)
                continue

            if ":" not in stripped:
                continue

            key, value = stripped.split(":", 1)
            key = key.strip()
            in_labels = key == LABELS_KEY
            if in_labels:
                continue

            scalars[key] = _unquote(value.strip())

        document.number = self._parse_number(scalars.pop("number", ""))
        document.title = scalars.pop("title", "")
        document.state = IssueState.from_string(scalars.pop("state", ""))
        document.extra = scalars
        return document

    def parse_file(self, path: Union[str, Path]) -> IssueDocument:
        return self.parse(Path(path).read_text(encoding="utf-8"))

    def split(self, text: str) -> tuple[Optional[str], str]:
        """
        Split text into (raw metadata, body).

        The opening marker must be the first non-blank line. Returns None
        for the metadata when the marker does not appear twice.
        """
        lines = text.lstrip("\ufeff").split("\n")

        start = 0
        while start < len(lines) and not lines[start].strip():
            start += 1
        if start >= len(lines) or lines[start].strip() != MARKER:
            return None, text

        for end in range(start + 1, len(lines)):
            if lines[end].strip() == MARKER:
                metadata = "\n".join(lines[start + 1:end])
                body = "\n".join(lines[end + 1:])
                return metadata, body

        return None, text

    def _parse_number(self, value: str) -> Optional[int]:
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            self.logger.debug(f"Ignoring non-integer number field: {value!r}")
            return None

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def serialize(self, document: IssueDocument) -> str:
        """Render a document with fields in fixed order."""
        lines = [MARKER]
        if document.number is not None:
            lines.append(f"number: {document.number}")
        lines.append(f'title: "{_escape(document.title)}"')
        if document.state is not None:
            lines.append(f"state: {document.state.value}")
        lines.append(f"{LABELS_KEY}:")
        for label in document.labels:
            lines.append(f"- {label}")
        lines.append(MARKER)
        lines.append("")
        return _join_with_body(lines, document.body)

    def render_issue(self, issue: Issue) -> str:
        return self.serialize(IssueDocument.from_issue(issue))

    def inject_number(self, document: IssueDocument, number: int) -> str:
        """
        Rewrite a freshly created document with its assigned number.

        Uses the original raw metadata text, so fields the typed view does
        not model survive. Any existing ``number`` line is replaced.
        """
        kept = [
            line for line in document.raw_metadata.splitlines()
            if line.split(":", 1)[0].strip() != "number"
        ]
        lines = [MARKER, f"number: {number}"]
        lines.extend(kept)
        lines.append(MARKER)
        lines.append("")
        return _join_with_body(lines, document.body)


def _unquote(value: str) -> str:
    """Strip one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        inner = value[1:-1]
        if value[0] == '"':
            inner = inner.replace('\\"', '"')
        return inner
    return value


def _escape(value: str) -> str:
    return value.replace('"', '\\"')


def _clean_body(body: str) -> str:
    return body.replace("\r", "").strip()


def _join_with_body(lines: list[str], body: str) -> str:
    body = _clean_body(body)
    text = "\n".join(lines) + "\n" + body
    if body:
        text += "\n"
    return text
