"""
Document Parsers - Convert issue files into domain documents and back.
"""

from .frontmatter import FrontmatterCodec

__all__ = ["FrontmatterCodec"]
