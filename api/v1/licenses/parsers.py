"""
Request parsers for license CSV upload.
"""

from rest_framework.parsers import BaseParser


class CSVTextParser(BaseParser):
    """Accepts a raw text/csv body and returns it as bytes."""

    media_type = "text/csv"

    def parse(self, stream, media_type=None, parser_context=None):
        return stream.read() if stream is not None else b""
