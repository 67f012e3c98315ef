"""Output formatting for rendered JSON-LD documents."""
from __future__ import annotations

import json

SCRIPT_ID = "rankgraph-schema"


class Printer:
    """Formats a rendered ``@graph`` document for embedding in a page."""

    def __init__(self, document: dict | None, debug: bool = False):
        self.document = document
        self.debug = debug

    def format_json(self) -> str | None:
        """Encode the document as UTF-8 JSON. Returns None if there is nothing to print.

        Output is compact unless debug mode is on. ``</`` is escaped so the
        JSON can never close the surrounding script element.
        """
        if not self.document:
            return None
        if self.debug:
            encoded = json.dumps(self.document, ensure_ascii=False, indent=2)
        else:
            encoded = json.dumps(self.document, ensure_ascii=False, separators=(",", ":"))
        return encoded.replace("</", "<\\/")

    def format_script_tag(self) -> str | None:
        encoded = self.format_json()
        if encoded is None:
            return None
        return f'<script type="application/ld+json" id="{SCRIPT_ID}">{encoded}</script>'
