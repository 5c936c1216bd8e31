from __future__ import annotations

import base64
from typing import Dict, List

from lootview.data.errors import NetworkError

ASSET_ROOT = "https://example.test/contents/"


def make_envelope(text: str, *, wrap: int = 60) -> dict[str, object]:
    """Build a file content envelope the way the contents API returns it."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    chunks = [encoded[index:index + wrap] for index in range(0, len(encoded), wrap)]
    return {"name": "file.ron", "encoding": "base64", "content": "\n".join(chunks) + "\n"}


def make_item_description(name: str) -> str:
    return f'ItemDef(\n    name: "{name}",\n    description: "Flavour text",\n    kind: Ingredient,\n)\n'


class FakeFetcher:
    """In-memory stand-in for RemoteFetcher keyed by locator."""

    def __init__(self, responses: Dict[str, object] | None = None) -> None:
        self.responses: Dict[str, object] = dict(responses or {})
        self.requested: List[str] = []

    def add_file(self, locator: str, text: str) -> None:
        self.responses[locator] = make_envelope(text)

    def add_item(self, asset_path: str, name: str) -> None:
        locator = f"{ASSET_ROOT}{asset_path.replace('.', '/')}.ron"
        self.add_file(locator, make_item_description(name))

    def add_table(self, asset_path: str, text: str) -> None:
        self.add_file(f"{ASSET_ROOT}{asset_path.replace('.', '/')}.ron", text)

    def fetch_json(self, locator: str) -> object:
        self.requested.append(locator)
        if locator not in self.responses:
            raise NetworkError(f"Request to {locator} returned HTTP 404 Not Found", locator=locator, status_code=404)
        response = self.responses[locator]
        if isinstance(response, Exception):
            raise response
        return response
