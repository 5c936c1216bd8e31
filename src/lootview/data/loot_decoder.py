"""Decoding of loot table description files into LootTable values."""
from __future__ import annotations

import logging
from typing import List

from lootview.domain.defs import (
    ItemQuantityRef,
    ItemRef,
    LootEntry,
    LootReference,
    LootTable,
    LootTableRef,
    NothingRef,
)

from . import ron
from .envelope import decode_envelope_text
from .errors import DecodeError

logger = logging.getLogger(__name__)

_ARITY = {"Item": 1, "ItemQuantity": 3, "LootTable": 1}


def _excerpt(text: str, limit: int = 200) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[:limit]}..."


def decode_loot_table(envelope: object) -> LootTable:
    """Decode a file content envelope into a LootTable."""
    return parse_loot_text(decode_envelope_text(envelope))


def parse_loot_text(text: str) -> LootTable:
    """Parse stored loot text, which omits the outer ``(loot: ...)`` wrapper."""
    wrapped = f"(loot: {text}\n)"
    try:
        document = ron.loads(wrapped)
    except ron.RonSyntaxError as exc:
        raise DecodeError(f"Malformed loot table: {exc}", text=text) from exc

    if not isinstance(document, ron.RonStruct) or set(document.fields) != {"loot"}:
        raise DecodeError("Loot table must contain exactly one 'loot' field.", text=text)
    raw_entries = document.fields["loot"]
    if not isinstance(raw_entries, list):
        raise DecodeError("'loot' must be a list of (weight, reference) pairs.", text=text)

    entries: List[LootEntry] = []
    for index, raw_entry in enumerate(raw_entries):
        context = f"loot[{index}]"
        try:
            entries.append(_build_entry(raw_entry, context))
        except DecodeError as exc:
            raise DecodeError(str(exc), text=_excerpt(text)) from exc
        except ValueError as exc:
            raise DecodeError(f"{context}: {exc}", text=_excerpt(text)) from exc

    if not entries:
        logger.debug("Empty loot list decoded as the default table")
        return LootTable.default()
    return LootTable(tuple(entries))


def _build_entry(raw_entry: object, context: str) -> LootEntry:
    if not isinstance(raw_entry, ron.RonTuple) or raw_entry.name is not None or len(raw_entry.items) != 2:
        raise DecodeError(f"{context} must be a (weight, reference) pair.")
    raw_weight, raw_reference = raw_entry.items
    if isinstance(raw_weight, bool) or not isinstance(raw_weight, (int, float)):
        raise DecodeError(f"{context}.weight must be a number.")
    return LootEntry(float(raw_weight), _build_reference(raw_reference, f"{context}.reference"))


def _build_reference(raw: object, context: str) -> LootReference:
    if isinstance(raw, ron.RonUnit):
        if raw.name == "Nothing":
            return NothingRef()
        if raw.name in _ARITY:
            raise DecodeError(f"{context}: {raw.name} expects {_ARITY[raw.name]} field(s).")
        raise DecodeError(f"{context}: unknown loot reference '{raw.name}'.")

    if not isinstance(raw, ron.RonTuple) or raw.name is None:
        raise DecodeError(f"{context} must be Item, ItemQuantity, LootTable or Nothing.")

    tag = raw.name
    if tag == "Nothing":
        raise DecodeError(f"{context}: Nothing takes no fields.")
    if tag not in _ARITY:
        raise DecodeError(f"{context}: unknown loot reference '{tag}'.")
    if len(raw.items) != _ARITY[tag]:
        raise DecodeError(
            f"{context}: {tag} expects {_ARITY[tag]} field(s), got {len(raw.items)}."
        )

    path = raw.items[0]
    if not isinstance(path, str):
        raise DecodeError(f"{context}: {tag} path must be a string.")
    if tag == "Item":
        return ItemRef(path)
    if tag == "LootTable":
        return LootTableRef(path)

    min_qty, max_qty = raw.items[1], raw.items[2]
    for label, value in (("min", min_qty), ("max", max_qty)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"{context}: ItemQuantity {label} must be an integer.")
    return ItemQuantityRef(path, min_qty, max_qty)


def _reference_to_ron(reference: LootReference) -> object:
    match reference:
        case ItemRef(path=path):
            return ron.RonTuple("Item", (path,))
        case ItemQuantityRef(path=path, min_qty=min_qty, max_qty=max_qty):
            return ron.RonTuple("ItemQuantity", (path, min_qty, max_qty))
        case LootTableRef(path=path):
            return ron.RonTuple("LootTable", (path,))
        case NothingRef():
            return ron.RonUnit("Nothing")
    raise TypeError(f"Unsupported loot reference {reference!r}")


def encode_loot_table(table: LootTable) -> str:
    """Write a LootTable in the stored text form (without the ``loot`` wrapper)."""
    pairs = [ron.RonTuple(None, (entry.weight, _reference_to_ron(entry.reference))) for entry in table]
    return ron.dumps(pairs, indent="    ") + "\n"
