"""Gives freshly created characters a key in their starting inventory."""

from __future__ import annotations

from collections.abc import Mapping

from d2tables.table_view import TableView

_INVENTORY_SLOTS = 10


def add_start_keys(charstats: TableView) -> int:
    """Put a key into the first free starting item slot of every class.

    Returns the number of classes that received a key.
    """
    charstats.mark_modified()
    added = 0
    for row in charstats:
        if row["class"] == "Expansion":
            continue
        for i in range(1, _INVENTORY_SLOTS + 1):
            code = row[f"item{i}"]
            count = row[f"item{i}count"]
            if count.to_int() == 0:
                count.set_int(1)
                code.text = "key"
                added += 1
                break
    return added


def generate(charstats: TableView, settings: Mapping[str, object]) -> int:
    """Apply :func:`add_start_keys` when ``settings['addKeys']`` is set."""
    if not settings.get("addKeys", False):
        return 0
    return add_start_keys(charstats)