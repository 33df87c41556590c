"""Shared test fixtures for fmedit tests."""

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

if TYPE_CHECKING:
    from fmedit.document import WireDocument

INVENTORY_WIRE: "WireDocument" = {
    "identifier": "inv_item",
    "title": "Inventory Item",
    "rename_this_section": {"total": "32"},
    "inventory": {
        "container": "lab_small_parts",
        "items": ["AKG Wired Earbuds", "Steel Series Arctis 5 Cable"],
    },
}


@pytest.fixture
def inventory_wire() -> "WireDocument":
    """Return a fresh copy of the inventory page front matter."""
    import copy

    return copy.deepcopy(INVENTORY_WIRE)


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def write_page(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a function writing *content* to tmp_path/*name*."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
