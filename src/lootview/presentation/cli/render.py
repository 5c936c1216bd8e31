"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Sequence

from lootview.services.report_builder import TierReportView, render_view


def debug_enabled() -> bool:
    """Return True only when LOOTVIEW_DEBUG is explicitly set to '1'."""
    return os.getenv("LOOTVIEW_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[tuple[str, str]]) -> None:
    """Display a menu section with keyed options."""
    render_heading(title)
    for key, label in options:
        print(f"{key}. {label}")


def render_tier_report(view: TierReportView) -> None:
    """Print a built tier report."""
    render_heading(f"Loot tables of {view.tier}")
    print(render_view(view))


def render_error(message: str) -> None:
    print(f"Error: {message}")
