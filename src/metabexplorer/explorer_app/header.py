"""Header component for the explorer app.

Provides build_explorer_header() with the app title and one navigation link
per view; the link of the current page is highlighted.
"""

from __future__ import annotations

from nicegui import ui

from metabexplorer.explorer.view_config import ViewConfig, all_views

APP_TITLE = "Metabolomics Data Explorer"


def build_explorer_header(active: ViewConfig) -> None:
    """Build header with title and navigation links.

    Args:
        active: View of the current page.
    """
    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        with ui.row().classes("items-center gap-2"):
            ui.label(APP_TITLE).classes("!text-lg font-bold text-white")

        with ui.row().classes("items-center gap-4"):
            for view in all_views():
                link = ui.link(view.title, view.route).classes("text-white no-underline")
                if view.name == active.name:
                    link.classes("font-bold underline")
