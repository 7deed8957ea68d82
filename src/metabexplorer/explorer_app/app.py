"""Explorer app: standalone NiceGUI application for the explorer views.

Serves the in vitro view at "/" and the in vivo view at "/invivo". Each page
loads its two tables once and builds an ExplorerController.

Run:
    python -m metabexplorer.explorer_app.app

Env vars:
    METABEXPLORER_GUI_NATIVE: 1/0 (default 0)
    METABEXPLORER_GUI_RELOAD: 1/0 (default 0)
    METABEXPLORER_DATA_DIR: directory holding the data tables
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
import multiprocessing as mp
from multiprocessing import freeze_support

from nicegui import ui

from metabexplorer.utils.gui_defaults import setUpGuiDefaults
from metabexplorer.utils.logging import configure_logging, get_logger
from metabexplorer.explorer.data_loader import load_view_table
from metabexplorer.explorer.explorer_controller import ExplorerController
from metabexplorer.explorer.view_config import IN_VITRO, IN_VIVO, ViewConfig
from metabexplorer.explorer_app import header

logger = get_logger(__name__)

configure_logging()


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

def build_view_page(view: ViewConfig) -> None:
    """Header + ExplorerController for view; load failures are shown on the page."""
    setUpGuiDefaults('text-sm')

    ui.page_title(f"{header.APP_TITLE}: {view.title}")

    header.build_explorer_header(view)

    with ui.column().classes("w-full gap-4 p-4"):
        main_container = ui.column().classes("w-full gap-4")

        try:
            table = load_view_table(view)
            ctrl = ExplorerController(table)
            ctrl.build(container=main_container)
        except FileNotFoundError as e:
            logger.error(f"{view.name}: {e}")
            with main_container:
                ui.label(f"Data for {view.title} not found: {e}").classes("text-negative")
        except Exception as e:
            logger.exception("Failed to load %s: %s", view.name, e)
            with main_container:
                ui.label(f"Failed to load: {e}").classes("text-negative")


@ui.page(IN_VITRO.route)
def in_vitro_page() -> None:
    build_view_page(IN_VITRO)


@ui.page(IN_VIVO.route)
def in_vivo_page() -> None:
    build_view_page(IN_VIVO)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the explorer application.

    Defaults (no env vars, no args):
      - native=False
      - reload=False

    Env vars (used when arg is None):
      - METABEXPLORER_GUI_NATIVE: 1/0
      - METABEXPLORER_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    native_bool = _env_bool("METABEXPLORER_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("METABEXPLORER_GUI_RELOAD", False) if reload is None else reload

    from nicegui import native as native_module
    if native_bool:
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting explorer app: host=%s port=%s reload=%s native=%s",
        host,
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "title": header.APP_TITLE,
    }
    if native_bool:
        run_kwargs["window_size"] = (1200, 800)
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    current_process = mp.current_process()
    if current_process.name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", current_process.name)
