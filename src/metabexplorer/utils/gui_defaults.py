"""Set up default classes and props for NiceGUI widgets.

The explorer pages only use labels, links, selects and buttons, so only
those are styled here.
"""

from __future__ import annotations

from nicegui import ui

from metabexplorer.utils.logging import get_logger

logger = get_logger(__name__)

# map tailwind to quasar size
_QUASAR_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = 'text-base'):
    """Set up default classes and props for the ui elements used by the explorer.

    Args:
        text_size: Tailwind CSS text size class (e.g., 'text-xs', 'text-sm',
                   'text-base', 'text-lg'). Defaults to 'text-base'.

    Raises:
        ValueError: If text_size is not one of the supported classes.
    """
    if text_size not in _QUASAR_SIZES:
        raise ValueError(f"Unsupported text_size {text_size!r}; expected one of {sorted(_QUASAR_SIZES)}")
    text_size_quasar = _QUASAR_SIZES[text_size]

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")  #  select-text allows double-click selection
    #
    ui.link.default_classes(text_size)
    #
    ui.button.default_classes(text_size)
    ui.button.default_props("dense")
    #
    ui.select.default_classes(text_size)
    ui.select.default_props("dense options-dense clearable")
