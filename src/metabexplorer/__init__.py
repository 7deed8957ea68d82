"""
metabexplorer: Metabolomics Data Explorer.

This package provides:
- RowTable: merged metadata + measurement rows of one view
- Option builders, selection state machine and scatter projector
- ExplorerController: NiceGUI dropdowns and Plotly scatter plot per view
- Logging utilities for library and application use

For logging configuration in scripts:
    ```python
    from metabexplorer.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When imported by another application, logging is handled by that
application's configuration.
"""

import logging

from metabexplorer.utils.logging import configure_logging, get_logger

# NullHandler so logs don't propagate to root when no application has
# configured logging. The app calls configure_logging() to add a real handler.
_logger = logging.getLogger("metabexplorer")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
