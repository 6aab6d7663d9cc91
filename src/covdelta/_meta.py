from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("covdelta")

logger = logging.getLogger("covdelta")

__all__ = ["__version__", "logger"]
