"""fzbarber: earnings dashboard for a barbershop."""

from __future__ import annotations

from .config import BaseConfig

__version__ = "0.1.0"

__all__ = ["BaseConfig", "__version__"]
