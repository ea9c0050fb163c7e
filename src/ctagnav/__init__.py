"""ctagnav: navigate source symbols through a ctags index."""

from __future__ import annotations

__version__ = "0.1.0"
