# package version only; submodules are imported by their full path
from __future__ import annotations

__version__ = "0.1.0"
