"""
tidyimports

Reorganizes the leading import block of Python source files into a
canonical, grouped and sorted layout, rewriting files only when needed.

Package rule: importing this package must stay cheap. The CLI lives in
tidyimports.cli and is only loaded by the console entry point.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
