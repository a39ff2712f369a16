"""
Static table of standard-library top-level module names.

Built once at import time and never mutated afterwards, so worker threads can
read it without locking.
"""

from __future__ import annotations

import sys
from typing import FrozenSet

STDLIB_MODULE_NAMES: FrozenSet[str] = frozenset(sys.stdlib_module_names) | {"__future__"}
