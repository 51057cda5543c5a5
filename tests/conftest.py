"""Pytest bootstrap for local source imports.

Makes ``import textnav`` resolve to the package in this checkout even when
the ``pytest`` console script runs without the repository root on sys.path.
"""

import sys
from pathlib import Path

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
