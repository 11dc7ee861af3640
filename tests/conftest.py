"""Shared pytest setup for the Zendesk adapter tests.

Puts the repository root on sys.path so `zendesk_app` imports from the working
tree even when the project has not been installed with `pip install -e .`.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
