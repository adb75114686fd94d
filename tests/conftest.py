"""Pytest configuration.

This conftest ensures tests can import from the `cresta.*` namespace when running `pytest` locally
without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import cresta...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
