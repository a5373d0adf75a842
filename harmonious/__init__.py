"""harmonious Python package.

Vertical rhythm, modular scale and responsive typographic styles.

Public API:
  - import from `harmonious.api` (preferred) or `import harmonious` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
