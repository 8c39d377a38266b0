from __future__ import annotations

__version__ = "0.1.0"

from worm.core.spawn import spawn_chains, worm

__all__ = ["spawn_chains", "worm", "__version__"]
