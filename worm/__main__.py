"""Run the worm fixture.

Usage:
    python -m worm [SECONDS]
"""

from __future__ import annotations

from worm.cli import main


if __name__ == "__main__":
    main()
