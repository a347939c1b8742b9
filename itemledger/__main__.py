"""Entry point for `python -m itemledger`.

Usage:
    python -m itemledger
    uv run python -m itemledger
"""

from __future__ import annotations

import asyncio

from itemledger.app import main

asyncio.run(main())
