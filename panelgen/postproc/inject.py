"""Head injection of asset tags into template markup."""

from __future__ import annotations

import re
from typing import Sequence

_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)


def inject_tags(html: str, tags: Sequence[str]) -> str:
    """Insert `tags` right before the first closing head tag.

    The tags are newline-joined and nothing is added around them. Templates
    without a head get the block prepended, followed by one newline so the
    original first line stays on its own line. Nothing else changes.
    """
    if not tags:
        return html
    block = "\n".join(tags)
    match = _HEAD_CLOSE.search(html)
    if match is None:
        return f"{block}\n{html}"
    index = match.start()
    return f"{html[:index]}{block}{html[index:]}"


__all__ = ["inject_tags"]
