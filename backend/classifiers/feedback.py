"""
Per-frame feedback prioritization.

Classifiers push every message they would like to show for the current
frame; only one is surfaced. Safety (form-correction) messages strictly
pre-empt coaching messages, and within a severity the first message pushed
wins.
"""

from typing import List, Optional, Tuple

SEV_SAFETY = "safety"
SEV_COACHING = "coaching"
SEV_INFO = "info"

SEV_PRIORITY = {SEV_SAFETY: 0, SEV_COACHING: 1, SEV_INFO: 2}


class FeedbackQueue:
    def __init__(self):
        self._items: List[Tuple[str, str]] = []

    def safety(self, message: str):
        self._items.append((message, SEV_SAFETY))

    def coaching(self, message: str):
        self._items.append((message, SEV_COACHING))

    def info(self, message: str):
        self._items.append((message, SEV_INFO))

    @property
    def has_safety(self) -> bool:
        return any(sev == SEV_SAFETY for _, sev in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def resolve(self) -> Optional[str]:
        """Return the single message to show, or None."""
        if not self._items:
            return None
        # min() keeps the first item among equal priorities
        message, _ = min(self._items, key=lambda item: SEV_PRIORITY[item[1]])
        return message
