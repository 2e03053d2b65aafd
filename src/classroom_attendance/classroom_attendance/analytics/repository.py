from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ActivityRow


class AnalyticsRepository(Protocol):
    def get_activity_since(self, since: date) -> Sequence[ActivityRow]:
        """Sessions dated on/after ``since`` joined with their records, read as one snapshot."""

        raise NotImplementedError
