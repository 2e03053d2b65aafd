from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewSession, RecordInput


class SessionRepository(Protocol):
    def create_session_with_records(self, *, session: NewSession, records: Sequence[RecordInput]) -> int:
        """Persist the session and every record atomically; return the new session id.

        ``total_students`` is written as ``len(records)`` in the same transaction.
        Nothing is persisted when any insert fails.
        """

        raise NotImplementedError
