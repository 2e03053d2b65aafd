from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import EnrolledStudentRow, Student


class StudentRepository(Protocol):
    def exists(self, student_id: str) -> bool:
        raise NotImplementedError

    def create(self, *, student_id: str, full_name: str, face_signature: Any, section: str) -> Student:
        raise NotImplementedError

    def list_enrolled(self) -> Sequence[EnrolledStudentRow]:
        raise NotImplementedError
