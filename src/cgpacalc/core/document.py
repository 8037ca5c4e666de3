"""Structural edits on a Document.

Every operation mutates the document it is given. Edits that would leave a
document without semesters, or a semester without subjects, are ignored.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from cgpacalc.core.grades import TEN_POINT, is_grade_system
from cgpacalc.core.models import Document, Semester, Subject

logger = logging.getLogger(__name__)

SUBJECT_FIELDS = ("name", "credits", "grade")


def _next_id(ids: Iterable) -> int:
    # imported documents may carry missing or non-integer ids
    numeric = [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
    return max([*numeric, 0]) + 1


def blank_subject(subject_id: int = 1) -> Subject:
    return Subject(id=subject_id)


def new_semester(semester_id: int) -> Semester:
    return Semester(id=semester_id, name=f"Semester {semester_id}", subjects=[blank_subject()])


def new_document(grade_system: str = TEN_POINT) -> Document:
    return Document(semesters=[new_semester(1)], grade_system=grade_system)


def find_semester(doc: Document, sem_id: int) -> Optional[Semester]:
    for sem in doc.semesters:
        if sem.id == sem_id:
            return sem
    return None


def add_semester(doc: Document) -> Semester:
    semester = new_semester(_next_id(sem.id for sem in doc.semesters))
    doc.semesters.append(semester)
    return semester


def remove_semester(doc: Document, sem_id: int) -> None:
    if len(doc.semesters) <= 1:
        logger.debug("Ignoring removal of the only semester %s", sem_id)
        return
    doc.semesters = [sem for sem in doc.semesters if sem.id != sem_id]


def rename_semester(doc: Document, sem_id: int, name: str) -> None:
    sem = find_semester(doc, sem_id)
    if sem is not None:
        sem.name = name


def add_subject(doc: Document, sem_id: int) -> Optional[Subject]:
    sem = find_semester(doc, sem_id)
    if sem is None:
        logger.debug("No semester %s to add a subject to", sem_id)
        return None
    subject = blank_subject(_next_id(sub.id for sub in sem.subjects))
    sem.subjects.append(subject)
    return subject


def remove_subject(doc: Document, sem_id: int, sub_id: int) -> None:
    sem = find_semester(doc, sem_id)
    if sem is None:
        return
    if len(sem.subjects) <= 1:
        logger.debug("Ignoring removal of the only subject in semester %s", sem_id)
        return
    sem.subjects = [sub for sub in sem.subjects if sub.id != sub_id]


def update_subject(doc: Document, sem_id: int, sub_id: int, field: str, value) -> None:
    """Swap in a copy of the subject with one field changed; siblings keep their identity."""
    if field not in SUBJECT_FIELDS:
        raise ValueError(f"Unsupported subject field: {field}. Use name, credits or grade.")
    sem = find_semester(doc, sem_id)
    if sem is None:
        return
    sem.subjects = [
        replace(sub, **{field: value}) if sub.id == sub_id else sub
        for sub in sem.subjects
    ]


def set_grade_system(doc: Document, scale: str) -> None:
    # stored grades are kept even when the new scale has no such key
    if not is_grade_system(scale):
        raise ValueError(f"Unsupported grade system: {scale}. Use 10 or 4.")
    doc.grade_system = scale
