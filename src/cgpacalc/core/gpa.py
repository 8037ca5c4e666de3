import math
import re
from typing import Dict, Iterable, List, Optional, Tuple

from cgpacalc.core.grades import points_of
from cgpacalc.core.models import Document, Semester, Subject

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INFINITY = re.compile(r"^\s*([+-]?)Infinity")


def parse_credits(raw) -> Optional[float]:
    """
    Credits are stored as typed; this reads them the way a browser parseFloat
    does, taking the leading numeric literal ("3.5 cr" -> 3.5).
    Returns None when nothing numeric can be read.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return None if math.isnan(value) else value
    if not isinstance(raw, str):
        return None

    match = _LEADING_NUMBER.match(raw)
    if match:
        return float(match.group(1))
    match = _LEADING_INFINITY.match(raw)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return None


def credits_text(raw) -> str:
    """Credits as shown in an input field; null credits from a file show as blank."""
    return "" if raw is None else str(raw)


def countable_result(subject: Subject, scale: str) -> Optional[Tuple[float, float]]:
    """(credits, grade_point) for a subject that counts towards an average, else None."""
    credits = parse_credits(subject.credits)
    if not credits:
        return None
    point = points_of(scale, subject.grade)
    if point is None:
        return None
    return credits, point


def _weighted(subjects: Iterable[Subject], scale: str) -> Tuple[float, float]:
    weighted = 0.0
    total_credits = 0.0
    for sub in subjects:
        result = countable_result(sub, scale)
        if result is None:
            continue
        credits, point = result
        weighted += credits * point
        total_credits += credits
    return weighted, total_credits


def format_gpa(weighted: float, total_credits: float) -> str:
    if total_credits > 0:
        return f"{weighted / total_credits:.2f}"
    return "0.00"


def _all_subjects(document: Document) -> Iterable[Subject]:
    for sem in document.semesters:
        yield from sem.subjects


def calculate_sgpa(semester: Semester, scale: str) -> str:
    """
    SGPA = Σ(credits * grade_point) / Σ(credits) over the semester's countable subjects.
    """
    return format_gpa(*_weighted(semester.subjects, scale))


def calculate_cgpa(document: Document) -> str:
    """
    CGPA = Σ(credits * grade_point) / Σ(credits) over every subject of every semester.
    Not an average of the SGPAs: semesters weigh in by their credits.
    """
    return format_gpa(*_weighted(_all_subjects(document), document.grade_system))


def semester_credits(semester: Semester, scale: str) -> float:
    return _weighted(semester.subjects, scale)[1]


def total_credits(document: Document) -> float:
    return _weighted(_all_subjects(document), document.grade_system)[1]


def summarize(document: Document) -> Dict:
    semesters: List[Dict] = []
    for sem in document.semesters:
        semesters.append(
            {
                "id": sem.id,
                "name": sem.name,
                "sgpa": calculate_sgpa(sem, document.grade_system),
                "credits": semester_credits(sem, document.grade_system),
            }
        )
    return {
        "semesters": semesters,
        "cgpa": calculate_cgpa(document),
        "credits": total_credits(document),
        "gradeSystem": document.grade_system,
    }
