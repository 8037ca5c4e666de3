from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple


TEN_POINT = "10"
FOUR_POINT = "4"

GRADE_POINTS: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        TEN_POINT: MappingProxyType(
            {
                "O": 10,
                "A+": 9,
                "A": 8,
                "B+": 7,
                "B": 6,
                "C": 5,
                "P": 4,
                "F": 0,
            }
        ),
        FOUR_POINT: MappingProxyType(
            {
                "A": 4.0,
                "A-": 3.7,
                "B+": 3.3,
                "B": 3.0,
                "B-": 2.7,
                "C+": 2.3,
                "C": 2.0,
                "D": 1.0,
                "F": 0,
            }
        ),
    }
)

SCALE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        TEN_POINT: "10-Point Scale",
        FOUR_POINT: "4-Point Scale (GPA)",
    }
)


def is_grade_system(scale: str) -> bool:
    return isinstance(scale, str) and scale in GRADE_POINTS


def points_of(scale: str, grade: Optional[str]) -> Optional[float]:
    """Point value of ``grade`` under ``scale``, or None if it has none."""
    if not grade:
        return None
    try:
        mapping = GRADE_POINTS.get(scale)
        if mapping is None:
            return None
        return mapping.get(grade)
    except TypeError:
        # unhashable scale or grade value from an imported file
        return None


def grade_options(scale: str) -> List[Tuple[str, str]]:
    """(grade, label) pairs in display order, e.g. ("A", "A (8)")."""
    mapping = GRADE_POINTS[scale] if is_grade_system(scale) else {}
    return [(grade, f"{grade} ({points:g})") for grade, points in mapping.items()]
