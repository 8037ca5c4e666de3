from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

Credits = Union[str, int, float]


@dataclass
class Subject:
    id: int
    name: str = ""
    credits: Credits = ""
    grade: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "credits": self.credits, "grade": self.grade}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            credits=data.get("credits", ""),
            grade=data.get("grade", ""),
        )


@dataclass
class Semester:
    id: int
    name: str
    subjects: List[Subject] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "subjects": [sub.to_dict() for sub in self.subjects],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Semester":
        subjects = data.get("subjects") or []
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            subjects=[Subject.from_dict(sub) for sub in subjects],
        )


@dataclass
class Document:
    semesters: List[Semester]
    grade_system: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "semesters": [sem.to_dict() for sem in self.semesters],
            "gradeSystem": self.grade_system,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(
            semesters=[Semester.from_dict(sem) for sem in data["semesters"]],
            grade_system=data["gradeSystem"],
        )
