from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SubjectSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    credits: Union[str, float] = ""
    grade: str = ""


class SemesterSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    subjects: List[SubjectSchema] = Field(default_factory=list)


class DocumentSchema(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    semesters: List[SemesterSchema]
    grade_system: Literal["10", "4"] = Field(alias="gradeSystem")
