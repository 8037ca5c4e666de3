from dataclasses import dataclass, field

from cgpacalc.config.settings import settings
from cgpacalc.core.document import new_document
from cgpacalc.core.models import Document


def _initial_document() -> Document:
    return new_document(settings.default_grade_system)


@dataclass
class AppState:
    document: Document = field(default_factory=_initial_document)
