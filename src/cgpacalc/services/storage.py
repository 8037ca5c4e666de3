"""Export/import of the whole calculator document as a JSON file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from cgpacalc.config.settings import settings
from cgpacalc.core.models import Document
from cgpacalc.core.schema import DocumentSchema
from cgpacalc.state.app_state import AppState

logger = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid file format"


class StorageError(Exception):
    pass


class ImportFormatError(StorageError):
    def __init__(self, message: str = INVALID_FORMAT) -> None:
        super().__init__(message)


def _present(value: Any) -> bool:
    # arrays and objects count as present even when empty
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def export_document(doc: Document) -> bytes:
    return json.dumps(doc.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")


def export_to_file(
    doc: Document,
    directory: Optional[Union[str, Path]] = None,
    filename: Optional[str] = None,
) -> Path:
    target = Path(directory or settings.data_dir) / (filename or settings.export_filename)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(export_document(doc))
    except OSError as exc:
        raise StorageError(f"Could not write {target}: {exc}") from exc
    logger.info("Exported %d semester(s) to %s", len(doc.semesters), target)
    return target


def import_document(data: Union[bytes, str], *, strict: Optional[bool] = None) -> Document:
    """
    Parse an exported document. Anything that is not an object with both
    ``semesters`` and ``gradeSystem`` raises ImportFormatError.
    Ids and field types are taken as they are unless strict validation is on.
    """
    strict = settings.strict_import if strict is None else strict
    try:
        payload = json.loads(data)
    except (UnicodeDecodeError, ValueError) as exc:
        logger.warning("Rejected import: %s", exc)
        raise ImportFormatError() from exc

    if not isinstance(payload, dict):
        logger.warning("Rejected import: top-level value is %s", type(payload).__name__)
        raise ImportFormatError()
    if not (_present(payload.get("semesters")) and _present(payload.get("gradeSystem"))):
        logger.warning("Rejected import: missing semesters or gradeSystem")
        raise ImportFormatError()

    if strict:
        try:
            DocumentSchema.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Rejected import: %d schema error(s)", exc.error_count())
            raise ImportFormatError() from exc

    try:
        doc = Document.from_dict(payload)
    except (AttributeError, TypeError) as exc:
        logger.warning("Rejected import: %s", exc)
        raise ImportFormatError() from exc

    logger.info("Imported %d semester(s), grade system %s", len(doc.semesters), doc.grade_system)
    return doc


def import_from_file(path: Union[str, Path], *, strict: Optional[bool] = None) -> Document:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        raise ImportFormatError() from exc
    return import_document(raw, strict=strict)


def load_into(state: AppState, data: Union[bytes, str], *, strict: Optional[bool] = None) -> Document:
    """Replace the state's document with the imported one, or leave it untouched on error."""
    doc = import_document(data, strict=strict)
    state.document = doc
    return doc
