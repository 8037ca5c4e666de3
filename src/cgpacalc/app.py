import json
import logging
from typing import Any, Dict

import uvicorn
from fastapi import Body, FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware

from cgpacalc.config.settings import settings
from cgpacalc.core.gpa import summarize
from cgpacalc.core.grades import GRADE_POINTS
from cgpacalc.core.models import Document
from cgpacalc.services.storage import ImportFormatError, export_document, import_document

logger = logging.getLogger(__name__)

app = FastAPI(title="CGPA Calculator API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _document_from_body(payload: Any) -> Document:
    try:
        return import_document(json.dumps(payload))
    except ImportFormatError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/grade-systems")
def grade_systems() -> Dict[str, Dict[str, float]]:
    return {scale: dict(mapping) for scale, mapping in GRADE_POINTS.items()}


@app.post("/calculate")
def calculate(payload: Any = Body(...)) -> Dict:
    doc = _document_from_body(payload)
    return summarize(doc)


@app.post("/export")
def export(payload: Any = Body(...)) -> Response:
    doc = _document_from_body(payload)
    logger.info("Serving export of %d semester(s)", len(doc.semesters))
    return Response(
        content=export_document(doc),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


def serve() -> None:
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host="127.0.0.1", port=8000)
