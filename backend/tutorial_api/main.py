"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the Tutorial backend.
Controllers are intentionally thin: they accept requests, delegate to
`TutorialService`, and map its outcome to a status code.

Endpoints implemented:
- GET /api/tutorials            (optional ?title= substring filter)
- GET /api/tutorials/published
- GET /api/tutorials/search     (?title=&published=)
- GET /api/tutorials/{id}
- POST /api/tutorials
- PUT /api/tutorials/{id}
- DELETE /api/tutorials/{id}
- DELETE /api/tutorials
- GET /health
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from typing import List, Optional
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from .exceptions import PersistenceError, create_error_response
from .schemas import TutorialIn, TutorialOut
from .services import TutorialService, NotFound, NoContent
from .config import settings

app = FastAPI(title="Tutorial Management API")
logger = logging.getLogger("app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local HTML testers working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    """Report storage failures as a generic 500."""
    logger.error("persistence failure in %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content=create_error_response(exc))


def _not_found():
    return HTTPException(status_code=404, detail="tutorial not found")


def _list_response(outcome):
    if isinstance(outcome, NoContent):
        return Response(status_code=204)
    return [TutorialOut.model_validate(t) for t in outcome.payload]


@app.get('/api/tutorials', response_model=List[TutorialOut])
def list_tutorials(title: Optional[str] = None, db: Session = Depends(get_session)):
    """List all tutorials, optionally only those whose title contains `title`.

    Returns 204 when nothing matches.
    """
    return _list_response(TutorialService(db).list_all(title))


@app.get('/api/tutorials/published', response_model=List[TutorialOut])
def list_published(db: Session = Depends(get_session)):
    """List published tutorials, or 204 when there are none."""
    return _list_response(TutorialService(db).list_published())


@app.get('/api/tutorials/search', response_model=List[TutorialOut])
def search_tutorials(title: str = "", published: bool = True, db: Session = Depends(get_session)):
    """List tutorials whose title contains `title` and whose published flag matches."""
    return _list_response(TutorialService(db).search(title, published))


@app.get('/api/tutorials/{tutorial_id}', response_model=TutorialOut)
def get_tutorial(tutorial_id: int, db: Session = Depends(get_session)):
    outcome = TutorialService(db).get_by_id(tutorial_id)
    if isinstance(outcome, NotFound):
        raise _not_found()
    return TutorialOut.model_validate(outcome.payload)


@app.post('/api/tutorials', response_model=TutorialOut, status_code=201)
def create_tutorial(payload: TutorialIn, db: Session = Depends(get_session)):
    """Create a tutorial. Any `id` in the body is ignored; the stored id is returned."""
    outcome = TutorialService(db).create(payload.title, payload.description, payload.published)
    return TutorialOut.model_validate(outcome.payload)


@app.put('/api/tutorials/{tutorial_id}', response_model=TutorialOut)
def update_tutorial(tutorial_id: int, payload: TutorialIn, db: Session = Depends(get_session)):
    """Replace title, description and published of an existing tutorial."""
    outcome = TutorialService(db).update(tutorial_id, payload.title, payload.description, payload.published)
    if isinstance(outcome, NotFound):
        raise _not_found()
    return TutorialOut.model_validate(outcome.payload)


@app.delete('/api/tutorials/{tutorial_id}', status_code=204)
def delete_tutorial(tutorial_id: int, db: Session = Depends(get_session)):
    TutorialService(db).delete_by_id(tutorial_id)
    return Response(status_code=204)


@app.delete('/api/tutorials', status_code=204)
def delete_all_tutorials(db: Session = Depends(get_session)):
    TutorialService(db).delete_all()
    return Response(status_code=204)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
