import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from voting_portal.application.handlers import build_buses
from voting_portal.config import ADMIN_PASSWORD, CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from voting_portal.infrastructure.election_store import ElectionStore
from voting_portal.infrastructure.persistence import build_persistence
from voting_portal.interfaces.admin_controller import router as admin_router
from voting_portal.interfaces.candidate_controller import router as candidate_router
from voting_portal.interfaces.election_controller import router as election_router
from voting_portal.interfaces.vote_controller import router as vote_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def create_app(store: Optional[ElectionStore] = None, admin_password: str = ADMIN_PASSWORD) -> FastAPI:
    if store is None:
        store = ElectionStore(build_persistence())
        store.load_all()

    app = FastAPI(title="Voting Portal")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.command_bus, app.state.query_bus = build_buses(store, admin_password)

    app.include_router(election_router)
    app.include_router(candidate_router)
    app.include_router(vote_router)
    app.include_router(admin_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.get("/")
    def root():
        return {"message": "Voting portal backend is running"}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Backend server running on http://%s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
