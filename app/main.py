from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging

from app.api.routes import router
from app.config import Settings
from app.database import StringStore
from app.exceptions import StringAnalyzerError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def validation_status_code(exc: RequestValidationError) -> int:
    """
    422 when the body carried a 'value' of the wrong type, 400 for anything
    missing or malformed (absent body, absent field, bad JSON, bad query).
    """
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc == ("body", "value") and error.get("type") != "missing":
            return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_400_BAD_REQUEST


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Loading strings from {settings.data_file}...")
        app.state.store.load()
        yield

    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze strings, store their properties and query them",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = StringStore(settings.data_file)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, tags=["strings"])

    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message}
        )

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        status_code = validation_status_code(exc)
        errors = {}
        for error in exc.errors():
            field = error['loc'][-1] if error.get('loc') else 'request'
            errors[str(field)] = error['msg']

        if status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
            message = "Invalid data type for 'value' (must be string)"
        elif any(tuple(e.get('loc', ()))[:1] == ('body',) for e in exc.errors()):
            message = "Invalid request body or missing 'value' field"
        else:
            message = "Invalid query parameter values or types"

        return JSONResponse(
            status_code=status_code,
            content={
                "error": message,
                "details": errors
            }
        )

    # HTTPException handler
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # If detail is already a dict with 'error' key, return as is
        if isinstance(exc.detail, dict) and 'error' in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail,
                headers=getattr(exc, "headers", None)
            )
        # Otherwise wrap it
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error"
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = app.state.settings
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
