from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

from app.api.deps import get_fact_check_provider
from app.api.v1.endpoints import api_router
from app.core.config import settings
from app.core.exceptions import (
    AuthenticationError,
    InvalidOperationError,
    NotFoundError,
    StorageError,
)
from app.core.logging import logger
from app.db.session import init_db

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Code to run on startup ---
    logger.info("Application startup...")

    if settings.AUTO_CREATE_TABLES:
        init_db()

    yield # --- The application is now running ---

    # --- Code to run on shutdown ---
    logger.info("Application shutdown...")
    get_fact_check_provider().close()

app = FastAPI(title="Bisa Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(InvalidOperationError)
async def invalid_operation_handler(request: Request, exc: InvalidOperationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.error_code, "message": exc.message}
    )


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": exc.error_code, "message": exc.message}
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.error_code, "message": exc.message}
    )


# Include routers
app.include_router(api_router, prefix="/api")

@app.get("/")
def read_root():
    return {"message": "Welcome to Bisa Backend"}
