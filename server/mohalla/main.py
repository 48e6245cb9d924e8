import logging

import mohalla.models  # noqa: F401
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mohalla.core.config import settings
from mohalla.core.errors import ConflictingUniqueValue, InvalidParameter
from mohalla.routers import houses as houses_router
from mohalla.routers import resources as resources_router

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="Mohalla Directory API", version="0.1.0")

logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(houses_router.router)
app.include_router(resources_router.router)


@app.exception_handler(InvalidParameter)
async def invalid_parameter_handler(request: Request, exc: InvalidParameter) -> JSONResponse:
    logger.info("invalid_parameter", extra={"path": request.url.path, "field": exc.field, "kind": exc.kind})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "code": exc.code, "field": exc.field, "kind": exc.kind},
    )


@app.exception_handler(ConflictingUniqueValue)
async def conflicting_value_handler(request: Request, exc: ConflictingUniqueValue) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message, "code": exc.code, "field": exc.field},
    )


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}
