from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from risk_skills.risk_report_builder import EmptyReportError
from riskeval.api import router
from riskeval.core import get_logger, settings
from riskeval.core.exceptions import RecordNotFoundError, StorageFailure, ValidationFailure
from riskeval.services import get_container

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Iniciando NTP 330 Risk Evaluator [{settings.app_env}]")
    try:
        get_container().record_manager.load()
    except StorageFailure as e:
        logger.error(f"No se pudieron cargar los registros, se inicia vacío: {e}")
    yield
    logger.info("Cerrando NTP 330 Risk Evaluator")


app = FastAPI(
    title="NTP 330 Risk Evaluator",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(
        status_code=422,
        content={"detail": "Please complete all required fields (*)", "errors": exc.errors},
    )


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
        content={"detail": exc.message, "operation": exc.operation},
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(EmptyReportError)
async def empty_report_handler(request: Request, exc: EmptyReportError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


# Exception handler global
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Routes
app.include_router(router, prefix="/api", tags=["Risks"])


@app.get("/health")
async def health_check():
    manager = get_container().record_manager
    return {"status": "ok", "env": settings.app_env, "records": len(manager)}
