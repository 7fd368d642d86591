import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from api.endpoints import item_endpoint
from config import API_PREFIX, CORS_ORIGINS, CREATE_TABLES, LOG_LEVEL, REPOSITORY_BACKEND
from db.database import create_all_tables, dispose_engine
from models.primary_key import KeyCoercionError

# --- Logging ---
logging.basicConfig(
    level=LOG_LEVEL,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# --- Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    if REPOSITORY_BACKEND == "sqlalchemy" and CREATE_TABLES:
        await create_all_tables()
    logger.info(f"Application Startup ({REPOSITORY_BACKEND} repositories).")
    yield
    await dispose_engine()
    logger.info("Application Shutdown: All resources released.")

# --- FastAPI Initialization ---
app = FastAPI(
    title="SimpleCRUD API",
    description="Generic create/read/update/delete endpoints over repository-backed models.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- ADD CORS MIDDLEWARE ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception Handlers ---
@app.exception_handler(KeyCoercionError)
async def key_coercion_error_handler(request: Request, exc: KeyCoercionError):
    logger.warning(f"{request.method} {request.url.path}: {exc} {exc.reason}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )

# --- Include Routers ---
app.include_router(item_endpoint.router, prefix=API_PREFIX)


# --- Root Endpoint (Health Check / Documentation Index) ---
@app.get("/", tags=["root"])
def read_root():
    """
    A simple root endpoint directing users to the API documentation.
    """
    return {
        "message": "Welcome to the SimpleCRUD API.",
        "docs": "See /docs for the OpenAPI documentation (Swagger UI)."
    }
