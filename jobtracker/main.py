# jobtracker/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from jobtracker.config import settings
from jobtracker.database import init_db

# Import routers
from jobtracker.routes.auth import router as auth_router
from jobtracker.routes.jobs import router as jobs_router
from jobtracker.routes.dashboard import router as dashboard_router
from jobtracker.routes.users import router as users_router
from jobtracker.routes.logs import router as logs_router

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# Initialisation
init_db()

app = FastAPI(title="Job Tracker API", version="1.0.0")

# CORS: local frontend plus the deployed one when configured
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(auth_router)
app.include_router(jobs_router)
app.include_router(dashboard_router)
app.include_router(users_router)
app.include_router(logs_router)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    if not loc:
        return "Request body is required" if err.get("type") == "missing" else err.get("msg", "Invalid request")
    field = loc[0]
    if err.get("type") in ("missing", "string_too_short", "too_short"):
        return f"{field} is required"
    return f"{field}: {err.get('msg')}"


# Exception handlers: every failure uses the {success, error} envelope
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": _validation_message(exc)},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


@app.get("/")
def read_root():
    return {"success": True, "message": "Job Tracker API is running"}
