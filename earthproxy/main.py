import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.logging_config import setup_logging
from .routers import earthdata

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Starting %s (env=%s), external source %s", settings.app_name, settings.app_env,
            "enabled" if settings.nasa_api_key else "disabled (no NASA_EARTHDATA_API_KEY)")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- helpers comunes --------
def _jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]

@app.exception_handler(RequestValidationError)
async def bad_request(request: Request, exc: RequestValidationError):
    # parámetros de query mal formados → 400, no 422
    return JSONResponse(status_code=400, content={"detail": _jsonable_errors(exc)})

app.include_router(earthdata.router)

@app.get("/")
def root():
    return {"name": settings.app_name, "env": settings.app_env, "message": "OK"}
