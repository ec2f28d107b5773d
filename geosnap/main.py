import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geosnap.utils.config import settings
from geosnap.utils.logs import configure_logging
from geosnap.db import init_db
from geosnap.routes.auth import router as auth_router
from geosnap.routes.photos import router as photos_router
from geosnap.routes.comments import router as comments_router
from geosnap.routes.map import router as map_router


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="GeoSnap API", version="0.1.0")

# Tables are created at import time as well (helps tests)
init_db()


@app.get("/api/health")
def health_check():
    return {"status": "ok", "message": "GeoSnap API is running"}


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    m = request.method
    p = request.url.path
    logger.debug("[REQ] %s %s", m, p)
    resp = await call_next(request)
    logger.info("[RESP] %s %s -> %s", m, p, resp.status_code)
    return resp


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Routers
app.include_router(auth_router)
app.include_router(photos_router)
app.include_router(comments_router)
app.include_router(map_router)


@app.on_event("startup")
def on_startup():
    # Create DB tables (idempotent)
    init_db()
