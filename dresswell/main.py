import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from dresswell.core.config import settings
from dresswell.routers import analysis, items, matches, outfits, taxonomy
from dresswell.services.vision import build_vision_provider
from dresswell.storage.items import InMemoryItemStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.vision_provider = build_vision_provider(settings)
    app.state.item_store = InMemoryItemStore()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(analysis.router, prefix=prefix)
app.include_router(matches.router, prefix=prefix)
app.include_router(outfits.router, prefix=prefix)
app.include_router(items.router, prefix=prefix)
app.include_router(taxonomy.router, prefix=prefix)

logger = logging.getLogger("dresswell.requests")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}
