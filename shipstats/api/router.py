from fastapi import APIRouter

from shipstats.api.v1 import languages, stats

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(stats.router)
api_router.include_router(languages.router)
