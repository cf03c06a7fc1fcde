from fastapi import APIRouter

from fulltext_api.api.indexes import router as indexes_router
from fulltext_api.api.search import router as search_router

api_router = APIRouter()
api_router.include_router(search_router, tags=["search"])
api_router.include_router(indexes_router, tags=["indexes"])
