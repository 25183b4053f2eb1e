from fastapi import APIRouter, Depends

from lunch_menu.api.auth import require_api_key
from lunch_menu.cache import db as cache_db
from lunch_menu.schemas import RestaurantMenu, SummarizeRequest
from lunch_menu.services.summarize import get_cache_stats, process_menu_request

router = APIRouter()


@router.post("/summarize", response_model=RestaurantMenu, dependencies=[Depends(require_api_key)])
async def summarize_menu(request: SummarizeRequest):
    """
    Summarize the restaurant menu at a URL for a given date.

    Results are cached per URL + date; preferences only filter the response.
    """
    return await process_menu_request(request.url, request.date, request.preferences)


@router.get("/cache/stats", dependencies=[Depends(require_api_key)])
async def cache_statistics():
    """Get cache statistics for debugging"""
    return get_cache_stats()


@router.delete("/cache/clear", dependencies=[Depends(require_api_key)])
async def clear_cache():
    """Clear all cache entries"""
    cache_db.menu_cache.clear_all()
    return {"message": "Cache cleared successfully"}


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Lunch Menu Summarizer"}
