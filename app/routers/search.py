# app/routers/search.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.common.deps import get_optional_user, get_search_service
from app.models.account import Account
from app.models.search import SearchResult
from app.services.search_service import SearchService

router = APIRouter()

@router.get("", response_model=List[SearchResult])
async def perform_search(
    query: Optional[str] = Query(None),
    mode: Optional[str] = Query(None, description="all / users / posts / polls"),
    current_user: Optional[Account] = Depends(get_optional_user),
    service: SearchService = Depends(get_search_service),
):
    viewer_id = current_user.id if current_user else None
    return await service.search(query, mode, viewer_id)
