# app/routers/users.py

from typing import List

from fastapi import APIRouter, Depends

from app.common.deps import get_current_user, get_profile_service
from app.models.account import Account, AccountSummary, ProfileResponse
from app.services.profile_service import ProfileService

router = APIRouter()

# 注意：要放在 /{account_id} 前面，不然會被當成 id
@router.get("/suggestions", response_model=List[AccountSummary])
def get_some_users(
    current_user: Account = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.suggest_accounts(current_user.id)

@router.get("/{account_id}", response_model=ProfileResponse)
def get_other_user_data(
    account_id: str,
    current_user: Account = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_profile(viewer_id=current_user.id, account_id=account_id)
