# app/services/profile_service.py

from typing import List, Optional

from sqlalchemy.orm import Session

from app.common.errors import NotFound
from app.core.config import settings
from app.models.account import AccountSummary, FriendView, ProfileResponse, PublicView
from app.services import graph
from app.services.account_store import AccountStore

class ProfileService:

    def __init__(self, db: Session):
        self.db = db
        self.store = AccountStore(db)

    def get_profile(self, viewer_id: str, account_id: str) -> ProfileResponse:
        """看別人的個人頁：好友看得到完整資料，其他人只看得到公開欄位"""
        account = self.store.find_by_id(account_id)
        if account is None:
            raise NotFound("Something went wrong retrieving user data!")

        is_friend = graph.is_friend(viewer_id, account)
        is_pending = viewer_id in (account.pending_friend_requests or [])

        if is_friend:
            viewer = self.store.find_by_id(viewer_id)
            if viewer is None:
                raise NotFound("Something went wrong retrieving user data!")
            mutual_ids = graph.mutual_friends(account, viewer)
            friends = [AccountSummary.model_validate(a) for a in self.store.find_many(account.friends)]
            user = FriendView(
                **AccountSummary.model_validate(account).model_dump(),
                joined=account.joined,
                last_seen=account.last_seen,
                friends=friends,
                mutual_friends=len(mutual_ids),
                mutual_friend_ids=mutual_ids,
            )
        else:
            user = PublicView(**AccountSummary.model_validate(account).model_dump())

        return ProfileResponse(user=user, is_friend=is_friend, is_friend_request_pending=is_pending)

    def suggest_accounts(self, viewer_id: str, size: Optional[int] = None) -> List[AccountSummary]:
        """隨機挑幾個還不是好友的人"""
        viewer = self.store.find_by_id(viewer_id)
        if viewer is None:
            raise NotFound("Something went wrong retrieving user data!")

        size = settings.SUGGESTION_SAMPLE_SIZE if size is None else size
        picked = self.store.sample_strangers(viewer, size)
        return [AccountSummary.model_validate(a) for a in picked]
