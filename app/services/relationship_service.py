# app/services/relationship_service.py

import logging
from typing import Dict, List, Sequence, Tuple

from sqlalchemy.orm import Session

from app.common.errors import Conflict, InvalidArgument, NotFound
from app.models.account import Account, AccountSummary
from app.services import graph
from app.services.account_store import AccountStore

logger = logging.getLogger(__name__)

RACE_MESSAGE = "Friendship changed while processing the request, please retry!"

def _with(ids: Sequence[str], account_id: str) -> List[str]:
    ids = list(ids or [])
    if account_id not in ids:
        ids.append(account_id)
    return ids

def _without(ids: Sequence[str], account_id: str) -> List[str]:
    return [i for i in (ids or []) if i != account_id]

class RelationshipService:
    """
    好友狀態機：送出 / 接受 / 拒絕邀請、解除好友。

    每個操作都先重新讀兩個帳號，檢查前置條件，再用版本號做條件式寫入
    (只寫 friends / pending_friend_requests)。兩個帳號的寫入在同一個交易裡，
    任一筆版本號對不上就整組 rollback 並回 Conflict。
    """

    def __init__(self, db: Session):
        self.db = db
        self.store = AccountStore(db)

    # --- 讀取 ---

    def get_account(self, account_id: str) -> Account:
        account = self.store.find_by_id(account_id)
        if account is None:
            raise NotFound(f"Account {account_id} not found!")
        return account

    def _load_pair(self, requester_id: str, target_id: str) -> Tuple[Account, Account]:
        if requester_id == target_id:
            raise InvalidArgument("Requester and target must be different accounts!")
        return self.get_account(requester_id), self.get_account(target_id)

    def list_friends(self, account_id: str) -> List[AccountSummary]:
        account = self.get_account(account_id)
        return [AccountSummary.model_validate(a) for a in self.store.find_many(account.friends)]

    def list_pending_requests(self, account_id: str) -> List[AccountSummary]:
        account = self.get_account(account_id)
        return [AccountSummary.model_validate(a) for a in self.store.find_many(account.pending_friend_requests)]

    def mutual_count(self, account_a_id: str, account_b_id: str) -> int:
        a = self.get_account(account_a_id)
        b = self.get_account(account_b_id)
        return graph.mutual_count(a, b)

    # --- 寫入 ---

    def _commit(self, changes: List[Tuple[Account, Dict[str, List[str]]]]) -> None:
        """條件式寫入一到兩個帳號，全部成功才 commit"""
        # 先記下讀到的版本號，rollback 之後物件會過期
        planned = [(account.id, account.version, fields) for account, fields in changes]
        try:
            for account_id, version, fields in planned:
                if not self.store.conditional_update_fields(account_id, version, **fields):
                    logger.warning("Conditional write lost a race on account %s (version %s)", account_id, version)
                    raise Conflict(RACE_MESSAGE)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def request_friendship(self, requester_id: str, target_id: str) -> None:
        requester, target = self._load_pair(requester_id, target_id)

        if requester.id in (target.pending_friend_requests or []):
            raise Conflict("Friend request already sent!")
        if requester.id in (target.friends or []):
            raise Conflict("You are already friends!")

        self._commit([
            (target, {"pending_friend_requests": _with(target.pending_friend_requests, requester.id)}),
        ])
        logger.info("Friend request sent: %s -> %s", requester.id, target.id)

    def _check_pending(self, requester: Account, target: Account, action: str) -> None:
        if requester.id not in (target.pending_friend_requests or []):
            raise Conflict(f"Could not {action} friend request: no pending request from this user!")
        if requester.id in (target.friends or []) or target.id in (requester.friends or []):
            raise Conflict(f"Could not {action} friend request: you are already friends!")

    def accept_friendship(self, requester_id: str, target_id: str) -> None:
        """target 接受 requester 送來的邀請"""
        requester, target = self._load_pair(requester_id, target_id)
        self._check_pending(requester, target, "accept")

        self._commit([
            (target, {
                "friends": _with(target.friends, requester.id),
                "pending_friend_requests": _without(target.pending_friend_requests, requester.id),
            }),
            # 對方若同時也送了邀請給我，一併清掉
            (requester, {
                "friends": _with(requester.friends, target.id),
                "pending_friend_requests": _without(requester.pending_friend_requests, target.id),
            }),
        ])
        logger.info("Friend request accepted: %s -> %s", requester.id, target.id)

    def decline_friendship(self, requester_id: str, target_id: str) -> None:
        requester, target = self._load_pair(requester_id, target_id)
        self._check_pending(requester, target, "decline")

        self._commit([
            (target, {"pending_friend_requests": _without(target.pending_friend_requests, requester.id)}),
            (requester, {"pending_friend_requests": _without(requester.pending_friend_requests, target.id)}),
        ])
        logger.info("Friend request declined: %s -> %s", requester.id, target.id)

    def unfriend(self, account_a_id: str, account_b_id: str) -> None:
        a, b = self._load_pair(account_a_id, account_b_id)

        # 單向好友視為資料錯誤，不在這裡修
        if a.id not in (b.friends or []) or b.id not in (a.friends or []):
            raise Conflict("You are not friends!")

        self._commit([
            (a, {"friends": _without(a.friends, b.id)}),
            (b, {"friends": _without(b.friends, a.id)}),
        ])
        logger.info("Unfriended: %s <-> %s", a.id, b.id)
