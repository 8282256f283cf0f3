# app/services/search_service.py

import asyncio
import logging
from typing import Callable, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.common.errors import InvalidArgument
from app.models.search import (
    PollHit, PollResult, PostHit, PostResult, SearchResult, UserHit, UserResult,
)
from app.services import graph
from app.services.account_store import AccountStore
from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)

MODES = ("all", "users", "posts", "polls")

def tokenize(query: str) -> List[str]:
    return [token for token in query.split() if token.strip()]

class SearchService:
    """
    多種內容的搜尋：使用者、貼文、投票三個分支平行查詢，
    合併順序固定為 users -> posts -> polls，不做排名也不去重。
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    # --- 各分支 (在 threadpool 裡跑，各自一個 session) ---

    def search_users(self, tokens: List[str]) -> List[UserResult]:
        if not tokens:
            return []
        with self.session_factory() as db:
            rows = ContentStore(db).find_by_text_match("user", tokens)
            # 只投影可公開的欄位
            return [UserResult(data=UserHit.model_validate(row)) for row in rows]

    def _visible(self, db: Session, rows: list, viewer_id: Optional[str]) -> list:
        owner_ids = list(dict.fromkeys(row.owner_id for row in rows))
        owners = {a.id: a for a in AccountStore(db).find_many(owner_ids)}
        visible = []
        for row in rows:
            owner = owners.get(row.owner_id)
            if owner is None:
                # 擁有者已不存在
                continue
            if graph.can_view(viewer_id, row, owner):
                visible.append(row)
        return visible

    def search_posts(self, tokens: List[str], viewer_id: Optional[str]) -> List[PostResult]:
        if not tokens:
            return []
        with self.session_factory() as db:
            rows = ContentStore(db).find_by_text_match("post", tokens)
            return [PostResult(data=PostHit.model_validate(row)) for row in self._visible(db, rows, viewer_id)]

    def search_polls(self, tokens: List[str], viewer_id: Optional[str]) -> List[PollResult]:
        if not tokens:
            return []
        with self.session_factory() as db:
            rows = ContentStore(db).find_by_text_match("poll", tokens)
            return [PollResult(data=PollHit.model_validate(row)) for row in self._visible(db, rows, viewer_id)]

    # --- 入口 ---

    async def search(self, query: Optional[str], mode: Optional[str], viewer_id: Optional[str]) -> List[SearchResult]:
        if not query:
            raise InvalidArgument("Query parameter is required!")

        mode = mode or "all"
        if mode not in MODES:
            logger.info("Unknown search mode %r, returning no results", mode)

        tokens = tokenize(query)
        branches = []
        if mode in ("all", "users"):
            branches.append(run_in_threadpool(self.search_users, tokens))
        if mode in ("all", "posts"):
            branches.append(run_in_threadpool(self.search_posts, tokens, viewer_id))
        if mode in ("all", "polls"):
            branches.append(run_in_threadpool(self.search_polls, tokens, viewer_id))

        # 任一分支失敗或整個請求被取消，其它分支的結果一起丟掉
        partials = await asyncio.gather(*branches)

        results: List[SearchResult] = []
        for part in partials:
            results.extend(part)
        logger.debug("Search %r (%s) for viewer %s: %d results", query, mode, viewer_id, len(results))
        return results
