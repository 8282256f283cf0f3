# app/services/content_store.py

import re
from typing import Dict, List, Sequence, Tuple

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.content import Poll, Post

# entity type -> (model, 可搜尋欄位, 排序欄位)
SEARCHABLE: Dict[str, Tuple[type, Tuple[str, ...], str]] = {
    "user": (Account, ("first_name", "last_name"), "joined"),
    "post": (Post, ("text",), "created_at"),
    "poll": (Poll, ("question", "description"), "created_at"),
}

def _like_pattern(token: str) -> str:
    escaped = token.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

def word_prefix_patterns(tokens: Sequence[str]) -> List["re.Pattern"]:
    # 從單字開頭比對，不分大小寫
    return [re.compile(r"\b" + re.escape(token), re.IGNORECASE) for token in tokens]

class ContentStore:

    def __init__(self, db: Session):
        self.db = db

    def find_by_text_match(self, entity_type: str, tokens: Sequence[str]) -> list:
        """
        任一 token 在任一欄位以單字開頭出現就算命中 (OR)。
        先用 ILIKE 在資料庫粗篩，再用 regex 檢查單字邊界。
        sqlite 的 lower() / LIKE 只處理 ASCII 大小寫，有非 ASCII 的 token 就不粗篩。
        """
        if entity_type not in SEARCHABLE:
            raise ValueError(f"unknown entity type: {entity_type}")
        if not tokens:
            return []

        model, fields, order_field = SEARCHABLE[entity_type]
        columns = [getattr(model, name) for name in fields]
        stmt = select(model).order_by(getattr(model, order_field), model.id)
        if all(token.isascii() for token in tokens):
            conditions = [
                column.ilike(_like_pattern(token), escape="\\")
                for token in tokens
                for column in columns
            ]
            stmt = stmt.where(or_(*conditions))
        candidates = self.db.execute(stmt).scalars().all()

        patterns = word_prefix_patterns(tokens)
        return [
            row for row in candidates
            if any(p.search(getattr(row, name) or "") for p in patterns for name in fields)
        ]
