# app/services/account_store.py

from typing import Iterable, List, Optional

from sqlalchemy import String, cast, func, select, update
from sqlalchemy.orm import Session

from app.models.account import Account

# 只允許條件式更新這兩個關係欄位，其它欄位不碰
RELATION_FIELDS = ("friends", "pending_friend_requests")

class AccountStore:

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, account_id: str) -> Optional[Account]:
        # populate_existing: 每次都重新從資料庫讀，不用 session 裡的舊資料
        stmt = select(Account).where(Account.id == account_id).execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_many(self, account_ids: Iterable[str]) -> List[Account]:
        ids = list(account_ids)
        if not ids:
            return []
        accounts = self.db.execute(select(Account).where(Account.id.in_(ids))).scalars().all()
        # 依照傳入順序回傳
        by_id = {a.id: a for a in accounts}
        return [by_id[i] for i in ids if i in by_id]

    def sample_strangers(self, viewer: Account, size: int) -> List[Account]:
        """
        隨機抽幾個：不是自己、不在我的好友裡、好友名單裡也沒有我。
        過濾和抽樣都在資料庫做，不把整張表讀出來。
        """
        stmt = select(Account).where(Account.id != viewer.id)
        if viewer.friends:
            stmt = stmt.where(Account.id.notin_(list(viewer.friends)))
        # friends 存成 JSON 文字，id 只有 hex 字元，用 "<id>" 比對不會誤中
        stmt = stmt.where(~cast(Account.friends, String).contains(f'"{viewer.id}"', autoescape=True))
        stmt = stmt.order_by(func.random()).limit(size)
        return self.db.execute(stmt).scalars().all()

    def conditional_update_fields(self, account_id: str, expected_version: int, **fields) -> bool:
        """
        UPDATE ... WHERE id = ? AND version = ?

        版本號對不上 (別的請求先改過) 就不寫，回傳 False。
        不會 commit，交給呼叫端決定整組提交或 rollback。
        """
        unknown = set(fields) - set(RELATION_FIELDS)
        if unknown:
            raise ValueError(f"not a relation field: {', '.join(sorted(unknown))}")

        values = {name: list(value) for name, value in fields.items()}
        values["version"] = Account.version + 1

        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.version == expected_version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1
