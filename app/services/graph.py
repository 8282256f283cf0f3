# app/services/graph.py
# 好友圖上的純函式：共同好友、內容可見性。不存狀態，每次查詢重新算。

from typing import List, Optional

from app.models.account import Account

def mutual_friends(a: Account, b: Account) -> List[str]:
    """共同好友 id，依 a 的好友順序"""
    others = set(b.friends or [])
    return [fid for fid in (a.friends or []) if fid in others]

def mutual_count(a: Account, b: Account) -> int:
    return len(set(a.friends or []) & set(b.friends or []))

def is_friend(viewer_id: Optional[str], owner: Account) -> bool:
    return viewer_id is not None and viewer_id in (owner.friends or [])

def can_view(viewer_id: Optional[str], content, owner: Account) -> bool:
    """
    content 需要有 owner_id 和 friend_only。
    - 貼文：本人或本人的好友
    - 投票：沒設 is_friend_only 就公開，否則同貼文
    未登入 (viewer_id=None) 只看得到公開內容。
    """
    if not content.friend_only:
        return True
    if viewer_id is None:
        return False
    if content.owner_id != owner.id:
        raise ValueError("owner does not match content.owner_id")
    return viewer_id == owner.id or is_friend(viewer_id, owner)
