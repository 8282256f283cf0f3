# app/common/deps.py

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.db.session import get_db, get_session_factory
from app.core.security import decode_access_token
from app.models.account import Account
from app.services.account_store import AccountStore
from app.services.relationship_service import RelationshipService
from app.services.profile_service import ProfileService
from app.services.search_service import SearchService

# token 由外部身分服務簽發，這裡只負責解開
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)

def get_relationship_service(db: Session = Depends(get_db)) -> RelationshipService:
    return RelationshipService(db=db)

def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db=db)

def get_search_service(session_factory=Depends(get_session_factory)) -> SearchService:
    return SearchService(session_factory=session_factory)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

def _resolve(token: str, db: Session) -> Account:
    account_id = decode_access_token(token)
    if account_id is None:
        raise _credentials_exception()
    account = AccountStore(db).find_by_id(account_id)
    if account is None:
        raise _credentials_exception()
    return account

# 取得當前登入的帳號
def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Account:
    return _resolve(token, db)

# 搜尋允許未登入；有帶 token 但無效還是回 401
def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[Account]:
    if token is None:
        return None
    return _resolve(token, db)
