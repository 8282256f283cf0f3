# app/routers/friends.py

from typing import List

from fastapi import APIRouter, Depends

from app.common.deps import get_current_user, get_relationship_service
from app.models.account import Account, AccountSummary, FriendAction
from app.services.relationship_service import RelationshipService

router = APIRouter()

@router.get("", response_model=List[AccountSummary])
def get_friend_list(
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    return service.list_friends(current_user.id)

@router.get("/requests", response_model=List[AccountSummary])
def get_friend_requests(
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    # 別人送給我、還在等我決定的邀請
    return service.list_pending_requests(current_user.id)

@router.post("/request")
def send_friend_request(
    body: FriendAction,
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    service.request_friendship(requester_id=current_user.id, target_id=body.user_id)
    return {"title": "Friend request sent!"}

@router.post("/accept")
def accept_friend_request(
    body: FriendAction,
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    # body.user_id 是送出邀請的人，我是被邀請的一方
    service.accept_friendship(requester_id=body.user_id, target_id=current_user.id)
    return {"title": "Friend request accepted!"}

@router.post("/decline")
def decline_friend_request(
    body: FriendAction,
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    service.decline_friendship(requester_id=body.user_id, target_id=current_user.id)
    return {"title": "Friend request declined!"}

@router.post("/unfriend")
def unfriend_user(
    body: FriendAction,
    current_user: Account = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service),
):
    service.unfriend(current_user.id, body.user_id)
    return {"title": "You are no longer friends!"}
