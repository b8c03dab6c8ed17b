"""Users API routes — list, fetch by id, create."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status

from hightribe.application.services.user_service import create_user, get_user, list_users
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.domain.schemas.user import serialize_user
from hightribe.interfaces.api.responses import cache_list_response, success
from hightribe.interfaces.deps import failure_message, get_json_body, get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", dependencies=[Depends(failure_message("Failed to retrieve users"))])
def list_or_get(
    request: Request,
    search: Optional[str] = None,
    limit: Optional[str] = None,
    id: Optional[str] = None,
    repo: UserRepository = Depends(get_user_repository),
):
    """A single user when ``id`` is given, otherwise the filtered list."""
    if id:
        user = get_user(repo, id)
        return success(data=serialize_user(user), message="User retrieved successfully")

    users, total = list_users(repo, search, limit)
    response = success(
        data=[serialize_user(u) for u in users],
        total=total,
        message="Users retrieved successfully",
    )
    return cache_list_response(request, response)


@router.post("", dependencies=[Depends(failure_message("Failed to create user"))])
def create(
    body: Any = Depends(get_json_body),
    repo: UserRepository = Depends(get_user_repository),
):
    user = create_user(repo, body)
    return success(
        status.HTTP_201_CREATED,
        data=serialize_user(user),
        message="User created successfully",
    )
