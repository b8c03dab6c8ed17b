"""Auth API routes — login, register, list, update and delete users."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status

from hightribe.application.services import auth_service
from hightribe.application.services.user_service import list_users
from hightribe.core.security import TokenIssuer
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.domain.schemas.user import serialize_user
from hightribe.interfaces.api.responses import cache_list_response, success
from hightribe.interfaces.deps import failure_message, get_json_body, get_token_issuer, get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", dependencies=[Depends(failure_message("Authentication failed"))])
def login(
    body: Any = Depends(get_json_body),
    repo: UserRepository = Depends(get_user_repository),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    data = auth_service.login(repo, issuer, body)

    response = success(data=data)
    response.set_cookie(
        "token",
        data["token"],
        max_age=int(issuer.login_ttl.total_seconds()),
        path="/",
        httponly=True,
        samesite="Lax",
    )
    return response


@router.get("")
def list_all(
    request: Request,
    search: Optional[str] = None,
    limit: Optional[str] = None,
    repo: UserRepository = Depends(get_user_repository),
):
    users, total = list_users(repo, search, limit)
    response = success(
        data=[serialize_user(u) for u in users],
        total=total,
        message="Users retrieved successfully",
    )
    return cache_list_response(request, response)


@router.post("")
def register(
    body: Any = Depends(get_json_body),
    repo: UserRepository = Depends(get_user_repository),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user, token = auth_service.register(repo, issuer, body)
    return success(
        status.HTTP_201_CREATED,
        data=serialize_user(user),
        token=token,
        message="User created successfully",
    )


@router.put("")
def update(
    body: Any = Depends(get_json_body),
    repo: UserRepository = Depends(get_user_repository),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user, token = auth_service.update(repo, issuer, body)
    return success(
        data=serialize_user(user),
        token=token,
        message="User updated successfully",
    )


@router.delete("")
def delete(
    body: Any = Depends(get_json_body),
    repo: UserRepository = Depends(get_user_repository),
):
    user = auth_service.delete(repo, body)
    return success(data=serialize_user(user), message="User deleted successfully")
