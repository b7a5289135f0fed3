"""
User Management API

Service exceptions (NotFound, Duplicate, Validation) propagate to the
handlers registered in ``main.register_exception_handlers``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from core.dependencies import get_user_service
from schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserStatistics,
)
from services.user_service import UserService

# Largest value a BIGINT primary key can hold
MAX_USER_ID = 2**63 - 1

router = APIRouter(
    prefix="/users",
    tags=["Users"]
)


def _user_not_found(user_id) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {user_id}")


@router.get("", response_model=List[UserResponse])
def list_users(service: UserService = Depends(get_user_service)):
    return service.get_all_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: CreateUserRequest, service: UserService = Depends(get_user_service)):
    return service.create_user(
        username=request.username,
        email=request.email,
        environment=request.environment,
        active=request.active,
    )


@router.get("/active", response_model=List[UserResponse])
def list_active_users(service: UserService = Depends(get_user_service)):
    return service.get_active_users()


@router.get("/recent", response_model=List[UserResponse])
def list_recent_active_users(
    limit: int = Query(10, ge=1, le=100),
    service: UserService = Depends(get_user_service),
):
    """Most recently created active users, newest first."""
    return service.get_recent_active_users(limit)


@router.get("/statistics", response_model=UserStatistics)
def user_statistics(service: UserService = Depends(get_user_service)):
    return service.get_user_statistics()


@router.get("/environment/{environment}", response_model=List[UserResponse])
def list_users_by_environment(
    environment: str,
    active: Optional[bool] = None,
    service: UserService = Depends(get_user_service),
):
    """
    Users tagged with ``environment``.

    With ``?active=true|false`` only users with that flag are returned,
    newest first.
    """
    if active is None:
        return service.get_users_by_environment(environment)
    return service.get_users_by_environment_and_status(environment, active)


@router.get("/by-username/{username}", response_model=UserResponse)
def get_user_by_username(username: str, service: UserService = Depends(get_user_service)):
    user = service.get_user_by_username(username)
    if not user:
        raise _user_not_found(username)
    return user


@router.get("/by-email/{email}", response_model=UserResponse)
def get_user_by_email(email: str, service: UserService = Depends(get_user_service)):
    user = service.get_user_by_email(email)
    if not user:
        raise _user_not_found(email)
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    user = service.get_user_by_id(user_id)
    if not user:
        raise _user_not_found(user_id)
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    request: UpdateUserRequest,
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    return service.update_user(user_id, request.model_dump(exclude_unset=True))


@router.put("/{user_id}/activate", response_model=UserResponse)
def activate_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    return service.activate_user(user_id)


@router.put("/{user_id}/deactivate", response_model=UserResponse)
def deactivate_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    return service.deactivate_user(user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
