# jobtracker/routes/users.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.models.users import UserRole
from jobtracker.schemas.common import ApiResponse
from jobtracker.schemas.user import TokenData, UserCreate, UserUpdate, UserResponse
from jobtracker.services import users as user_service
from jobtracker.utils.audit import client_ip
from jobtracker.utils.tokenJWT import role_required

# Every account endpoint is admin only
router = APIRouter(prefix="/users", tags=["Users"])

admin_only = role_required(UserRole.ADMIN)


# List all users, newest first
@router.get("", response_model=ApiResponse[List[UserResponse]])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    return {"success": True, "data": user_service.list_users(db)}


# Create a user account
@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    user = user_service.create_user(db, payload, current_user_id=current_user.user_id, ip=client_ip(request))
    return {"success": True, "data": user, "message": "User created successfully"}


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    return {"success": True, "data": user_service.get_user(db, user_id)}


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
def update_user(
    user_id: int,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    user = user_service.update_user(
        db, user_id, payload, current_user_id=current_user.user_id, ip=client_ip(request)
    )
    return {"success": True, "data": user, "message": "User updated successfully"}


# Delete a user account
@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    user_service.delete_user(db, user_id, current_user_id=current_user.user_id, ip=client_ip(request))
    return {"success": True, "message": "User deleted successfully"}
