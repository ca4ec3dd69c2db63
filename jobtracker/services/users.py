# jobtracker/services/users.py
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobtracker.models.users import User, UserRole
from jobtracker.schemas.user import UserCreate, UserUpdate
from jobtracker.utils.audit import write_log
from jobtracker.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

# Role attributes must be present on the stored record, not just in the schema
def _check_role_fields(role: Optional[str], party_name: Optional[str], transporter_name: Optional[str]):
    if role == UserRole.CLIENT.value and not party_name:
        raise _bad_request("Party name is required for clients")
    if role == UserRole.VENDOR.value and not transporter_name:
        raise _bad_request("Transporter name is required for vendors")

def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

def _get_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

def get_user(db: Session, user_id: int) -> User:
    return _get_or_404(db, user_id)


def create_user(
    db: Session, payload: UserCreate, current_user_id: Optional[int] = None, ip: Optional[str] = None
) -> User:
    email = payload.email.strip().lower()
    if _find_by_email(db, email):
        raise _bad_request("Email already exists")
    _check_role_fields(payload.role, payload.party_name, payload.transporter_name)

    user = User(
        email=email,
        password_hash=get_password_hash(payload.password),
        name=payload.name,
        role=payload.role,
        party_name=payload.party_name,
        transporter_name=payload.transporter_name,
        phone=payload.phone,
        is_active=payload.is_active,
    )
    db.add(user)
    db.flush()
    write_log(db, user_id=current_user_id, action="USER_CREATE", resource="users", ip=ip,
              meta={"user_id": user.id, "email": user.email, "role": user.role}, commit=False)
    db.commit()
    db.refresh(user)
    logger.info("User %s created with role %s", user.email, user.role)
    return user


def update_user(
    db: Session, user_id: int, payload: UserUpdate,
    current_user_id: Optional[int] = None, ip: Optional[str] = None,
) -> User:
    user = _get_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
        existing = _find_by_email(db, changes["email"])
        if existing and existing.id != user.id:
            raise _bad_request("Email already exists")
    else:
        changes.pop("email", None)

    for field in ("name", "role", "is_active"):
        if field in changes and changes[field] in (None, ""):
            raise _bad_request(f"{field} is required")

    # Validate the record as it will look after the update
    _check_role_fields(
        changes.get("role", user.role),
        changes.get("party_name", user.party_name),
        changes.get("transporter_name", user.transporter_name),
    )

    # Empty or absent password keeps the stored hash
    password = changes.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    for field, value in changes.items():
        setattr(user, field, value)
    write_log(db, user_id=current_user_id, action="USER_UPDATE", resource="users", ip=ip,
              meta={"user_id": user_id, "fields": sorted(payload.model_fields_set)}, commit=False)
    db.commit()
    db.refresh(user)
    logger.info("User %s updated: %s", user.id, sorted(changes) + (["password"] if password else []))
    return user


def delete_user(
    db: Session, user_id: int, current_user_id: Optional[int] = None, ip: Optional[str] = None
) -> str:
    user = _get_or_404(db, user_id)

    # Prevent self-deletion
    if current_user_id is not None and user.id == current_user_id:
        raise _bad_request("You cannot delete your own account")

    email = user.email
    db.delete(user)
    write_log(db, user_id=current_user_id, action="USER_DELETE", resource="users", ip=ip,
              meta={"user_id": user_id, "email": email}, commit=False)
    db.commit()
    logger.info("User %s (%s) deleted", user_id, email)
    return email


# Look up an account by email and check its password
def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = _find_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
