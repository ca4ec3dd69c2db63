# jobtracker/routes/logs.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import datetime
from pydantic import BaseModel

from jobtracker.database import get_db
from jobtracker.models.log import Log
from jobtracker.models.users import UserRole
from jobtracker.schemas.common import ApiResponse
from jobtracker.schemas.user import TokenData
from jobtracker.utils.tokenJWT import role_required

router = APIRouter(prefix="/logs", tags=["Logs"])

# --- SCHEMAS ---
class LogResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

    class Config:
        from_attributes = True

class LogPage(BaseModel):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int


def _parse_day(value: str, end_of_day: bool = False) -> datetime:
    try:
        # Cover the whole closing day when only a date is given
        if end_of_day and len(value) == 10:
            value += " 23:59:59"
        return datetime.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Bad date format: {value}")


# --- ENDPOINT ---
@router.get("", response_model=ApiResponse[LogPage])
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="Action contains"),
    user_id: Optional[int] = Query(None, description="Acting user id"),
    resource: Optional[str] = Query(None, description="Resource contains"),
    status: Optional[str] = Query(None, description="SUCCESS / FAIL"),
    date_from: Optional[str] = Query(None, description="Date from (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, description="Date to (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(role_required(UserRole.ADMIN)),
):
    query = db.query(Log)

    # 1. Action
    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))

    # 2. Acting user
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)

    # 3. Resource
    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))

    # 4. Status
    if status:
        query = query.filter(Log.status == status.upper())

    # 5. Date range
    if date_from:
        query = query.filter(Log.ts >= _parse_day(date_from))
    if date_to:
        query = query.filter(Log.ts <= _parse_day(date_to, end_of_day=True))

    # Newest first
    query = query.order_by(Log.ts.desc(), Log.id.desc())

    total = query.count()
    logs = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "success": True,
        "data": {
            "items": logs,
            "total": total,
            "page": page,
            "page_size": page_size,
        },
    }
