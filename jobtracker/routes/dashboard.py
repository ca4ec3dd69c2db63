# jobtracker/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.models.users import UserRole
from jobtracker.schemas.common import ApiResponse
from jobtracker.schemas.job import DashboardStats
from jobtracker.schemas.user import TokenData
from jobtracker.services.dashboard import dashboard_stats
from jobtracker.utils.tokenJWT import role_required

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"]
)


# Job counts scoped to the caller's party or transporter
@router.get("/stats", response_model=ApiResponse[DashboardStats])
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(role_required(UserRole.ADMIN, UserRole.CLIENT, UserRole.VENDOR)),
):
    return {"success": True, "data": dashboard_stats(db, current_user)}
