# jobtracker/services/dashboard.py
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from jobtracker.models.job import Job, JobStatus
from jobtracker.schemas.job import DashboardStats
from jobtracker.schemas.user import TokenData
from jobtracker.services.jobs import scope_filters


# First day of the current and of the previous month, at midnight
def month_bounds(now: datetime):
    start_of_month = datetime(now.year, now.month, 1)
    start_of_last_month = (start_of_month - timedelta(days=1)).replace(day=1)
    return start_of_month, start_of_last_month


def dashboard_stats(db: Session, identity: TokenData, now: Optional[datetime] = None) -> DashboardStats:
    """Job counts for the caller's scope, recomputed on every call."""
    start_of_month, start_of_last_month = month_bounds(now or datetime.now())

    def _count(*criteria) -> int:
        return db.query(Job).filter(*scope_filters(identity), *criteria).count()

    return DashboardStats(
        total_jobs=_count(),
        in_transit=_count(Job.status == JobStatus.IN_TRANSIT.value),
        delivered=_count(Job.status == JobStatus.DELIVERED.value),
        pending=_count(Job.status == JobStatus.PENDING.value),
        this_month=_count(Job.date >= start_of_month),
        last_month=_count(Job.date >= start_of_last_month, Job.date < start_of_month),
    )
