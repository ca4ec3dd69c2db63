# jobtracker/services/jobs.py
"""
Job queries and write rules.

Every read is narrowed by the caller's role scope: clients only reach jobs whose
party name equals their own, vendors only jobs whose transporter equals their
transporter name. The scope is added on top of caller supplied filters and can
never be widened by them. Writes are limited per role by ``UPDATABLE_FIELDS``.
"""
import logging
import math
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from pydantic.alias_generators import to_camel
from sqlalchemy import String, cast, false, or_
from sqlalchemy.orm import Session

from jobtracker.models.job import Job, JobStatus
from jobtracker.models.users import UserRole
from jobtracker.schemas.job import (
    JobCreate, JobUpdate, JobFilters, JobResponse, JobsPage, Pagination
)
from jobtracker.schemas.user import TokenData
from jobtracker.utils.audit import write_log

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

_JSON_LIST_SYNTAX = str.maketrans("", "", "\"[],\\")

# Fields each role may change on an existing job; None means unrestricted
UPDATABLE_FIELDS = {
    UserRole.ADMIN.value: None,
    UserRole.VENDOR.value: frozenset({"vehicle_atd", "vehicle_arrv", "status", "remarks"}),
    UserRole.CLIENT.value: frozenset(),
}

# Columns that may not be cleared by an update
REQUIRED_FIELDS = frozenset({
    "date", "job_number", "invoice_number", "party_name", "container_type",
    "shipping_line", "destination", "truck", "container_numbers", "port",
    "cut_off_date", "etd", "transporter", "status",
})


# ---- SCOPE ----
def scope_filters(identity: TokenData) -> list:
    """SQL criteria every query issued for this identity must include."""
    if identity.role == UserRole.ADMIN.value:
        return []
    if identity.role == UserRole.CLIENT.value:
        return [Job.party_name == identity.party_name] if identity.party_name else [false()]
    if identity.role == UserRole.VENDOR.value:
        return [Job.transporter == identity.transporter_name] if identity.transporter_name else [false()]
    return [false()]


def in_scope(identity: TokenData, job: Job) -> bool:
    if identity.role == UserRole.ADMIN.value:
        return True
    if identity.role == UserRole.CLIENT.value:
        return bool(identity.party_name) and job.party_name == identity.party_name
    if identity.role == UserRole.VENDOR.value:
        return bool(identity.transporter_name) and job.transporter == identity.transporter_name
    return False


# Parse ISO date/datetime filter values; a bare date in date_to covers the whole day
def _parse_date(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    if not value:
        return None
    try:
        if end_of_day and len(value) == 10:
            value += " 23:59:59.999999"
        return datetime.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Bad date format: {value}")


def _get_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


# ---- READS ----
def list_jobs(
    db: Session,
    identity: TokenData,
    filters: JobFilters,
    page: int = 1,
    limit: int = 10,
) -> JobsPage:
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)

    query = db.query(Job).filter(*scope_filters(identity))

    # Caller filters narrow the scoped set further
    if filters.party_name:
        query = query.filter(Job.party_name.ilike(f"%{filters.party_name}%"))
    if filters.destination:
        query = query.filter(Job.destination.ilike(f"%{filters.destination}%"))
    if filters.status:
        query = query.filter(Job.status == JobStatus(filters.status).value)
    if filters.transporter:
        query = query.filter(Job.transporter.ilike(f"%{filters.transporter}%"))

    date_from = _parse_date(filters.date_from)
    date_to = _parse_date(filters.date_to, end_of_day=True)
    if date_from:
        query = query.filter(Job.date >= date_from)
    if date_to:
        query = query.filter(Job.date <= date_to)

    if filters.search:
        like = f"%{filters.search}%"
        criteria = [Job.invoice_number.ilike(like), Job.party_name.ilike(like)]
        # container_numbers is matched as JSON text, so list punctuation is dropped from the term
        container_term = filters.search.translate(_JSON_LIST_SYNTAX).strip()
        if container_term:
            criteria.append(cast(Job.container_numbers, String).ilike(f"%{container_term}%"))
        query = query.filter(or_(*criteria))

    total = query.count()
    rows = (
        query.order_by(Job.date.desc(), Job.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return JobsPage(
        data=[JobResponse.model_validate(j) for j in rows],
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)),
    )


def get_job(db: Session, identity: TokenData, job_id: int) -> Job:
    job = _get_or_404(db, job_id)
    if not in_scope(identity, job):
        logger.warning("User %s denied read of job %s", identity.user_id, job_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return job


# ---- WRITES ----
def create_job(db: Session, identity: TokenData, payload: JobCreate, ip: Optional[str] = None) -> Job:
    data = payload.model_dump()

    if data["status"] != JobStatus.PENDING.value and not data.get("vessel"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="vessel is required when status is not pending",
        )

    job = Job(**data)
    db.add(job)
    db.flush()
    write_log(db, user_id=identity.user_id, action="JOB_CREATE", resource="jobs", ip=ip,
              meta={"job_id": job.id, "job_number": job.job_number}, commit=False)
    db.commit()
    db.refresh(job)
    logger.info("Job %s (%s) created by user %s", job.id, job.job_number, identity.user_id)
    return job


def update_job(
    db: Session, identity: TokenData, job_id: int, payload: JobUpdate, ip: Optional[str] = None
) -> Job:
    job = _get_or_404(db, job_id)

    if identity.role == UserRole.CLIENT.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Clients cannot update jobs")
    if not in_scope(identity, job):
        logger.warning("User %s denied update of job %s", identity.user_id, job_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    # Fields outside the role's allow-list are dropped, not rejected
    allowed = UPDATABLE_FIELDS.get(identity.role, frozenset())
    changes = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if allowed is None or k in allowed
    }

    for field in REQUIRED_FIELDS.intersection(changes):
        if changes[field] in (None, "", []):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{to_camel(field)} is required")

    # Leaving pending needs a vessel, from this update or already on the record
    new_status = changes.get("status")
    if new_status and new_status != JobStatus.PENDING.value and job.status == JobStatus.PENDING.value:
        vessel = changes["vessel"] if "vessel" in changes else job.vessel
        if not vessel:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="vessel is required to change status from pending",
            )

    for field, value in changes.items():
        setattr(job, field, value)
    write_log(db, user_id=identity.user_id, action="JOB_UPDATE", resource="jobs", ip=ip,
              meta={"job_id": job_id, "fields": sorted(changes)}, commit=False)
    db.commit()
    db.refresh(job)
    logger.info("Job %s updated by user %s: %s", job.id, identity.user_id, sorted(changes))
    return job


def delete_job(db: Session, identity: TokenData, job_id: int, ip: Optional[str] = None) -> str:
    if identity.role != UserRole.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can delete jobs")

    job = _get_or_404(db, job_id)
    job_number = job.job_number
    db.delete(job)
    write_log(db, user_id=identity.user_id, action="JOB_DELETE", resource="jobs", ip=ip,
              meta={"job_id": job_id, "job_number": job_number}, commit=False)
    db.commit()
    logger.info("Job %s (%s) deleted by user %s", job_id, job_number, identity.user_id)
    return job_number
