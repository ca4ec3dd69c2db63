# jobtracker/routes/jobs.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.models.job import JobStatus
from jobtracker.models.users import UserRole
from jobtracker.schemas.common import ApiResponse
from jobtracker.schemas.job import JobCreate, JobUpdate, JobFilters, JobResponse, JobsPage
from jobtracker.schemas.user import TokenData
from jobtracker.services import jobs as job_service
from jobtracker.utils.audit import client_ip
from jobtracker.utils.tokenJWT import role_required

router = APIRouter(prefix="/jobs", tags=["Jobs"])

any_role = role_required(UserRole.ADMIN, UserRole.CLIENT, UserRole.VENDOR)


# List jobs visible to the caller with filtering and pagination
@router.get("", response_model=ApiResponse[JobsPage])
def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=job_service.MAX_PAGE_SIZE),
    party_name: Optional[str] = Query(None, alias="partyName", description="Party name contains"),
    destination: Optional[str] = Query(None, description="Destination contains"),
    status_: Optional[JobStatus] = Query(None, alias="status", description="Exact status"),
    transporter: Optional[str] = Query(None, description="Transporter contains"),
    date_from: Optional[str] = Query(None, alias="dateFrom", description="ISO date from"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="ISO date to (inclusive)"),
    search: Optional[str] = Query(None, description="Invoice number, container number or party name"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(any_role),
):
    filters = JobFilters(
        party_name=party_name,
        destination=destination,
        status=status_,
        transporter=transporter,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )
    return {"success": True, "data": job_service.list_jobs(db, current_user, filters, page, limit)}


# Create a job
@router.post("", response_model=ApiResponse[JobResponse], status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(any_role),
):
    job = job_service.create_job(db, current_user, payload, ip=client_ip(request))
    return {"success": True, "data": job, "message": "Job created successfully"}


# Get a single job within the caller's scope
@router.get("/{job_id}", response_model=ApiResponse[JobResponse])
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(any_role),
):
    return {"success": True, "data": job_service.get_job(db, current_user, job_id)}


# Update a job; vendors are limited to progress fields on their own jobs
@router.put("/{job_id}", response_model=ApiResponse[JobResponse])
def update_job(
    job_id: int,
    payload: JobUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(any_role),
):
    job = job_service.update_job(db, current_user, job_id, payload, ip=client_ip(request))
    return {"success": True, "data": job, "message": "Job updated successfully"}


# Delete a job (Admin only)
@router.delete("/{job_id}", response_model=ApiResponse[None])
def delete_job(
    job_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(any_role),
):
    job_service.delete_job(db, current_user, job_id, ip=client_ip(request))
    return {"success": True, "message": "Job deleted successfully"}
