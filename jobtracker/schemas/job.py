from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from jobtracker.models.job import ContainerType, JobStatus
from jobtracker.schemas.common import CamelRequest, CamelResponse


def split_container_numbers(value):
    """Accept a list or newline separated text; trim entries and drop blanks."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split("\n")
    return [str(cn).strip() for cn in value if cn is not None and str(cn).strip()]


# Fields shared by create and update payloads
class _JobPayload(CamelRequest):

    @field_validator("container_numbers", mode="before", check_fields=False)
    @classmethod
    def _normalize_container_numbers(cls, v):
        return split_container_numbers(v)


# Input schema for job creation
class JobCreate(_JobPayload):
    date: datetime
    job_number: str = Field(min_length=1)
    invoice_number: str = Field(min_length=1)
    party_name: str = Field(min_length=1)
    container_type: ContainerType
    shipping_line: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    vessel: Optional[str] = None
    truck: str = Field(min_length=1)
    container_numbers: List[str] = Field(min_length=1)
    port: str = Field(min_length=1)
    cut_off_date: datetime
    etd: datetime
    vehicle_atd: Optional[datetime] = None
    vehicle_arrv: Optional[datetime] = None
    transporter: str = Field(min_length=1)
    remarks: Optional[str] = None
    cell_number: Optional[str] = None
    status: JobStatus = JobStatus.PENDING
    assigned_vendor: Optional[str] = None


# Partial update; only fields present in the request body are applied
class JobUpdate(_JobPayload):
    date: Optional[datetime] = None
    job_number: Optional[str] = None
    invoice_number: Optional[str] = None
    party_name: Optional[str] = None
    container_type: Optional[ContainerType] = None
    shipping_line: Optional[str] = None
    destination: Optional[str] = None
    vessel: Optional[str] = None
    truck: Optional[str] = None
    container_numbers: Optional[List[str]] = None
    port: Optional[str] = None
    cut_off_date: Optional[datetime] = None
    etd: Optional[datetime] = None
    vehicle_atd: Optional[datetime] = None
    vehicle_arrv: Optional[datetime] = None
    transporter: Optional[str] = None
    remarks: Optional[str] = None
    cell_number: Optional[str] = None
    status: Optional[JobStatus] = None
    assigned_vendor: Optional[str] = None


# Output schema representing a stored job
class JobResponse(CamelResponse):
    id: int
    date: datetime
    job_number: str
    invoice_number: str
    party_name: str
    container_type: str
    shipping_line: str
    destination: str
    vessel: Optional[str] = None
    truck: str
    container_numbers: List[str] = []
    port: str
    cut_off_date: datetime
    etd: datetime
    vehicle_atd: Optional[datetime] = None
    vehicle_arrv: Optional[datetime] = None
    transporter: str
    remarks: Optional[str] = None
    cell_number: Optional[str] = None
    status: str
    assigned_vendor: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Caller supplied list filters, combined with the role scope
class JobFilters(BaseModel):
    party_name: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[JobStatus] = None
    transporter: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    search: Optional[str] = None


class Pagination(CamelResponse):
    page: int
    limit: int
    total: int
    total_pages: int

# Schema for paginated job lists
class JobsPage(CamelResponse):
    data: List[JobResponse]
    pagination: Pagination


class DashboardStats(CamelResponse):
    total_jobs: int
    in_transit: int
    delivered: int
    pending: int
    this_month: int
    last_month: int
