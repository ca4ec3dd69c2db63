# jobtracker/models/job.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, Index, func
from jobtracker.database import Base

# Shipment progress states
class JobStatus(str, enum.Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CLEARED = "cleared"
    DISPATCHED = "dispatched"

class ContainerType(str, enum.Enum):
    CTNS = "CTNS"
    FCL = "FCL"
    LCL = "LCL"

# Represents a container shipment tracked from booking to delivery
class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime, nullable=False, index=True)
    job_number = Column(String, nullable=False)
    invoice_number = Column(String, nullable=False, index=True)

    # Owning party, matched to client.party_name by value
    party_name = Column(String, nullable=False, index=True)

    container_type = Column(String(8), nullable=False)
    shipping_line = Column(String, nullable=False)
    destination = Column(String, nullable=False, index=True)
    vessel = Column(String, nullable=True)
    truck = Column(String, nullable=False)
    container_numbers = Column(JSON, nullable=False, default=list) # Ordered list of container codes
    port = Column(String, nullable=False)

    # Schedule
    cut_off_date = Column(DateTime, nullable=False)
    etd = Column(DateTime, nullable=False)
    vehicle_atd = Column(DateTime, nullable=True)
    vehicle_arrv = Column(DateTime, nullable=True)

    # Carrier, matched to vendor.transporter_name by value
    transporter = Column(String, nullable=False, index=True)
    remarks = Column(Text, nullable=True)
    cell_number = Column(String, nullable=True)
    status = Column(String(20), nullable=False, default=JobStatus.PENDING.value, index=True)
    assigned_vendor = Column(String, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_jobs_party_status", "party_name", "status"),
        Index("ix_jobs_transporter_status", "transporter", "status"),
        Index("ix_jobs_date_status", "date", "status"),
    )
