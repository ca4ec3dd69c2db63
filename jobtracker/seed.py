"""Seed the database with default accounts and sample jobs.

Usage: python -m jobtracker.seed
"""
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from jobtracker.database import SessionLocal, init_db
from jobtracker.models.job import Job
from jobtracker.models.users import User
from jobtracker.utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

# Default accounts; passwords must be changed after the first login
DEFAULT_USERS = [
    {"email": "admin@als.com", "password": "admin123", "name": "ALS Admin", "role": "admin"},
    {"email": "client@example.com", "password": "client123", "name": "Sample Client", "role": "client",
     "party_name": "Sample Company Ltd", "phone": "+1234567890"},
    {"email": "vendor@example.com", "password": "vendor123", "name": "Sample Transporter", "role": "vendor",
     "transporter_name": "Fast Logistics Ltd", "phone": "+0987654321"},
]

SAMPLE_JOBS = [
    {
        "date": datetime(2024, 1, 15),
        "job_number": "JOB-001",
        "invoice_number": "INV-001",
        "party_name": "Sample Company Ltd",
        "container_type": "FCL",
        "shipping_line": "Maersk",
        "destination": "Dubai",
        "vessel": "MSC Oscar",
        "truck": "TRK-001",
        "container_numbers": ["MSKU1234567", "MSKU1234568"],
        "port": "Jebel Ali",
        "cut_off_date": datetime(2024, 1, 10),
        "etd": datetime(2024, 1, 20),
        "transporter": "Fast Logistics Ltd",
        "status": "in_transit",
        "cell_number": "+1234567890",
    },
    {
        "date": datetime(2024, 1, 20),
        "job_number": "JOB-002",
        "invoice_number": "INV-002",
        "party_name": "Sample Company Ltd",
        "container_type": "LCL",
        "shipping_line": "CMA CGM",
        "destination": "Singapore",
        "vessel": "CMA CGM Marco Polo",
        "truck": "TRK-002",
        "container_numbers": ["CMAU9876543"],
        "port": "Singapore",
        "cut_off_date": datetime(2024, 1, 15),
        "etd": datetime(2024, 1, 25),
        "transporter": "Fast Logistics Ltd",
        "status": "pending",
        "cell_number": "+1234567890",
    },
]


def seed(session: Session) -> dict:
    """Create missing default users and, on an empty jobs table, the sample jobs."""
    created_users = 0
    for data in DEFAULT_USERS:
        data = dict(data)
        if session.query(User).filter(User.email == data["email"]).first():
            logger.info("User %s already exists, skipping", data["email"])
            continue
        password = data.pop("password")
        session.add(User(password_hash=get_password_hash(password), is_active=True, **data))
        created_users += 1
        logger.info("Created %s user %s", data["role"], data["email"])

    created_jobs = 0
    if session.query(Job).count() == 0:
        session.add_all(Job(**job) for job in SAMPLE_JOBS)
        created_jobs = len(SAMPLE_JOBS)
        logger.info("Created %d sample jobs", created_jobs)

    session.commit()
    return {"users": created_users, "jobs": created_jobs}


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    init_db()
    session = SessionLocal()
    try:
        result = seed(session)
        logger.info("Seeding finished: %s", result)
    finally:
        session.close()


if __name__ == "__main__":
    main()
