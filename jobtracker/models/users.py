# jobtracker/models/users.py
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from jobtracker.database import Base

# Roles recognised by the access guard
class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CLIENT = "client"
    VENDOR = "vendor"

# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True) # Always stored lower-cased
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, index=True)

    # Role scoped attributes, matched against jobs by value
    party_name = Column(String, nullable=True)  # clients
    transporter_name = Column(String, nullable=True)  # vendors

    phone = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
