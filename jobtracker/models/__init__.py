from jobtracker.models.users import User, UserRole
from jobtracker.models.job import Job, JobStatus, ContainerType
from jobtracker.models.log import Log

__all__ = ["User", "UserRole", "Job", "JobStatus", "ContainerType", "Log"]
