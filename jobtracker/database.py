# jobtracker/database.py
import json

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from jobtracker.config import settings

# 1. Take the URL from settings (env / .env), SQLite file by default
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. Hosted Postgres hands out postgres:// URLs, SQLAlchemy wants postgresql://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Driver specific connection arguments
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False} # SQLite only
else:
    connect_args = {}

# JSON columns keep non-ASCII text as written so it stays searchable
def json_serializer(value) -> str:
    return json.dumps(value, ensure_ascii=False)

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args, json_serializer=json_serializer
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Register every model on Base.metadata before creating tables
    import jobtracker.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
