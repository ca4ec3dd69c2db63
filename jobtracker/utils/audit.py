from typing import Optional
from fastapi import Request
from sqlalchemy.orm import Session
from jobtracker.models.log import Log
from jobtracker.models.users import User

def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None, commit=True):
    meta = dict(meta or {})
    # Tokens outlive deleted accounts; keep the actor id in meta instead of a dangling FK
    if user_id is not None and db.get(User, user_id) is None:
        meta["actor_id"] = user_id
        user_id = None
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta)
    db.add(entry)
    if commit:
        db.commit()
    return entry

def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host
