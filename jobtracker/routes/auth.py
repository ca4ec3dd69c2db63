# jobtracker/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from jobtracker.database import get_db
from jobtracker.schemas.common import ApiResponse
from jobtracker.schemas.user import UserLogin, LoginResponse, TokenData, UserResponse
from jobtracker.services.users import authenticate_user
from jobtracker.utils.audit import write_log, client_ip
from jobtracker.utils.tokenJWT import create_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


# Authenticate user and issue JWT token
@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(payload: UserLogin, request: Request, db: Session = Depends(get_db)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")

    db_user = authenticate_user(db, payload.email, payload.password)

    # Validate credentials and log failure on error
    if not db_user:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": "Invalid credentials"})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not db_user.is_active:
        write_log(db, user_id=db_user.id, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": db_user.email, "reason": "Account is deactivated"})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is deactivated")

    access_token = create_access_token(db_user)

    # Log successful login event
    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return {
        "success": True,
        "data": {"user": UserResponse.model_validate(db_user), "token": access_token},
    }


# Identity carried by the caller's token
@router.get("/me", response_model=ApiResponse[TokenData])
def me(current_user: TokenData = Depends(get_current_user)):
    return {"success": True, "data": current_user}
