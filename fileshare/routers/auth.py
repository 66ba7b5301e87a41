# Filename: fileshare/routers/auth.py
from fastapi import APIRouter, HTTPException, status, Response, Body

from ..config import settings
from ..schemas import AdminLogin, Token
from ..auth import verify_manage_password, create_access_token

router = APIRouter(prefix=f"{settings.context_manage_path}/api/admin", tags=["auth"])


@router.post("/login", response_model=Token)
def login(data: AdminLogin):
    if not verify_manage_password(data.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password", headers={"WWW-Authenticate": "Bearer"})
    token = create_access_token()
    return {"access_token": token, "token_type": "bearer"}


# JSON login that sets HttpOnly cookie (works for browsers)
@router.post("/login-cookie")
def login_cookie(response: Response, password: str = Body(..., embed=True), remember: bool = Body(False, embed=True)):
    if not verify_manage_password(password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")
    token = create_access_token()
    max_age = settings.access_token_expire_minutes * 60 if remember else None  # token lifetime or session cookie
    response.set_cookie("access_token", token, httponly=True, secure=False, samesite="lax", max_age=max_age)
    return {"status": "ok"}


# Logout clears cookie
@router.post("/logout-cookie")
def logout_cookie(response: Response):
    response.delete_cookie("access_token")
    return {"status": "ok"}
