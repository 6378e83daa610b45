from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr
from question_bank.database import Database, get_db
from question_bank.models import User
from question_bank.utils.auth_utils import (
    DirectoryUnavailableError,
    UserDirectory,
    UserNotFoundError,
    create_access_token,
    get_current_user,
    get_user_directory,
)
import logging

router = APIRouter()

# Pydantic models for request/response
class SignInRequest(BaseModel):
    email: EmailStr

class AuthResponse(BaseModel):
    message: str
    user: User
    access_token: str

@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: SignInRequest,
    directory: UserDirectory = Depends(get_user_directory),
    db: Database = Depends(get_db),
):
    """Sign in by looking the email up in the remote user list"""
    try:
        user = await directory.find_by_email(request.email)
    except DirectoryUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    db.set_current_user(user.model_dump())
    logging.info(f"User signed in: {user.email} ({user.role})")

    return AuthResponse(
        message="Login successful",
        user=user,
        access_token=create_access_token(user)
    )

@router.post("/signout")
async def signout(current_user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    """Sign out user"""
    db.clear_current_user()
    return {"message": "Signed out successfully"}

@router.get("/me", response_model=User)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
