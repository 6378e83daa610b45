from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from pydantic import BaseModel, Field
from typing import Literal
from question_bank.config import settings
from question_bank.models import User
from question_bank.utils.auth_utils import get_current_user
from question_bank.utils.question_form import (
    FormValidationError,
    apply_formatting,
    attach_image,
    insert_image_url,
)

router = APIRouter()

class FormatRequest(BaseModel):
    statement: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    format: Literal["bold", "italic", "underline"]

class ImageUrlRequest(BaseModel):
    statement: str
    url: str

class StatementResponse(BaseModel):
    statement: str

@router.post("/format", response_model=StatementResponse)
async def format_statement(request: FormatRequest, current_user: User = Depends(get_current_user)):
    """Wrap the selected range of the statement in bold/italic/underline markup"""
    return StatementResponse(
        statement=apply_formatting(request.statement, request.start, request.end, request.format)
    )

@router.post("/image-url", response_model=StatementResponse)
async def add_image_url(request: ImageUrlRequest, current_user: User = Depends(get_current_user)):
    """Append an image reference by URL to the statement"""
    return StatementResponse(statement=insert_image_url(request.statement, request.url.strip()))

@router.post("/image-upload", response_model=StatementResponse)
async def upload_image(
    statement: str = Form(""),
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """Embed an uploaded image in the statement as a data URI"""
    # one byte past the limit is enough to reject an oversized file
    content = await file.read(settings.max_upload_bytes + 1)
    try:
        return StatementResponse(statement=attach_image(statement, file.content_type, content))
    except FormValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
