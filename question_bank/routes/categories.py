from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List
from question_bank.database import Database, get_db, CATEGORIES
from question_bank.models import Category, User
from question_bank.utils.auth_utils import get_current_user
from question_bank.utils.question_form import FormValidationError, create_category

router = APIRouter()

class CategoryCreate(BaseModel):
    name: str

@router.get("/", response_model=List[Category])
async def list_categories(current_user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    """Categories offered by the question form and list filters"""
    return [Category.model_validate(record) for record in db.select(CATEGORIES)]

@router.post("/", response_model=Category, status_code=201)
async def add_category(
    category_data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Create a category on the fly while writing a question"""
    try:
        return create_category(db, category_data.name)
    except FormValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
