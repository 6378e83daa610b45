from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import List
from question_bank.database import Database, get_db, QUESTIONS
from question_bank.models import Question, User
from question_bank.utils.auth_utils import get_current_user
from question_bank.utils.csv_export import EmptyExportError, export_csv, export_filename
from question_bank.utils.filters import ALL, QuestionFilter, author_facets, filter_questions, tag_facets
from question_bank.utils.question_form import FormValidationError, QuestionForm
from question_bank.utils.time_utils import generate_id, utc_timestamp
import logging

router = APIRouter()

class QuestionCreate(BaseModel):
    category: str = ""
    tags: List[str] = []
    statement: str = ""
    options: List[str] = ["", "", "", "", ""]
    correct_option: int = Field(default=0, alias="correctOption")

    class Config:
        populate_by_name = True

    def to_form(self) -> QuestionForm:
        return QuestionForm(
            category=self.category,
            tags=self.tags,
            statement=self.statement,
            options=self.options,
            correct_option=self.correct_option,
        )

class QuestionListResponse(BaseModel):
    questions: List[Question]
    total: int
    authors: List[str]
    tags: List[str]

def load_questions(db: Database) -> List[Question]:
    return [Question.model_validate(record) for record in db.select(QUESTIONS)]

def question_filter(
    text: str = Query("", description="Case-insensitive search in the statement"),
    category: str = Query(ALL, description="Category name or 'all'"),
    author: str = Query(ALL, description="Author name or 'all'"),
    tags: List[str] = Query([], description="Questions must carry every tag given"),
) -> QuestionFilter:
    return QuestionFilter(text=text, category=category, author=author, tags=set(tags))

@router.get("/", response_model=QuestionListResponse)
async def list_questions(
    flt: QuestionFilter = Depends(question_filter),
    current_user: User = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """List questions matching the filters, with author/tag facets of the whole bank"""
    questions = load_questions(db)
    filtered = filter_questions(questions, flt)

    return QuestionListResponse(
        questions=filtered,
        total=len(filtered),
        authors=author_facets(questions),
        tags=tag_facets(questions),
    )

@router.get("/export")
async def export_questions(
    flt: QuestionFilter = Depends(question_filter),
    current_user: User = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Download the filtered questions as CSV"""
    filtered = filter_questions(load_questions(db), flt)

    try:
        content = export_csv(filtered)
    except EmptyExportError as e:
        raise HTTPException(status_code=400, detail=str(e))

    filename = export_filename()
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.get("/{question_id}", response_model=Question)
async def get_question(question_id: str, current_user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    record = db.get(QUESTIONS, question_id)
    if not record:
        raise HTTPException(status_code=404, detail="Question not found")
    return Question.model_validate(record)

@router.post("/", response_model=Question, status_code=201)
async def create_question(
    question_data: QuestionCreate,
    current_user: User = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Create a question authored by the current user"""
    try:
        fields = question_data.to_form().build()
    except FormValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    question = Question.model_validate({
        **fields,
        "id": generate_id(),
        "authorId": current_user.id,
        "authorName": current_user.name,
        "createdAt": utc_timestamp(),
    })
    db.insert(QUESTIONS, question.model_dump(by_alias=True))
    logging.info(f"Question {question.id} created by {current_user.email}")

    return question

@router.put("/{question_id}", response_model=Question)
async def update_question(
    question_id: str,
    question_data: QuestionCreate,
    current_user: User = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Edit a question; id, author and creation date are kept"""
    existing = db.get(QUESTIONS, question_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Question not found")

    try:
        fields = question_data.to_form().build()
    except FormValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    updated = db.update(QUESTIONS, fields, {"id": question_id})
    logging.info(f"Question {question_id} updated by {current_user.email}")

    return Question.model_validate(updated)

@router.delete("/{question_id}")
async def delete_question(question_id: str, current_user: User = Depends(get_current_user), db: Database = Depends(get_db)):
    removed = db.delete(QUESTIONS, {"id": question_id})
    if not removed:
        raise HTTPException(status_code=404, detail="Question not found")

    logging.info(f"Question {question_id} deleted by {current_user.email}")
    return {"message": "Questão excluída com sucesso!", "question_id": question_id}
