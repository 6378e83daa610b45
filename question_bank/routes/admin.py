from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr
from typing import List
from question_bank.database import Database, get_db, TEACHERS, SUBJECTS
from question_bank.models import Subject, Teacher, User
from question_bank.utils.auth_utils import require_coordinator
from question_bank.utils.time_utils import generate_id, utc_timestamp
import logging

router = APIRouter()

class TeacherData(BaseModel):
    name: str
    email: EmailStr

class SubjectData(BaseModel):
    name: str

def require_name(name: str, detail: str) -> str:
    name = name.strip()
    if not name:
        raise HTTPException(status_code=400, detail=detail)
    return name

# Teachers
@router.get("/teachers", response_model=List[Teacher])
async def list_teachers(admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    return [Teacher.model_validate(record) for record in db.select(TEACHERS)]

@router.post("/teachers", response_model=Teacher, status_code=201)
async def add_teacher(teacher_data: TeacherData, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    """Add a teacher to the roster"""
    name = require_name(teacher_data.name, "Preencha todos os campos")

    teacher = Teacher(
        id=generate_id("prof-"),
        name=name,
        email=teacher_data.email,
        created_at=utc_timestamp(),
    )
    db.insert(TEACHERS, teacher.model_dump(by_alias=True))
    logging.info(f"Teacher {teacher.email} added by {admin_user.email}")

    return teacher

@router.put("/teachers/{teacher_id}", response_model=Teacher)
async def edit_teacher(teacher_id: str, teacher_data: TeacherData, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    name = require_name(teacher_data.name, "Preencha todos os campos")

    updated = db.update(TEACHERS, {"name": name, "email": teacher_data.email}, {"id": teacher_id})
    if not updated:
        raise HTTPException(status_code=404, detail="Teacher not found")

    return Teacher.model_validate(updated)

@router.delete("/teachers/{teacher_id}")
async def delete_teacher(teacher_id: str, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    removed = db.delete(TEACHERS, {"id": teacher_id})
    if not removed:
        raise HTTPException(status_code=404, detail="Teacher not found")

    return {
        "message": f"Professor {removed[0]['name']} removido com sucesso",
        "teacher_id": teacher_id
    }

# Subjects
@router.get("/subjects", response_model=List[Subject])
async def list_subjects(admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    return [Subject.model_validate(record) for record in db.select(SUBJECTS)]

@router.post("/subjects", response_model=Subject, status_code=201)
async def add_subject(subject_data: SubjectData, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    """Add a subject; categories are refreshed from the subject list"""
    name = require_name(subject_data.name, "Preencha o nome da disciplina")

    subject = Subject(id=generate_id("subj-"), name=name, created_at=utc_timestamp())
    db.insert(SUBJECTS, subject.model_dump(by_alias=True))
    db.sync_categories()
    logging.info(f"Subject {name} added by {admin_user.email}")

    return subject

@router.put("/subjects/{subject_id}", response_model=Subject)
async def edit_subject(subject_id: str, subject_data: SubjectData, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    name = require_name(subject_data.name, "Preencha o nome da disciplina")

    updated = db.update(SUBJECTS, {"name": name}, {"id": subject_id})
    if not updated:
        raise HTTPException(status_code=404, detail="Subject not found")
    db.sync_categories()

    return Subject.model_validate(updated)

@router.delete("/subjects/{subject_id}")
async def delete_subject(subject_id: str, admin_user: User = Depends(require_coordinator), db: Database = Depends(get_db)):
    """Delete a subject; questions referencing it by name are left untouched"""
    removed = db.delete(SUBJECTS, {"id": subject_id})
    if not removed:
        raise HTTPException(status_code=404, detail="Subject not found")
    db.sync_categories()

    return {
        "message": f"Disciplina {removed[0]['name']} removida com sucesso",
        "subject_id": subject_id
    }
