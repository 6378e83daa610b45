from pydantic import BaseModel, Field
from typing import Optional

class Subject(BaseModel):
    id: str
    name: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True

class Category(BaseModel):
    """Subject as seen by the question screens (name is what questions reference)"""
    id: str
    name: str

    @classmethod
    def from_subject(cls, subject: Subject) -> "Category":
        return cls(id=subject.id, name=subject.name)
