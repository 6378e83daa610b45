from pydantic import BaseModel, Field, model_validator
from typing import List

OPTION_COUNT = 5

class Question(BaseModel):
    id: str
    author_id: str = Field(alias="authorId")
    author_name: str = Field(alias="authorName")
    category: str
    tags: List[str] = []
    statement: str
    options: List[str]
    correct_option: int = Field(default=0, alias="correctOption", ge=0)
    created_at: str = Field(alias="createdAt")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def check_correct_option(self):
        if self.correct_option >= len(self.options):
            raise ValueError("correctOption must index one of the options")
        return self

    def __repr__(self):
        return f"<Question(id={self.id}, category={self.category}, statement={self.statement[:20]})>"
