from pydantic import BaseModel, Field
from enum import Enum

class Role(str, Enum):
    PROFESSOR = "professor"
    COORDINATOR = "coordenador"

class User(BaseModel):
    """Authenticated principal (teacher or coordinator)"""
    id: str
    name: str
    email: str
    role: Role = Role.PROFESSOR

    class Config:
        use_enum_values = True

    @property
    def is_coordinator(self) -> bool:
        return self.role == Role.COORDINATOR.value

class Teacher(BaseModel):
    """Teacher roster entry managed from the admin panel"""
    id: str
    name: str
    email: str
    created_at: str = Field(alias="createdAt")

    class Config:
        populate_by_name = True
