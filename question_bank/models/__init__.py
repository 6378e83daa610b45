from .user import Role, User, Teacher
from .subject import Subject, Category
from .question import Question

__all__ = ["Role", "User", "Teacher", "Subject", "Category", "Question"]
