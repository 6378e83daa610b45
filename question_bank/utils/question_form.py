"""
Question form: field collection, required-field validation and the rich-text
helpers used while writing a statement.

The form never assigns identity or authorship; callers stamp id, authorId,
authorName and createdAt on what `build()` returns.
"""
from typing import List, Optional
from question_bank.config import settings
from question_bank.database import Database, CATEGORIES
from question_bank.models import Category
from question_bank.models.question import OPTION_COUNT
from question_bank.utils.time_utils import generate_id
import base64
import html
import logging

REQUIRED_FIELDS_MESSAGE = "Por favor, preencha todos os campos obrigatórios"
NOT_AN_IMAGE_MESSAGE = "Por favor, selecione apenas arquivos de imagem."

FORMAT_TAGS = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
}

class FormValidationError(ValueError):
    """Blocking, user-facing validation failure"""

def apply_formatting(statement: str, start: int, end: int, fmt: str) -> str:
    """Wrap statement[start:end] in the markup for fmt; empty selections change nothing"""
    if fmt not in FORMAT_TAGS:
        raise FormValidationError(f"Formatação desconhecida: {fmt}")

    start, end = max(0, start), min(len(statement), end)
    selected = statement[start:end]
    if not selected:
        return statement

    tag = FORMAT_TAGS[fmt]
    return f"{statement[:start]}<{tag}>{selected}</{tag}>{statement[end:]}"

def insert_image_url(statement: str, url: str) -> str:
    if not url:
        return statement
    return statement + f'<br><img src="{html.escape(url)}" alt="Imagem" style="max-width: 100%; height: auto;" /><br>'

def attach_image(statement: str, content_type: Optional[str], data: bytes, max_bytes: int = None) -> str:
    """Append an uploaded image as a data URI; non-images and oversized files are rejected"""
    max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes

    if not content_type or not content_type.startswith("image/"):
        raise FormValidationError(NOT_AN_IMAGE_MESSAGE)

    if len(data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise FormValidationError(f"A imagem deve ter no máximo {limit_mb}MB.")

    media_type = content_type.split(";")[0].strip()
    encoded = base64.b64encode(data).decode("ascii")
    data_uri = html.escape(f"data:{media_type};base64,{encoded}")
    return statement + f'<br><img src="{data_uri}" alt="Imagem enviada" style="max-width: 100%; height: auto;" /><br>'

def create_category(db: Database, name: str) -> Category:
    """Mint a new category from the form and persist it"""
    name = (name or "").strip()
    if not name:
        raise FormValidationError("Informe o nome da nova disciplina")

    category = Category(id=generate_id(), name=name)
    db.insert(CATEGORIES, category.model_dump())
    logging.info(f"Category created from question form: {name}")
    return category

class QuestionForm:
    def __init__(self, category: str = "", tags: List[str] = None, statement: str = "",
                 options: List[str] = None, correct_option: int = 0):
        self.category = category
        self.tags = []
        for tag in tags or []:
            self.add_tag(tag)
        self.statement = statement
        self.options = list(options) if options is not None else [""] * OPTION_COUNT
        self.correct_option = correct_option

    def add_tag(self, tag: str) -> bool:
        tag = (tag or "").strip()
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: str):
        self.tags = [t for t in self.tags if t != tag]

    def validate(self):
        if not self.category or not self.statement.strip():
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

        if len(self.options) != OPTION_COUNT or any(not (o or "").strip() for o in self.options):
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

        if not 0 <= self.correct_option < OPTION_COUNT:
            raise FormValidationError("A resposta correta deve ser uma das cinco opções")

    def build(self) -> dict:
        """Validated field payload, using the stored (camelCase) field names"""
        self.validate()
        return {
            "category": self.category,
            "tags": list(self.tags),
            "statement": self.statement,
            "options": list(self.options),
            "correctOption": self.correct_option,
        }
