from pathlib import Path
from typing import Optional
from fastapi import Request
from question_bank.models import Category, Subject
from question_bank.utils.time_utils import utc_timestamp
import json
import logging

TEACHERS = "teachers"
SUBJECTS = "subjects"
CATEGORIES = "categories"
QUESTIONS = "questions"
CURRENT_USER = "currentUser"

COLLECTIONS = (TEACHERS, SUBJECTS, CATEGORIES, QUESTIONS)

# Local key/value store
class LocalStorage:
    """Key/value store keeping one JSON document per key under a directory"""

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str):
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str):
        self._path(key).unlink(missing_ok=True)

    def keys(self):
        return sorted(path.stem for path in self.directory.glob("*.json"))

# Default data written by init_storage when a key is absent
def default_teachers():
    created_at = utc_timestamp()
    return [
        {"id": "prof-1", "name": "Professor", "email": "professor@escola.com", "createdAt": created_at},
        {"id": "prof-2", "name": "Maria Silva", "email": "maria.silva@escola.com", "createdAt": created_at},
        {"id": "prof-3", "name": "João Santos", "email": "joao.santos@escola.com", "createdAt": created_at},
    ]

def default_subjects():
    created_at = utc_timestamp()
    return [
        {"id": "subj-1", "name": "Matemática", "createdAt": created_at},
        {"id": "subj-2", "name": "Português", "createdAt": created_at},
        {"id": "subj-3", "name": "História", "createdAt": created_at},
        {"id": "subj-4", "name": "Geografia", "createdAt": created_at},
    ]

def default_categories():
    return [
        {"id": "1", "name": "Matemática"},
        {"id": "2", "name": "Português"},
        {"id": "3", "name": "História"},
        {"id": "4", "name": "Geografia"},
        {"id": "5", "name": "Ciências"},
    ]

def default_questions():
    return [
        {
            "id": "1",
            "authorId": "1",
            "authorName": "Prof. João Silva",
            "category": "Matemática",
            "tags": ["álgebra", "equações"],
            "statement": "Qual o valor de x na equação: 2x + 5 = 15?",
            "options": ["x = 3", "x = 5", "x = 7", "x = 10", "x = 15"],
            "correctOption": 1,
            "createdAt": "2024-01-15T10:30:00Z",
        },
        {
            "id": "2",
            "authorId": "2",
            "authorName": "Prof. Maria Santos",
            "category": "Português",
            "tags": ["gramática", "verbos"],
            "statement": 'Qual é o tempo verbal da frase: "Eu estudarei amanhã"?',
            "options": [
                "Presente do indicativo",
                "Pretérito perfeito",
                "Futuro do presente",
                "Pretérito imperfeito",
                "Futuro do pretérito",
            ],
            "correctOption": 2,
            "createdAt": "2024-01-16T14:20:00Z",
        },
        {
            "id": "3",
            "authorId": "1",
            "authorName": "Prof. João Silva",
            "category": "História",
            "tags": ["brasil", "independência"],
            "statement": "Em que ano ocorreu a Independência do Brasil?",
            "options": ["1808", "1822", "1889", "1500", "1930"],
            "correctOption": 1,
            "createdAt": "2024-01-17T09:15:00Z",
        },
    ]

DEFAULTS = {
    TEACHERS: default_teachers,
    SUBJECTS: default_subjects,
    CATEGORIES: default_categories,
    QUESTIONS: default_questions,
}

# Collection repository on top of the local store
class Database:
    """Read/write contract for the entity collections held in local storage"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _load(self, table: str) -> list:
        raw = self.storage.get_item(table)
        if raw is None:
            return []
        return json.loads(raw)

    def _save(self, table: str, records: list):
        self.storage.set_item(table, json.dumps(records, ensure_ascii=False))

    @staticmethod
    def _matches(record: dict, filters: Optional[dict]) -> bool:
        if not filters:
            return True
        return all(record.get(key) == value for key, value in filters.items())

    def select(self, table: str, filters: dict = None, limit: int = None):
        """Select records from a collection, in stored order"""
        records = [r for r in self._load(table) if self._matches(r, filters)]
        if limit:
            records = records[:limit]
        return records

    def get(self, table: str, record_id: str):
        """Get one record by id or None"""
        records = self.select(table, {"id": record_id}, limit=1)
        return records[0] if records else None

    def insert(self, table: str, data: dict):
        """Append a record to a collection"""
        try:
            records = self._load(table)
            records.append(data)
            self._save(table, records)
            return data
        except OSError as e:
            logging.error(f"Insert error in {table}: {e}")
            raise e

    def update(self, table: str, data: dict, filters: dict):
        """Merge data into the matching records; returns the first updated record"""
        try:
            records = self._load(table)
            updated = []
            for index, record in enumerate(records):
                if self._matches(record, filters):
                    records[index] = {**record, **data}
                    updated.append(records[index])
            if updated:
                self._save(table, records)
            return updated[0] if updated else None
        except OSError as e:
            logging.error(f"Update error in {table}: {e}")
            raise e

    def delete(self, table: str, filters: dict):
        """Delete matching records and return them"""
        try:
            records = self._load(table)
            kept = [r for r in records if not self._matches(r, filters)]
            removed = [r for r in records if self._matches(r, filters)]
            if removed:
                self._save(table, kept)
            return removed
        except OSError as e:
            logging.error(f"Delete error in {table}: {e}")
            raise e

    def replace(self, table: str, records: list):
        """Overwrite a whole collection"""
        self._save(table, records)
        return records

    def sync_categories(self):
        """Make categories the projection of the admin-managed subjects"""
        categories = [
            Category.from_subject(Subject.model_validate(subject)).model_dump()
            for subject in self.select(SUBJECTS)
        ]
        return self.replace(CATEGORIES, categories)

    # Session principal
    def get_current_user(self):
        raw = self.storage.get_item(CURRENT_USER)
        return json.loads(raw) if raw is not None else None

    def set_current_user(self, user: dict):
        self.storage.set_item(CURRENT_USER, json.dumps(user, ensure_ascii=False))

    def clear_current_user(self):
        self.storage.remove_item(CURRENT_USER)

def init_storage(path) -> Database:
    """Open the store at path, seeding every absent collection with its defaults"""
    storage = LocalStorage(path)
    database = Database(storage)

    for table in COLLECTIONS:
        if storage.get_item(table) is None:
            database.replace(table, DEFAULTS[table]())
            logging.info(f"Seeded '{table}' with default data")

    return database

def get_db(request: Request) -> Database:
    """FastAPI dependency returning the store opened at startup"""
    return request.app.state.db
