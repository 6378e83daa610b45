from pydantic import BaseModel
from typing import Iterable, List, Set
from question_bank.models import Question

ALL = "all"

class QuestionFilter(BaseModel):
    """Filter state of the question list: every active dimension must match"""
    text: str = ""
    category: str = ALL
    author: str = ALL
    tags: Set[str] = set()

    @property
    def has_active_filters(self) -> bool:
        return bool(self.text or self.category != ALL or self.author != ALL or self.tags)

    def toggle_tag(self, tag: str) -> "QuestionFilter":
        tags = set(self.tags)
        if tag in tags:
            tags.discard(tag)
        else:
            tags.add(tag)
        return self.model_copy(update={"tags": tags})

    def clear(self) -> "QuestionFilter":
        return QuestionFilter()

    def matches(self, question: Question) -> bool:
        if self.text and self.text.lower() not in question.statement.lower():
            return False

        if self.category != ALL and question.category != self.category:
            return False

        if self.author != ALL and question.author_name != self.author:
            return False

        if self.tags and not self.tags.issubset(question.tags):
            return False

        return True

def filter_questions(questions: Iterable[Question], flt: QuestionFilter) -> List[Question]:
    """Questions satisfying the filter, in their original order"""
    return [question for question in questions if flt.matches(question)]

def author_facets(questions: Iterable[Question]) -> List[str]:
    """Distinct author names across the whole collection, sorted"""
    return sorted({question.author_name for question in questions})

def tag_facets(questions: Iterable[Question]) -> List[str]:
    """Distinct tags across the whole collection, sorted"""
    return sorted({tag for question in questions for tag in question.tags})
