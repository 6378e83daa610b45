"""
CSV export of the question list.

The file opens with a UTF-8 byte-order mark so spreadsheet tools detect the
encoding, quotes every field and doubles literal quotes.
"""
from typing import List, Sequence
from question_bank.models import Question
from question_bank.models.question import OPTION_COUNT
from question_bank.utils.time_utils import format_date_for_display, utc_iso_date
import csv
import io

BOM = "\ufeff"
TAG_SEPARATOR = "; "

HEADERS = [
    "ID",
    "Professor",
    "Disciplina",
    "Tags",
    "Enunciado",
    "Opção A",
    "Opção B",
    "Opção C",
    "Opção D",
    "Opção E",
    "Resposta Correta",
    "Data de Criação",
]

class EmptyExportError(ValueError):
    """Raised when there are no questions to export"""

def option_letter(index: int) -> str:
    """0 -> 'A' ... 4 -> 'E'"""
    if not 0 <= index < OPTION_COUNT:
        raise ValueError(f"Option index out of range: {index}")
    return chr(ord("A") + index)

def question_row(question: Question) -> List[str]:
    options = list(question.options[:OPTION_COUNT])
    options += [""] * (OPTION_COUNT - len(options))

    return [
        question.id,
        question.author_name,
        question.category,
        TAG_SEPARATOR.join(question.tags),
        question.statement,
        *options,
        option_letter(question.correct_option),
        format_date_for_display(question.created_at),
    ]

def export_csv(questions: Sequence[Question]) -> str:
    """Serialize questions to CSV text (BOM included)"""
    if not questions:
        raise EmptyExportError("Nenhuma questão para exportar")

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    for question in questions:
        writer.writerow(question_row(question))

    # Rows are separated by newlines; the last one has no terminator
    return BOM + buffer.getvalue()[:-1]

def export_filename() -> str:
    return f"questoes_{utc_iso_date()}.csv"
