"""
Static question bank.

Loaded once at startup from a JSON array and never mutated afterwards, so it
can be shared between request threads without locking.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

from app.config import QUESTIONS_PATH

logger = logging.getLogger(__name__)

# Correct index for questions whose answer cannot be determined from the text
NO_ANSWER = -1


class QuestionBankError(ValueError):
    pass


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: Tuple[str, ...]
    answer: int


def public_view(question: Question) -> Dict:
    """Client-facing shape of a question. Never includes the answer."""
    return {
        "id": question.id,
        "question": question.question,
        "options": list(question.options),
    }


def _parse_question(raw: Dict, position: int) -> Question:
    try:
        qid = raw["id"]
        text = raw["question"]
        options = raw["options"]
        answer = raw["answer"]
    except (KeyError, TypeError) as exc:
        raise QuestionBankError(f"entry #{position}: missing field {exc}") from exc

    if not isinstance(qid, int) or isinstance(qid, bool) or qid <= 0:
        raise QuestionBankError(f"entry #{position}: id must be a positive integer")
    if not isinstance(text, str):
        raise QuestionBankError(f"question {qid}: prompt must be a string")
    if not isinstance(options, list) or len(options) < 2:
        raise QuestionBankError(f"question {qid}: needs at least two options")
    if not all(isinstance(opt, str) for opt in options):
        raise QuestionBankError(f"question {qid}: options must be strings")
    if not isinstance(answer, int) or isinstance(answer, bool):
        raise QuestionBankError(f"question {qid}: answer must be an integer")
    if answer != NO_ANSWER and not 0 <= answer < len(options):
        raise QuestionBankError(
            f"question {qid}: answer {answer} out of range for {len(options)} options"
        )

    return Question(id=qid, question=text, options=tuple(options), answer=answer)


def build_bank(entries: Iterable[Dict]) -> Tuple[Question, ...]:
    questions = []
    seen = set()

    for position, raw in enumerate(entries):
        q = _parse_question(raw, position)
        if q.id in seen:
            raise QuestionBankError(f"duplicate question id {q.id}")
        seen.add(q.id)
        questions.append(q)

    return tuple(questions)


def load_questions(path: Union[str, Path] = QUESTIONS_PATH) -> Tuple[Question, ...]:
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            entries = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise QuestionBankError(f"cannot read question bank {path}: {exc}") from exc

    if not isinstance(entries, list):
        raise QuestionBankError(f"{path}: expected a JSON array of questions")

    bank = build_bank(entries)
    logger.info("Loaded %d questions from %s", len(bank), path)
    return bank
