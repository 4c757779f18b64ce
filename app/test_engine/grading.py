from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from app.question_bank import Question


@dataclass(frozen=True)
class ReviewItem:
    question_id: int
    question: str
    options: Tuple[str, ...]
    correct_choice: int
    user_choice: int


@dataclass(frozen=True)
class GradeResult:
    score: int
    total: int
    results: List[ReviewItem] = field(default_factory=list)


def grade(
    questions: Sequence[Question],
    answers: Iterable[Tuple[int, int]],
) -> GradeResult:
    """
    Score (question_id, choice) pairs against a stored question set.

    Answers for ids outside the set are ignored, and only the first answer
    to a question is graded, so score never exceeds total. Review items
    follow the order of the submitted answers, and total is always the size
    of the full set, so skipped questions count against the score.
    """
    by_id: Dict[int, Question] = {q.id: q for q in questions}

    score = 0
    review = []
    graded = set()

    for question_id, choice in answers:
        q = by_id.get(question_id)
        if q is None or q.id in graded:
            continue
        graded.add(q.id)

        if choice == q.answer:
            score += 1

        review.append(
            ReviewItem(
                question_id=q.id,
                question=q.question,
                options=q.options,
                correct_choice=q.answer,
                user_choice=choice,
            )
        )

    return GradeResult(score=score, total=len(questions), results=review)
