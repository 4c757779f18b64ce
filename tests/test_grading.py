from app.question_bank import Question
from app.test_engine.grading import grade


def test_single_question_scenario():
    qs = (Question(id=1, question="q", options=("a", "b"), answer=0),)

    result = grade(qs, [(1, 0)])

    assert result.score == 1
    assert result.total == 1
    assert len(result.results) == 1
    item = result.results[0]
    assert (item.question_id, item.correct_choice, item.user_choice) == (1, 0, 0)


def test_unknown_question_ids_are_skipped(questions):
    result = grade(questions, [(999, 0), (1, 1), (2, 1)])

    assert result.score == 1
    assert [item.question_id for item in result.results] == [1, 2]


def test_total_counts_full_set_not_answers(questions):
    result = grade(questions, [(2, 0)])

    assert result.score == 1
    assert result.total == 3


def test_wrong_answers_still_reviewed(questions):
    result = grade(questions, [(1, 0)])

    assert result.score == 0
    assert result.results[0].correct_choice == 1
    assert result.results[0].user_choice == 0


def test_review_follows_submission_order(questions):
    result = grade(questions, [(3, 0), (1, 1), (2, 0)])

    assert [item.question_id for item in result.results] == [3, 1, 2]


def test_no_answer_question_is_reviewed_but_unscorable(questions):
    result = grade(questions, [(3, 0)])

    assert result.score == 0
    assert len(result.results) == 1
    assert result.results[0].correct_choice == -1


def test_grading_is_repeatable(questions):
    answers = [(1, 1), (2, 1), (42, 0)]

    assert grade(questions, answers) == grade(questions, answers)


def test_repeated_answers_graded_once(questions):
    result = grade(questions[:1], [(1, 1)] * 5)

    assert result.score == 1
    assert result.total == 1
    assert len(result.results) == 1


def test_only_first_answer_to_a_question_counts(questions):
    result = grade(questions, [(1, 0), (1, 1)])

    assert result.score == 0
    assert result.results[0].user_choice == 0
