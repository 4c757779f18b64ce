import json

import pytest

from app.question_bank import (
    NO_ANSWER,
    QuestionBankError,
    build_bank,
    load_questions,
    public_view,
)


def entry(**overrides):
    raw = {"id": 1, "question": "q", "options": ["a", "b"], "answer": 0}
    raw.update(overrides)
    return raw


def test_bundled_bank_loads():
    bank = load_questions()

    assert len(bank) == 129
    assert len({q.id for q in bank}) == len(bank)
    assert all(len(q.options) >= 2 for q in bank)


def test_load_from_file(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps([entry(), entry(id=2, answer=NO_ANSWER)]))

    bank = load_questions(path)

    assert [q.id for q in bank] == [1, 2]
    assert bank[0].options == ("a", "b")
    assert bank[1].answer == NO_ANSWER


def test_missing_file(tmp_path):
    with pytest.raises(QuestionBankError):
        load_questions(tmp_path / "missing.json")


def test_not_a_list(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps({"id": 1}))

    with pytest.raises(QuestionBankError):
        load_questions(path)


@pytest.mark.parametrize(
    "bad",
    [
        entry(id=0),
        entry(id="1"),
        entry(options=["only one"]),
        entry(options=["a", 2]),
        entry(answer=2),
        entry(answer=-2),
        {"id": 1, "question": "q", "options": ["a", "b"]},
    ],
)
def test_invalid_entries_rejected(bad):
    with pytest.raises(QuestionBankError):
        build_bank([bad])


def test_duplicate_ids_rejected():
    with pytest.raises(QuestionBankError):
        build_bank([entry(), entry()])


def test_public_view_hides_answer(questions):
    view = public_view(questions[0])

    assert view == {"id": 1, "question": "Which port does RDP use?", "options": ["22", "3389", "80"]}
    assert "answer" not in view
