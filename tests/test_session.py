import pytest

from mindcare.assessment import session as assessment
from mindcare.assessment.answers import compose_answer, parse_answer, parse_rating
from mindcare.assessment.errors import AtStart, EmptyAnswer, InvalidState, UnknownTopic


def test_start_unknown_topic():
    with pytest.raises(UnknownTopic):
        assessment.start("nope")


def test_start_is_at_first_question():
    s = assessment.start("depression")
    assert s.position == 0
    assert s.answers == {}
    assert s.total == 10
    assert s.current_question.id == "1"


def test_submit_advances_by_one():
    s = assessment.start("depression")
    for i in range(s.total - 1):
        size = len(s.answers)
        done = assessment.submit_answer(s, f"answer {i}")
        assert not done
        assert s.position == i + 1
        assert len(s.answers) == size + 1
    assert assessment.submit_answer(s, "last") is True
    assert s.is_complete
    assert s.current_question is None


def test_empty_answer_rejected_and_state_unchanged():
    s = assessment.start("depression")
    with pytest.raises(EmptyAnswer):
        assessment.submit_answer(s, "   ")
    assert s.position == 0
    assert s.answers == {}


def test_answers_are_trimmed():
    s = assessment.start("depression")
    assessment.submit_answer(s, "  tired all the time \n")
    assert s.answers["1"] == "tired all the time"


def test_previous_at_start():
    s = assessment.start("insomnia")
    with pytest.raises(AtStart):
        assessment.go_to_previous(s)
    assert s.position == 0


def test_previous_returns_stored_answer():
    s = assessment.start("insomnia")
    assessment.submit_answer(s, "I lie awake")
    assessment.submit_answer(s, "groggy")
    assert assessment.go_to_previous(s) == "groggy"
    assert s.position == 1
    assert assessment.go_to_previous(s) == "I lie awake"
    assert s.position == 0
    # going back never removes answers
    assert len(s.answers) == 2


def test_resubmit_overwrites_only_that_answer():
    s = assessment.start("trauma")
    for value in ("a", "b", "c"):
        assessment.submit_answer(s, value)
    assessment.go_to_previous(s)
    assessment.go_to_previous(s)
    assessment.submit_answer(s, "B2")
    assert s.answers == {"1": "a", "2": "B2", "3": "c"}
    assert s.position == 2
    # walking forward again shows the untouched later answer
    assert s.prefill() == "c"


def test_completed_session_is_terminal():
    s = assessment.start("adjustment")
    while not s.is_complete:
        assessment.submit_answer(s, "5")
    with pytest.raises(InvalidState):
        assessment.submit_answer(s, "more")
    with pytest.raises(InvalidState):
        assessment.go_to_previous(s)


def test_question_list_is_a_snapshot():
    s = assessment.start("stress")
    assert isinstance(s.questions, tuple)
    assert s.total == 10


def test_answer_encoding():
    assert compose_answer("closed", "Yes", "mostly at work") == "Yes - mostly at work"
    assert compose_answer("closed", "No", "  ") == "No"
    assert compose_answer("scaling", 7, "worse at night") == "7 - worse at night"
    assert compose_answer("open", "free text - with a dash", "ignored") == "free text - with a dash"

    a = parse_answer("scaling", "7 - worse at night")
    assert (a.head, a.elaboration, a.rating) == ("7", "worse at night", 7)
    a = parse_answer("open", "free text - with a dash")
    assert a.head == "free text - with a dash"
    assert a.elaboration is None
    assert a.rating is None


@pytest.mark.parametrize("raw,expected", [
    ("7", 7),
    ("10 - awful", 10),
    (" 3, most days", 3),
    ("0", None),
    ("11", None),
    ("7.5", None),
    ("seven", None),
    ("9" * 5000, None),
    ("", None),
    (None, None),
])
def test_parse_rating(raw, expected):
    assert parse_rating(raw) == expected
