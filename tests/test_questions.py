# tests/test_questions.py
import random

import pytest

from qotd.errors import LoadError, NoQuestionsAvailable
from qotd.config import BUNDLED_QUESTIONS
from qotd.questions import (
    load_questions, parse_questions,
    pick_any_random, random_unanswered, split_csv_line,
)


def test_split_csv_line_plain():
    assert split_csv_line("1, a ,b") == ["1", "a", "b"]


def test_split_csv_line_quoted_commas():
    values = split_csv_line('1,"Hello, world","x,y,z",0')
    assert values == ["1", "Hello, world", "x,y,z", "0"]


def test_parse_questions_skips_header(questions_csv):
    questions = parse_questions(questions_csv.read_text())
    assert [q.id for q in questions] == [1, 2, 3]


def test_parse_questions_fields(questions_csv):
    q = parse_questions(questions_csv.read_text())[0]
    assert q.text == "What is 2 + 2?"
    assert q.choices == ("3", "4", "5", "6")
    assert q.correct_index == 1
    assert q.explanation == "Two plus two, as everyone knows, is four."
    assert q.subject == "Math"
    assert q.difficulty == "Easy"


def test_parse_questions_drops_short_rows():
    text = "header\n1,Q,\"a,b\",0,exp,subj,easy\n2,too,short\n"
    questions = parse_questions(text)
    assert [q.id for q in questions] == [1]


def test_parse_questions_drops_non_numeric_ids():
    text = "header\nx,Q,\"a,b\",0,exp,subj,easy\n"
    assert parse_questions(text) == []


def test_load_questions_missing_file(tmp_path):
    with pytest.raises(LoadError):
        load_questions(tmp_path / "nope.csv")


def test_load_questions_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("id,question,choices,correct,explanation,subject,difficulty\n")
    with pytest.raises(NoQuestionsAvailable):
        load_questions(path)


def test_load_bundled_questions():
    questions = load_questions(BUNDLED_QUESTIONS)
    assert len(questions) >= 10
    ids = [q.id for q in questions]
    assert len(ids) == len(set(ids))
    for q in questions:
        assert 2 <= len(q.choices) <= 4
        assert 0 <= q.correct_index < len(q.choices)


def test_random_unanswered_skips_answered(sample_questions):
    for seed in range(20):
        q = random_unanswered(sample_questions, {1, 3}, random.Random(seed))
        assert q.id == 2


def test_random_unanswered_all_answered(sample_questions):
    assert random_unanswered(sample_questions, {1, 2, 3}) is None


def test_pick_any_random(sample_questions):
    q = pick_any_random(sample_questions)
    assert q in sample_questions


def test_pick_any_random_empty():
    with pytest.raises(NoQuestionsAvailable):
        pick_any_random([])


def test_parse_questions_drops_index_past_last_choice():
    text = 'header\n1,Q,"a,b",5,exp,subj,easy\n2,Q,"a,b",1,exp,subj,easy\n'
    assert [q.id for q in parse_questions(text)] == [2]


def test_parse_questions_drops_negative_index():
    text = 'header\n1,Q,"a,b",-1,exp,subj,easy\n'
    assert parse_questions(text) == []


def test_parse_questions_drops_too_many_choices():
    text = 'header\n1,Q,"a,b,c,d,e",4,exp,subj,easy\n'
    assert parse_questions(text) == []


def test_parse_questions_drops_single_choice():
    text = 'header\n1,Q,only,0,exp,subj,easy\n'
    assert parse_questions(text) == []


def test_load_questions_undecodable_file(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b'h\n1,Q\xff\xfe,"a,b",0,e,s,d\n')
    with pytest.raises(LoadError):
        load_questions(path)
