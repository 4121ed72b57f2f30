# tests/test_session.py
from datetime import date, datetime

import pytest

from qotd import storage as keys
from qotd.config import Settings
from qotd.errors import LoadError
from qotd.models import Stats
from qotd.session import QuizSession
from qotd.storage import Storage


class FakeClock:
    def __init__(self, day):
        self.day = day

    def __call__(self):
        return self.day


def make_session(tmp_db, questions, day):
    return QuizSession(questions, Storage(tmp_db), clock=FakeClock(day))


def test_start_loads_questions(tmp_db, questions_csv):
    settings = Settings(db_path=tmp_db, questions_path=str(questions_csv))
    session = QuizSession.start(settings, clock=FakeClock(date(2024, 1, 1)))
    assert len(session.questions) == 3
    assert session.decide().question in session.questions


def test_start_raises_load_error(tmp_db, tmp_path):
    settings = Settings(db_path=tmp_db, questions_path=str(tmp_path / "missing.csv"))
    with pytest.raises(LoadError):
        QuizSession.start(settings)


def test_today_accepts_datetime_clock(tmp_db, sample_questions):
    session = QuizSession(sample_questions, Storage(tmp_db), clock=lambda: datetime(2024, 1, 1, 23, 59))
    assert session.today() == date(2024, 1, 1)


def test_stats_recomputed_on_load(tmp_db, sample_questions, new_year):
    session = make_session(tmp_db, sample_questions, new_year)
    session.storage.set_stats(Stats(questions_answered=4, correct_answers=3, accuracy=0))
    assert session.stats() == Stats(4, 3, 75)
    assert session.storage.get_stats() == Stats(4, 3, 75)


def test_stats_default_on_corrupt_state(tmp_db, sample_questions, new_year):
    session = make_session(tmp_db, sample_questions, new_year)
    session.storage.set_raw(keys.STATS, "{{{")
    assert session.stats() == Stats()


def test_submit_snaps_calendar_back(tmp_db, sample_questions, new_year):
    session = make_session(tmp_db, sample_questions, new_year)
    session.navigate_calendar(-1)
    assert session.calendar().label == "December 2023"
    question = session.decide().question
    session.submit(question, 0)
    grid = session.calendar()
    assert grid.label == "January 2024"
    assert grid.cell_for(1).is_answered


def test_refresh_calendar_only_when_month_differs(tmp_db, sample_questions, new_year):
    session = make_session(tmp_db, sample_questions, new_year)
    assert session.refresh_calendar() is False
    session.navigate_calendar(1)
    assert session.refresh_calendar() is True
    assert session.calendar().label == "January 2024"


def test_reset_clears_progress(tmp_db, sample_questions, new_year):
    session = make_session(tmp_db, sample_questions, new_year)
    session.submit(session.decide().question, 0)
    assert session.decide().completed
    session.reset()
    assert not session.decide().completed
    assert session.stats() == Stats()
    assert session.answered_dates() == set()
