from datetime import date

import pytest

from qotd.models import Question
from qotd.storage import Storage

SAMPLE_CSV = """id,question,choices,correct,explanation,subject,difficulty
1,What is 2 + 2?,"3,4,5,6",1,"Two plus two, as everyone knows, is four.",Math,Easy
2,Capital of France?,"Paris,Lyon,Nice",0,Paris has been the capital for centuries.,Geography,Easy
3,Largest planet?,"Mars,Jupiter",1,Jupiter is the biggest.,Astronomy,Medium
"""


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_qotd.db")
    return db_path


@pytest.fixture
def storage(tmp_db):
    return Storage(tmp_db)


@pytest.fixture
def questions_csv(tmp_path):
    path = tmp_path / "questions.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def sample_questions():
    return [
        Question(id=1, text="Q1", choices=("a", "b", "c", "d"), correct_index=0,
                 explanation="because a", subject="Math", difficulty="Easy"),
        Question(id=2, text="Q2", choices=("a", "b", "c", "d"), correct_index=1,
                 explanation="because b", subject="Math", difficulty="Easy"),
        Question(id=3, text="Q3", choices=("a", "b", "c", "d"), correct_index=2,
                 explanation="because c", subject="Math", difficulty="Hard"),
    ]


@pytest.fixture
def new_year():
    """Monday, January 1, 2024."""
    return date(2024, 1, 1)
