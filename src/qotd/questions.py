"""Question store: CSV parsing and random selection."""
import logging
import random
from pathlib import Path

from qotd.errors import LoadError, NoQuestionsAvailable
from qotd.models import Question

logger = logging.getLogger(__name__)

MIN_FIELDS = 7
MIN_CHOICES = 2
MAX_CHOICES = 4


def split_csv_line(line: str) -> list[str]:
    """Split one CSV row on commas outside double quotes.

    Quote characters only toggle the quoted state; they never end up in a field.
    """
    values = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())
    return values


def parse_question_row(values: list[str]) -> Question | None:
    """Build a Question from split fields, or None if the row is unusable."""
    if len(values) < MIN_FIELDS:
        return None
    try:
        question_id = int(values[0])
        correct_index = int(values[3])
    except ValueError:
        return None
    choices = tuple(choice.strip() for choice in values[2].split(","))
    if not MIN_CHOICES <= len(choices) <= MAX_CHOICES:
        return None
    if not 0 <= correct_index < len(choices):
        return None
    return Question(
        id=question_id,
        text=values[1],
        choices=choices,
        correct_index=correct_index,
        explanation=values[4],
        subject=values[5],
        difficulty=values[6],
    )


def parse_questions(text: str) -> list[Question]:
    """Parse CSV text into questions. The first line is a header."""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    questions = []
    for lineno, line in enumerate(lines[1:], start=2):
        question = parse_question_row(split_csv_line(line))
        if question is None:
            logger.debug("Skipping malformed question row %d: %r", lineno, line)
            continue
        questions.append(question)
    return questions


def load_questions(path: str | Path) -> list[Question]:
    """Read and parse the question file, raising LoadError on any failure."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not read questions from {path}: {exc}") from exc
    questions = parse_questions(text)
    if not questions:
        raise NoQuestionsAvailable(f"No questions found in {path}")
    logger.debug("Loaded %d questions from %s", len(questions), path)
    return questions


def random_unanswered(questions: list[Question], answered: set, rng: random.Random | None = None) -> Question | None:
    """Uniform pick among questions not in ``answered``. None when all are answered."""
    rng = rng or random.Random()
    available = [q for q in questions if q.id not in answered]
    if not available:
        return None
    return rng.choice(available)


def pick_any_random(questions: list[Question], rng: random.Random | None = None) -> Question:
    rng = rng or random.Random()
    if not questions:
        raise NoQuestionsAvailable("Question pool is empty")
    return rng.choice(list(questions))
