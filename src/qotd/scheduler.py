"""Daily question scheduling: the one-question-per-day gate and cycle resets."""
import logging
import random
from datetime import date

from qotd.dates import date_key
from qotd.errors import AlreadyAnsweredToday, NoQuestionsAvailable
from qotd.models import AWAITING_ANSWER, COMPLETED, AnswerResult, DailyDecision, Question
from qotd.questions import pick_any_random, random_unanswered
from qotd.stats import normalize, record_answer
from qotd.storage import Storage
from qotd.streak import update_streak

logger = logging.getLogger(__name__)


def daily_rng(today: date) -> random.Random:
    """A generator seeded by the day, so repeated decisions on one day agree."""
    return random.Random(date_key(today))


def is_completed(today: date, storage: Storage) -> bool:
    return storage.get_last_question_date() == date_key(today)


def reset_cycle(today: date, storage: Storage) -> bool:
    """Clear the answered-question set, at most once per day.

    Returns True if the set was cleared by this call.
    """
    today_key = date_key(today)
    if storage.get_last_reset_date() == today_key:
        return False
    storage.set_answered_question_ids(set())
    storage.set_last_reset_date(today_key)
    logger.info("All questions answered; starting a new cycle on %s", today_key)
    return True


def decide_today(today: date, storage: Storage, questions: list[Question]) -> DailyDecision:
    """Decide whether today still needs a question and, if so, which one."""
    if not questions:
        raise NoQuestionsAvailable("Question pool is empty")
    if is_completed(today, storage):
        return DailyDecision(state=COMPLETED)

    answered = storage.load_state().answered_question_ids
    rng = daily_rng(today)
    question = random_unanswered(questions, answered, rng)
    if question is None:
        reset_cycle(today, storage)
        question = pick_any_random(questions, rng)
    return DailyDecision(state=AWAITING_ANSWER, question=question)


def submit_answer(today: date, storage: Storage, question: Question, selected_index: int) -> AnswerResult:
    """Record an answer: update the sets, stats and streak, and close today's gate."""
    if not 0 <= selected_index < len(question.choices):
        raise ValueError(f"Choice {selected_index} out of range for question {question.id}")
    if is_completed(today, storage):
        raise AlreadyAnsweredToday(f"Already answered a question on {date_key(today)}")

    today_key = date_key(today)
    state = storage.load_state()
    correct = question.is_correct(selected_index)

    stats = record_answer(normalize(state.stats), correct)
    streak = update_streak(today, state.streak)

    # One transaction; the gate goes in with everything else or not at all.
    with storage.batch():
        storage.add_answered_date(today_key)
        storage.set_answered_question_ids(state.answered_question_ids | {question.id})
        storage.set_stats(stats)
        storage.set_streak(streak)
        storage.set_last_question_date(today_key)

    logger.info(
        "Question %d answered on %s (%s)", question.id, today_key,
        "correct" if correct else "incorrect",
    )
    return AnswerResult(
        question=question,
        selected_index=selected_index,
        correct=correct,
        stats=stats,
        streak=streak,
    )
