"""Running answer counts and derived accuracy."""
from qotd.models import Stats


def compute_accuracy(questions_answered: int, correct_answers: int) -> int:
    """Percentage correct, rounded half up. 0 when nothing has been answered."""
    if questions_answered <= 0:
        return 0
    # floor(correct / answered * 100 + 0.5) in integer arithmetic
    return (200 * correct_answers + questions_answered) // (2 * questions_answered)


def normalize(stats: Stats) -> Stats:
    """Recompute accuracy from the counters, clamping negatives to zero."""
    answered = max(0, stats.questions_answered)
    correct = min(max(0, stats.correct_answers), answered)
    return Stats(
        questions_answered=answered,
        correct_answers=correct,
        accuracy=compute_accuracy(answered, correct),
    )


def record_answer(stats: Stats, correct: bool) -> Stats:
    answered = stats.questions_answered + 1
    correct_count = stats.correct_answers + (1 if correct else 0)
    return Stats(
        questions_answered=answered,
        correct_answers=correct_count,
        accuracy=compute_accuracy(answered, correct_count),
    )
