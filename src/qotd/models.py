"""Data classes for the question-of-the-day domain model."""
from dataclasses import dataclass, field
from typing import Optional

AWAITING_ANSWER = "awaiting_answer"
COMPLETED = "completed"


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    choices: tuple
    correct_index: int
    explanation: str = ""
    subject: str = ""
    difficulty: str = ""

    @property
    def correct_choice(self) -> str:
        return self.choices[self.correct_index]

    def is_correct(self, selected_index: int) -> bool:
        return selected_index == self.correct_index


@dataclass
class Stats:
    questions_answered: int = 0
    correct_answers: int = 0
    accuracy: int = 0

    def to_dict(self) -> dict:
        # camelCase keys in the stored JSON
        return {
            "questionsAnswered": self.questions_answered,
            "correctAnswers": self.correct_answers,
            "accuracy": self.accuracy,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Stats":
        return cls(
            questions_answered=int(data.get("questionsAnswered", 0)),
            correct_answers=int(data.get("correctAnswers", 0)),
            accuracy=int(data.get("accuracy", 0)),
        )


@dataclass
class StreakState:
    current_streak: int = 0
    last_streak_date: Optional[str] = None


@dataclass
class PersistedState:
    """Everything the storage layer holds, restored in one go."""
    stats: Stats = field(default_factory=Stats)
    answered_question_ids: set = field(default_factory=set)
    answered_dates: set = field(default_factory=set)
    last_question_date: Optional[str] = None
    last_reset_date: Optional[str] = None
    streak: StreakState = field(default_factory=StreakState)


@dataclass
class DailyDecision:
    state: str
    question: Optional[Question] = None

    @property
    def completed(self) -> bool:
        return self.state == COMPLETED


@dataclass
class AnswerResult:
    question: Question
    selected_index: int
    correct: bool
    stats: Stats
    streak: StreakState

    @property
    def correct_choice(self) -> str:
        return self.question.correct_choice


@dataclass(frozen=True)
class DayCell:
    day: Optional[int] = None
    is_today: bool = False
    is_answered: bool = False
    is_empty: bool = False


@dataclass
class CalendarGrid:
    year: int
    month: int
    label: str
    cells: list = field(default_factory=list)

    def weeks(self) -> list:
        """Cells chunked into rows of seven, the last row padded with empties."""
        cells = list(self.cells)
        while len(cells) % 7:
            cells.append(DayCell(is_empty=True))
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]

    def cell_for(self, day: int) -> Optional[DayCell]:
        for cell in self.cells:
            if cell.day == day:
                return cell
        return None


@dataclass
class CalendarViewState:
    displayed_year: int
    displayed_month: int
    navigating: bool = False
