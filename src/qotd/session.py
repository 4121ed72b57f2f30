"""The quiz session: one object owning questions, storage and calendar state."""
import logging
from datetime import date
from typing import Callable

from qotd import scheduler
from qotd.calendar_view import CalendarNavigator, render_month
from qotd.config import Settings
from qotd.dates import as_date
from qotd.models import AnswerResult, CalendarGrid, DailyDecision, Question, Stats, StreakState
from qotd.questions import load_questions
from qotd.stats import normalize
from qotd.storage import Storage

logger = logging.getLogger(__name__)


class QuizSession:
    def __init__(
        self,
        questions: list[Question],
        storage: Storage,
        clock: Callable[[], date] = date.today,
        nav_interval: float = 0.0,
    ):
        self.questions = questions
        self.storage = storage
        self._clock = clock
        self.navigator = CalendarNavigator(
            today=self.today,
            render=self._render_calendar,
            min_interval=nav_interval,
        )

    @classmethod
    def start(cls, settings: Settings, clock: Callable[[], date] = date.today) -> "QuizSession":
        """Load questions first, then open storage. Raises LoadError if loading fails."""
        questions = load_questions(settings.questions_path)
        storage = Storage(settings.db_path)
        return cls(questions, storage, clock=clock, nav_interval=settings.nav_interval)

    def today(self) -> date:
        return as_date(self._clock())

    # ---- daily question ----

    def decide(self) -> DailyDecision:
        return scheduler.decide_today(self.today(), self.storage, self.questions)

    def submit(self, question: Question, selected_index: int) -> AnswerResult:
        result = scheduler.submit_answer(self.today(), self.storage, question, selected_index)
        self.refresh_calendar()
        return result

    # ---- readouts ----

    def stats(self) -> Stats:
        """Stats with accuracy recomputed from the counters and written back."""
        stored = self.storage.load_state().stats
        stats = normalize(stored)
        if stats != stored:
            self.storage.set_stats(stats)
        return stats

    def streak(self) -> StreakState:
        return self.storage.load_state().streak

    def answered_dates(self) -> set:
        return self.storage.load_state().answered_dates

    # ---- calendar ----

    def _render_calendar(self, year: int, month: int) -> CalendarGrid:
        return render_month(year, month, self.today(), self.answered_dates())

    def calendar(self) -> CalendarGrid:
        return self.navigator.current()

    def navigate_calendar(self, direction: int) -> CalendarGrid | None:
        return self.navigator.navigate(direction)

    def refresh_calendar(self) -> bool:
        """Snap the calendar back to the current month if it shows another one."""
        if self.navigator.needs_refresh():
            self.navigator.show_current()
            return True
        return False

    def reset(self) -> None:
        self.storage.clear()
