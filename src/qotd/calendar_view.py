"""Month grid of answered days, plus serialized month navigation."""
import calendar
import logging
import time
from datetime import date
from typing import Callable, Optional

from qotd.dates import date_key, month_label
from qotd.models import CalendarGrid, CalendarViewState, DayCell

logger = logging.getLogger(__name__)

WEEKDAY_HEADER = ["S", "M", "T", "W", "T", "F", "S"]


def leading_blanks(year: int, month: int) -> int:
    """Empty cells before the 1st in a Sunday-first week."""
    return (date(year, month, 1).weekday() + 1) % 7


def render_month(year: int, month: int, today: date, answered_dates: set) -> CalendarGrid:
    cells = [DayCell(is_empty=True) for _ in range(leading_blanks(year, month))]
    days_in_month = calendar.monthrange(year, month)[1]
    for day in range(1, days_in_month + 1):
        current = date(year, month, day)
        cells.append(DayCell(
            day=day,
            is_today=current == today,
            is_answered=date_key(current) in answered_dates,
        ))
    return CalendarGrid(year=year, month=month, label=month_label(year, month), cells=cells)


def navigate(year: int, month: int, direction: int) -> tuple[int, int]:
    """Move ``direction`` (-1 or +1) months, rolling the year over."""
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or 1, got {direction}")
    index = year * 12 + (month - 1) + direction
    return index // 12, index % 12 + 1


class CalendarNavigator:
    """Tracks the displayed month and serializes navigation.

    ``render`` is called with (year, month) and returns a CalendarGrid. The
    lock is held for the duration of one render and released as soon as it
    returns.
    """

    def __init__(
        self,
        today: Callable[[], date],
        render: Callable[[int, int], CalendarGrid],
        min_interval: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._today = today
        self._render = render
        self.min_interval = min_interval
        self._clock = clock
        self._last_navigation: Optional[float] = None
        now = today()
        self.state = CalendarViewState(displayed_year=now.year, displayed_month=now.month)

    @property
    def locked(self) -> bool:
        return self.state.navigating

    def current(self) -> CalendarGrid:
        return self._render(self.state.displayed_year, self.state.displayed_month)

    def needs_refresh(self) -> bool:
        now = self._today()
        return (self.state.displayed_year, self.state.displayed_month) != (now.year, now.month)

    def show_current(self) -> CalendarGrid:
        now = self._today()
        self.state.displayed_year, self.state.displayed_month = now.year, now.month
        return self.current()

    def navigate(self, direction: int) -> Optional[CalendarGrid]:
        """Show the previous (-1) or next (+1) month.

        Returns None without moving when a navigation is already rendering
        or the minimum interval has not elapsed.
        """
        if self.state.navigating:
            logger.debug("Calendar navigation already in progress, ignoring")
            return None
        started = self._clock()
        if (self.min_interval and self._last_navigation is not None
                and started - self._last_navigation < self.min_interval):
            logger.debug("Calendar navigation too soon after the last one, ignoring")
            return None

        year, month = navigate(self.state.displayed_year, self.state.displayed_month, direction)
        self.state.navigating = True
        try:
            self.state.displayed_year, self.state.displayed_month = year, month
            logger.debug("Calendar moved to %s", month_label(year, month))
            return self._render(year, month)
        except Exception:
            logger.exception("Rendering %s failed; showing the current month", month_label(year, month))
            return self.show_current()
        finally:
            self.state.navigating = False
            self._last_navigation = started
