"""Typed key/value persistence for stats, streak and answered sets."""
import json
import logging
from contextlib import contextmanager

from qotd.db import DEFAULT_DB_PATH, get_connection, init_db
from qotd.errors import CorruptStateError
from qotd.models import PersistedState, Stats, StreakState

logger = logging.getLogger(__name__)

STATS = "stats"
ANSWERED_QUESTION_IDS = "answered_question_ids"
ANSWERED_DATES = "answered_dates"
LAST_QUESTION_DATE = "last_question_date"
LAST_RESET_DATE = "last_reset_date"
CURRENT_STREAK = "current_streak"
LAST_STREAK_DATE = "last_streak_date"


class Storage:
    """Durable storage, one key per entity.

    Getters return a default when the key is absent and raise
    CorruptStateError when a stored value cannot be read back.
    ``load_state`` is the forgiving entry point that never raises.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        self._pending: dict | None = None
        init_db(db_path)

    # ---- raw access ----

    def get_raw(self, key: str) -> str | None:
        if self._pending is not None and key in self._pending:
            return self._pending[key]
        conn = get_connection(self.db_path)
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row["value"] if row else None

    def set_raw(self, key: str, value: str) -> None:
        if self._pending is not None:
            self._pending[key] = value
            return
        self._write({key: value})

    def _write(self, values: dict) -> None:
        conn = get_connection(self.db_path)
        conn.executemany(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            list(values.items()),
        )
        conn.commit()
        conn.close()

    @contextmanager
    def batch(self):
        """Hold writes made inside the block and commit them together on exit.

        Reads inside the block see the held values. If the block raises,
        nothing is written.
        """
        if self._pending is not None:
            yield self
            return
        self._pending = {}
        try:
            yield self
            if self._pending:
                self._write(self._pending)
        finally:
            self._pending = None

    def clear(self) -> None:
        conn = get_connection(self.db_path)
        conn.execute("DELETE FROM kv_store")
        conn.commit()
        conn.close()
        logger.info("Cleared all stored state in %s", self.db_path)

    def _get_json(self, key: str):
        raw = self.get_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStateError(key, raw) from exc

    def _set_json(self, key: str, value) -> None:
        self.set_raw(key, json.dumps(value))

    # ---- stats ----

    def get_stats(self) -> Stats:
        data = self._get_json(STATS)
        if data is None:
            return Stats()
        if not isinstance(data, dict):
            raise CorruptStateError(STATS, self.get_raw(STATS))
        try:
            return Stats.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise CorruptStateError(STATS, self.get_raw(STATS)) from exc

    def set_stats(self, stats: Stats) -> None:
        self._set_json(STATS, stats.to_dict())

    # ---- answered sets ----

    def _get_list(self, key: str) -> list:
        data = self._get_json(key)
        if data is None:
            return []
        if not isinstance(data, list):
            raise CorruptStateError(key, self.get_raw(key))
        return data

    def get_answered_question_ids(self) -> set:
        items = self._get_list(ANSWERED_QUESTION_IDS)
        try:
            return {int(i) for i in items}
        except (TypeError, ValueError) as exc:
            raise CorruptStateError(ANSWERED_QUESTION_IDS, self.get_raw(ANSWERED_QUESTION_IDS)) from exc

    def set_answered_question_ids(self, ids) -> None:
        self._set_json(ANSWERED_QUESTION_IDS, sorted(ids))

    def get_answered_dates(self) -> set:
        items = self._get_list(ANSWERED_DATES)
        if not all(isinstance(i, str) for i in items):
            raise CorruptStateError(ANSWERED_DATES, self.get_raw(ANSWERED_DATES))
        return set(items)

    def add_answered_date(self, day_key: str) -> None:
        """Append a date, keeping the stored order and never duplicating."""
        try:
            items = self._get_list(ANSWERED_DATES)
        except CorruptStateError:
            logger.warning("Answered dates were corrupt; starting a fresh list")
            items = []
        if day_key not in items:
            items.append(day_key)
            self._set_json(ANSWERED_DATES, items)

    # ---- plain date strings ----

    def get_last_question_date(self) -> str | None:
        return self.get_raw(LAST_QUESTION_DATE)

    def set_last_question_date(self, day_key: str) -> None:
        self.set_raw(LAST_QUESTION_DATE, day_key)

    def get_last_reset_date(self) -> str | None:
        return self.get_raw(LAST_RESET_DATE)

    def set_last_reset_date(self, day_key: str) -> None:
        self.set_raw(LAST_RESET_DATE, day_key)

    # ---- streak ----

    def get_streak(self) -> StreakState:
        raw = self.get_raw(CURRENT_STREAK)
        if raw is None:
            current = 0
        else:
            try:
                current = int(raw)
            except ValueError as exc:
                raise CorruptStateError(CURRENT_STREAK, raw) from exc
            if current < 0:
                raise CorruptStateError(CURRENT_STREAK, raw)
        return StreakState(current_streak=current, last_streak_date=self.get_raw(LAST_STREAK_DATE))

    def set_streak(self, streak: StreakState) -> None:
        self.set_raw(CURRENT_STREAK, str(streak.current_streak))
        if streak.last_streak_date is not None:
            self.set_raw(LAST_STREAK_DATE, streak.last_streak_date)

    # ---- forgiving load ----

    def _or_default(self, getter, default):
        try:
            return getter()
        except CorruptStateError as exc:
            logger.warning("%s; falling back to default", exc)
            return default

    def load_state(self) -> PersistedState:
        """Restore everything, substituting the default for any corrupt key."""
        return PersistedState(
            stats=self._or_default(self.get_stats, Stats()),
            answered_question_ids=self._or_default(self.get_answered_question_ids, set()),
            answered_dates=self._or_default(self.get_answered_dates, set()),
            last_question_date=self.get_last_question_date(),
            last_reset_date=self.get_last_reset_date(),
            streak=self._or_default(self.get_streak, StreakState()),
        )
