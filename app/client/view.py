"""
State of the schedule page: loading/error banners, week tabs and the
fade-out / swap / fade-in transition of the course list.

The transition is an explicit state machine driven by a Timer:

    idle -> fading_out -> (150ms) -> content_swapped -> fading_in -> (150ms) -> idle

Nothing cancels a pending swap, so rapid toggles simply apply in order and
the last one wins.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from app.client.api import fetch_courses_from_api
from app.client.render import PAGE_TITLES, render_schedule
from app.client.store import CourseStore
from app.client.timer import ImmediateTimer, Timer
from app.client.weeks import filter_by_week, week_offset
from app.config import settings

logger = logging.getLogger("app.client")

FADE_MS = 150
LOADING_TEXT = "正在加载课程…"
GENERIC_LOAD_ERROR = "加载课程数据失败，请稍后重试或联系管理员"


class TransitionPhase(str, Enum):
    IDLE = "idle"
    FADING_OUT = "fading_out"
    CONTENT_SWAPPED = "content_swapped"
    FADING_IN = "fading_in"


@dataclass
class TabState:
    active: bool = False
    count: int = 0


class ScheduleView:
    def __init__(
        self,
        api_url: Optional[str] = None,
        store: Optional[CourseStore] = None,
        fetcher: Callable[[str], List] = fetch_courses_from_api,
        timer: Optional[Timer] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.api_url = api_url or settings.SCHEDULE_API_URL
        self.store = store or CourseStore()
        self._fetcher = fetcher
        self._timer = timer or ImmediateTimer()
        self._today = today or date.today

        self.loading = False
        self.loading_text = LOADING_TEXT
        self.error: Optional[str] = None

        self.active_week = "current"
        self.tabs: Dict[str, TabState] = {"current": TabState(active=True), "next": TabState()}
        self.page_title = PAGE_TITLES["current"]
        self.content_html = ""

        self.phase = TransitionPhase.IDLE
        self.transitions: List[TransitionPhase] = []

    # ---- data ----

    def load(self) -> bool:
        """Fetch the full list once and re-render the selected week. Returns False when loading failed."""
        self.error = None
        self.loading = True
        try:
            items = self._fetcher(self.api_url)
            self.store.replace_all(items)
            self.update_week_counts()
            # 重新載入時保留目前選取的週別，tab 與內容一致
            self.render_week(self.active_week)
            return True
        except Exception as exc:
            logger.exception("[Client] loading courses failed")
            self.error = str(exc) or GENERIC_LOAD_ERROR
            # 失敗時不保留舊資料
            self.store.replace_all(())
            self.update_week_counts()
            self.content_html = ""
            return False
        finally:
            self.loading = False

    def filtered(self, week: str) -> List:
        return filter_by_week(self.store.all(), week_offset(week), self._today())

    def update_week_counts(self) -> None:
        for week, tab in self.tabs.items():
            tab.count = len(self.filtered(week))
        logger.info("[Client] tab counts current=%d next=%d", self.tabs["current"].count, self.tabs["next"].count)

    # ---- interaction ----

    def select_week(self, week: str) -> bool:
        """Tab click. Clicking the tab that is already active does nothing."""
        week = "next" if week == "next" else "current"
        if week == self.active_week:
            return False
        for name, tab in self.tabs.items():
            tab.active = name == week
        self.active_week = week
        self.render_week(week)
        return True

    def render_week(self, week: str) -> None:
        filtered = self.filtered(week)
        logger.info(
            "[Client] switch week=%s offset=%d total=%d filtered=%d",
            week, week_offset(week), len(self.store), len(filtered),
        )
        self._enter(TransitionPhase.FADING_OUT)
        self._timer.schedule(FADE_MS, lambda: self._swap(week, filtered))

    @property
    def is_fading(self) -> bool:
        return self.phase == TransitionPhase.FADING_OUT

    # ---- transition steps ----

    def _enter(self, phase: TransitionPhase) -> None:
        self.phase = phase
        self.transitions.append(phase)

    def _swap(self, week: str, filtered: List) -> None:
        self.content_html = render_schedule(filtered)
        self.page_title = PAGE_TITLES[week]
        self.update_week_counts()
        self._enter(TransitionPhase.CONTENT_SWAPPED)
        self._enter(TransitionPhase.FADING_IN)
        self._timer.schedule(FADE_MS, self._settle)

    def _settle(self) -> None:
        self._enter(TransitionPhase.IDLE)
