import threading

import pytest

from app.client.api import ScheduleClientError
from app.client.render import render_page
from app.client.store import CourseStore
from app.client.timer import ThreadingTimer
from app.client.view import GENERIC_LOAD_ERROR, ScheduleView, TransitionPhase
from app.schemas.schedule import ScheduleItem

from conftest import WEDNESDAY


class ManualTimer:
    """Collects scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.pending = []

    def schedule(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    def fire(self):
        _, callback = self.pending.pop(0)
        callback()

    def run_all(self):
        while self.pending:
            self.fire()


COURSES = [
    ScheduleItem(name="本周钢琴", date_start="2025-10-21T09:00:00", date_end="2025-10-21T10:00:00", status="计划中"),
    ScheduleItem(name="本周乐理", date_start="2025-10-24"),
    ScheduleItem(name="下周钢琴", date_start="2025-10-28T09:00:00"),
    ScheduleItem(name="坏数据", date_start="???"),
]


def make_view(fetcher=None, timer=None):
    return ScheduleView(
        api_url="http://proxy.test",
        fetcher=fetcher or (lambda url: list(COURSES)),
        timer=timer,
        today=lambda: WEDNESDAY,
    )


def test_store_replace_all_is_wholesale():
    store = CourseStore(COURSES[:1])
    store.replace_all(COURSES[1:3])
    assert store.all() == tuple(COURSES[1:3])
    assert len(store) == 2


def test_load_success_renders_current_week():
    view = make_view()

    assert view.load() is True

    assert view.loading is False
    assert view.error is None
    assert len(view.store) == 4
    assert view.tabs["current"].count == 2
    assert view.tabs["next"].count == 1
    assert view.content_html.count('class="class-card"') == 2
    assert "本周钢琴" in view.content_html and "下周钢琴" not in view.content_html
    assert view.page_title == "本周课表"
    assert view.phase == TransitionPhase.IDLE


def test_load_passes_api_url_to_fetcher():
    seen = []
    view = make_view(fetcher=lambda url: seen.append(url) or [])
    view.load()
    assert seen == ["http://proxy.test"]


def test_loading_flag_set_during_fetch_and_cleared_after():
    states = []

    def fetcher(url):
        states.append(view.loading)
        return []

    view = make_view(fetcher=fetcher)
    view.load()
    assert states == [True]
    assert view.loading is False


def test_load_failure_shows_error_and_clears_loading():
    def fetcher(url):
        raise ScheduleClientError("代理接口错误(502): upstream down")

    view = make_view(fetcher=fetcher)

    assert view.load() is False
    assert view.error == "代理接口错误(502): upstream down"
    assert view.loading is False
    assert len(view.store) == 0


def test_load_failure_without_message_uses_generic_text():
    def fetcher(url):
        raise RuntimeError()

    view = make_view(fetcher=fetcher)
    view.load()
    assert view.error == GENERIC_LOAD_ERROR


def test_failed_reload_does_not_keep_stale_courses():
    calls = []

    def fetcher(url):
        calls.append(url)
        if len(calls) > 1:
            raise ScheduleClientError("boom")
        return list(COURSES)

    view = make_view(fetcher=fetcher)
    view.load()
    view.load()
    assert len(view.store) == 0
    assert view.tabs["current"].count == 0
    assert view.content_html == ""


def test_empty_list_renders_placeholder_only():
    view = make_view(fetcher=lambda url: [])
    view.load()
    assert view.content_html == '<div class="empty">本周暂无课程</div>'


def test_transition_phases_with_immediate_timer():
    view = make_view()
    view.load()
    assert view.transitions == [
        TransitionPhase.FADING_OUT,
        TransitionPhase.CONTENT_SWAPPED,
        TransitionPhase.FADING_IN,
        TransitionPhase.IDLE,
    ]


def test_select_week_fades_then_swaps():
    timer = ManualTimer()
    view = make_view(timer=timer)
    view.load()
    timer.run_all()
    before = view.content_html

    assert view.select_week("next") is True

    assert view.tabs["next"].active and not view.tabs["current"].active
    assert view.phase == TransitionPhase.FADING_OUT
    assert view.is_fading
    assert view.content_html == before
    assert timer.pending[0][0] == 150

    timer.fire()
    assert view.phase == TransitionPhase.FADING_IN
    assert "下周钢琴" in view.content_html
    assert "本周钢琴" not in view.content_html
    assert view.page_title == "下周课表"

    timer.fire()
    assert view.phase == TransitionPhase.IDLE
    assert not timer.pending


def test_select_active_week_is_ignored():
    timer = ManualTimer()
    view = make_view(timer=timer)
    view.load()
    timer.run_all()

    assert view.select_week("current") is False
    assert not timer.pending


def test_rapid_toggles_last_swap_wins():
    timer = ManualTimer()
    view = make_view(timer=timer)
    view.load()
    timer.run_all()

    view.select_week("next")
    view.select_week("current")
    timer.run_all()

    assert view.active_week == "current"
    assert "本周钢琴" in view.content_html
    assert view.page_title == "本周课表"


def test_reload_keeps_selected_week_and_tabs_in_sync():
    view = make_view()
    view.load()
    view.select_week("next")

    assert view.load() is True

    assert view.active_week == "next"
    assert view.page_title == "下周课表"
    assert view.tabs["next"].active and not view.tabs["current"].active
    assert "下周钢琴" in view.content_html and "本周钢琴" not in view.content_html
    html = render_page(view)
    assert 'data-week="next" aria-selected="true"' in html
    assert 'data-week="current" aria-selected="false"' in html
    # the next tab is still the active one, so clicking it again is a no-op
    assert view.select_week("next") is False


def test_tab_counts_recomputed_from_full_store_on_switch():
    timer = ManualTimer()
    view = make_view(timer=timer)
    view.load()
    timer.run_all()
    view.store.replace_all(COURSES[2:3])

    view.select_week("next")
    timer.run_all()

    assert view.tabs["current"].count == 0
    assert view.tabs["next"].count == 1


def test_render_page_tabs_and_banners():
    view = make_view()
    view.load()
    html = render_page(view)

    assert 'class="page-title">本周课表<' in html
    assert 'aria-label="本周（2节课）"' in html
    assert 'aria-label="下周（1节课）"' in html
    assert 'data-week="current" aria-selected="true"' in html
    assert 'data-week="next" aria-selected="false"' in html
    assert '<div id="loading" style="display:none">' in html
    assert '<div id="error" style="display:none">' in html


def test_render_page_hides_zero_counts_and_shows_error():
    def fetcher(url):
        raise ScheduleClientError("接口返回失败")

    view = make_view(fetcher=fetcher)
    view.load()
    html = render_page(view)

    assert '<span class="tab-count" style="display:none">0</span>' in html
    assert '<div id="error" style="display:block">接口返回失败</div>' in html


@pytest.mark.parametrize("week", ["next", "bogus"])
def test_select_week_normalizes_unknown_names(week):
    view = make_view()
    view.load()
    view.select_week(week)
    assert view.active_week == ("next" if week == "next" else "current")


def test_threading_timer_fires_callback():
    fired = threading.Event()
    ThreadingTimer().schedule(1, fired.set)
    assert fired.wait(2)
