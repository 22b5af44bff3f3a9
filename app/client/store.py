from typing import Iterable, Tuple

from app.schemas.schedule import ScheduleItem


class CourseStore:
    """
    In-memory copy of the full course list fetched from the proxy.

    Filled once per load and only ever replaced wholesale; week views are
    derived from it on demand and never written back.
    """

    def __init__(self, items: Iterable[ScheduleItem] = ()):
        self._items: Tuple[ScheduleItem, ...] = tuple(items)

    def replace_all(self, items: Iterable[ScheduleItem]) -> None:
        self._items = tuple(items)

    def all(self) -> Tuple[ScheduleItem, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)
