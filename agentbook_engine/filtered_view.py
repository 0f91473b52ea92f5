"""
Live filtered views over entity lists.

A :class:`FilteredView` is a read-only :class:`~collections.abc.Sequence`
that always shows the subsequence of its source list satisfying the installed
predicate, in source order.

Notes
-----
Visibility is computed lazily. Each read compares the source list's version and
the view's predicate generation against the values seen at the last
computation, and re-filters only when one of them moved. Listeners registered
with :meth:`FilteredView.add_listener` run synchronously after any change so
Qt models can reset themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Generic, Iterator, TypeVar, overload

from .address_book import Listener, UniqueEntityList
from .checks import require_non_null
from .predicates import show_all

T = TypeVar("T")


class FilteredView(Sequence, Generic[T]):
    """
    Read-only, auto-updating projection of a :class:`UniqueEntityList`.

    Parameters
    ----------
    source:
        Backing list. The view never mutates it.
    predicate:
        Initial predicate; defaults to showing every entry.
    """

    def __init__(
        self,
        source: UniqueEntityList[T],
        predicate: Callable[[T], bool] = show_all,
    ) -> None:
        require_non_null(source, predicate)
        self._source = source
        self._predicate: Callable[[T], bool] = predicate
        self._generation = 0
        self._seen: tuple[int, int] | None = None
        self._visible: tuple[T, ...] = ()
        self._listeners: list[Listener] = []
        source.add_listener(self._notify)

    @property
    def predicate(self) -> Callable[[T], bool]:
        return self._predicate

    def set_predicate(self, predicate: Callable[[T], bool]) -> None:
        """Install ``predicate``; the next read reflects it."""
        require_non_null(predicate)
        self._predicate = predicate
        self._generation += 1
        self._notify()

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _snapshot(self) -> tuple[T, ...]:
        stamp = (self._source.version, self._generation)
        if stamp != self._seen:
            self._visible = tuple(e for e in self._source.as_tuple() if self._predicate(e))
            self._seen = stamp
        return self._visible

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index):
        return self._snapshot()[index]

    def __len__(self) -> int:
        return len(self._snapshot())

    def __iter__(self) -> Iterator[T]:
        return iter(self._snapshot())

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if isinstance(other, FilteredView):
            return self._snapshot() == other._snapshot()
        if isinstance(other, (list, tuple)):
            return list(self._snapshot()) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FilteredView({list(self._snapshot())!r})"
