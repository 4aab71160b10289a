"""Two-way bindings between a navigation state and a rendering layer."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

# Fields a rendering layer can bind to, in presentation order.
BINDABLE_FIELDS = (
    "path",
    "full_screen_cover",
    "sheet",
    "popover",
    "alert",
    "confirmation_dialog",
)


class StateBinding(Generic[T]):
    """A get/set pair over one field of a navigation state.

    Reads return the current value. Writes are how a rendering layer reports
    a user-driven change, such as a swipe back or a tap outside a sheet, and
    go through the same logic as the explicit navigation calls. Writing
    ``None`` to a slot that is already empty does nothing.
    """

    def __init__(self, name: str, getter: Callable[[], T], setter: Callable[[T], None]) -> None:
        self.name = name
        self._getter = getter
        self._setter = setter

    def get(self) -> T:
        return self._getter()

    def set(self, value: T) -> None:
        self._setter(value)

    @property
    def is_presented(self) -> bool:
        """Whether the bound field currently holds something to show."""
        value = self.get()
        if self.name == "path":
            return len(value) > 0
        return value is not None

    def dismiss(self) -> None:
        """Report a dismissal of the bound element."""
        if self.name == "path":
            value = self.get()
            if len(value) > 0:
                self.set(list(value)[:-1])
        else:
            self.set(None)

    def __repr__(self) -> str:
        return f"StateBinding({self.name!r}, {self.get()!r})"
