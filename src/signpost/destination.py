"""Destination identity for navigable screens.

Destinations are immutable values. Each variant is a frozen dataclass
subclass of ``Destination``, so equality and hashing come from the variant
class and its field values:

    @dataclass(frozen=True)
    class Profile(Destination):
        user_id: str

    @dataclass(frozen=True)
    class Settings(Destination):
        pass

    Profile("123") == Profile("123")   # True
    Profile("123").id                  # "Profile(user_id='123')"
    Settings().id                      # "Settings"
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.widget import Widget


class Destination:
    """Base class for a navigable target.

    Variants must be declared with ``@dataclass(frozen=True)``; anything else
    is rejected on instantiation, since it would compare by object identity
    or be unhashable.
    """

    def __new__(cls, *args, **kwargs):
        if cls is Destination:
            raise TypeError("Destination is abstract; define a dataclass variant")
        params = getattr(cls, "__dataclass_params__", None)
        if not is_dataclass(cls) or params is None or not (params.frozen and params.eq):
            raise TypeError(f"{cls.__name__} must be declared with @dataclass(frozen=True)")
        return super().__new__(cls)

    @property
    def id(self) -> str:
        """Stable key derived from the variant name and its payload."""
        name = type(self).__name__
        parts = [f"{f.name}={getattr(self, f.name)!r}" for f in fields(self)]
        if not parts:
            return name
        return f"{name}({', '.join(parts)})"

    @property
    def title(self) -> str:
        """Display name shown by the rendering layer."""
        return type(self).__name__

    def view(self) -> Widget:
        """Build the renderable content for this destination."""
        from textual.widgets import Static

        return Static(self.title, classes="destination-view")
