"""The signed-in user, shared explicitly with the views that need it."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class User:
    """The current user as reported by the user controller."""

    login: str
    email: str = ""
    name: str = ""
    score: int = 0
    avatar: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> "User":
        """Build a user from an event value (a ``User``, a mapping, or an object)."""
        if isinstance(value, User):
            return value
        if isinstance(value, Mapping):
            get = value.get
        else:
            def get(key: str, default: Any = None) -> Any:
                return getattr(value, key, default)
        return cls(
            login=str(get("login", "")),
            email=str(get("email", "") or ""),
            name=str(get("name", "") or ""),
            score=int(get("score", 0) or 0),
            avatar=get("avatar") or get("img") or None,
        )


class Session:
    """Holds the current :class:`User`, or ``None`` when signed out."""

    __slots__ = ("user",)

    def __init__(self, user: User | None = None) -> None:
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def login(self) -> str | None:
        return self.user.login if self.user is not None else None

    def sign_in(self, user: User) -> None:
        self.user = user

    def clear(self) -> None:
        self.user = None
