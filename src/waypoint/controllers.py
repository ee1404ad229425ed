"""Controller contracts.

Controllers own the business logic and the transport. Views call the
operations below and never look at return values: every outcome arrives
later as an event on the bus (see ``waypoint.events`` for the names).
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UserController(Protocol):
    def get_user(self) -> Any:
        """Load the current user; publishes ``UserLoaded`` (user or ``None``)."""
        ...


@runtime_checkable
class AuthController(Protocol):
    def login(self, login: str, password: str) -> Any:
        """Publishes ``LoggedIn`` with ``"success"`` or a field error."""
        ...

    def sign_up(self, login: str, email: str, password: str, repeat_password: str) -> Any:
        """Publishes ``SignedUp`` with ``"success"`` or a field error."""
        ...

    def logout(self) -> Any:
        """Publishes ``LoggedOut`` with ``"success"``."""
        ...


@runtime_checkable
class ProfileController(Protocol):
    def update_profile(self, login: str, password: str, repeat_password: str) -> Any:
        """Publishes ``ProfileUpdated`` with ``"success"`` or a field error."""
        ...

    def upload_avatar(self, file_input: Any) -> Any:
        """Publishes ``AvatarUpdated`` with ``"success"`` or a field error."""
        ...


@runtime_checkable
class LeaderboardController(Protocol):
    def get_leaderboard(self, page: int) -> Any:
        """Publishes ``LeaderboardLoaded`` with ``{users, pageCount, currentPage}``."""
        ...


@dataclass(frozen=True, slots=True)
class Controllers:
    """The controller used for each concern. One object may fill several slots."""

    user: UserController
    auth: AuthController
    profile: ProfileController
    leaderboard: LeaderboardController

    @classmethod
    def single(cls, controller: Any) -> "Controllers":
        """Use one object implementing every operation."""
        return cls(user=controller, auth=controller, profile=controller, leaderboard=controller)
