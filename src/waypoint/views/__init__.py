"""Views — one screen per path, created per navigation.

Every view composes a :class:`Lifecycle` that records what it registers
during ``init()`` and undoes it in ``deinit()``.
"""

from waypoint.views.account import LogoutView, ProfileView
from waypoint.views.base import (
    Lifecycle,
    Navigator,
    View,
    ViewContext,
    ViewFactory,
    ViewState,
    check_view_arguments,
)
from waypoint.views.factory import view_factory
from waypoint.views.forms import (
    LOGIN_FORM,
    SIGNUP_FORM,
    FormSpec,
    FormView,
    PendingOperations,
    SettingsView,
)
from waypoint.views.leaderboard import LeaderboardEntry, LeaderboardPage, LeaderboardView
from waypoint.views.pages import AboutView, IndexView

__all__ = [
    "LOGIN_FORM",
    "SIGNUP_FORM",
    "AboutView",
    "FormSpec",
    "FormView",
    "IndexView",
    "LeaderboardEntry",
    "LeaderboardPage",
    "LeaderboardView",
    "Lifecycle",
    "LogoutView",
    "Navigator",
    "PendingOperations",
    "ProfileView",
    "SettingsView",
    "View",
    "ViewContext",
    "ViewFactory",
    "ViewState",
    "check_view_arguments",
    "view_factory",
]
