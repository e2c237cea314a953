"""Navigation entries the UI should render for a member."""

from dataclasses import dataclass
from typing import Callable

from org_roster.models.member_context import MemberContext
from org_roster.models.role import Capability


@dataclass(frozen=True)
class NavigationItem:
    key: str
    label: str


def _always(context: MemberContext) -> bool:
    return True


def _requires(*capabilities: Capability) -> Callable[[MemberContext], bool]:
    """Visible when the member holds any of the capabilities."""

    def check(context: MemberContext) -> bool:
        return any(context.has_permission(c) for c in capabilities)

    return check


# Declaration order is the render order
_NAVIGATION: list[tuple[NavigationItem, Callable[[MemberContext], bool]]] = [
    (NavigationItem("dashboard", "Dashboard"), _requires(Capability.VIEW_DASHBOARD)),
    (
        NavigationItem("committee", "Committee"),
        _requires(Capability.CREATE_COMMITTEES, Capability.MANAGE_COMMITTEES),
    ),
    (NavigationItem("directory", "Directory"), _requires(Capability.VIEW_DASHBOARD)),
    (NavigationItem("profile", "Profile"), _always),
    (NavigationItem("about", "About"), _always),
    (NavigationItem("members", "Members"), _requires(Capability.APPROVE_MEMBERS)),
    (NavigationItem("committees", "Committees"), _requires(Capability.MANAGE_COMMITTEES)),
    (NavigationItem("admin", "Admin"), MemberContext.is_site_admin),
]


def build_navigation(context: MemberContext) -> list[NavigationItem]:
    return [item for item, visible in _NAVIGATION if visible(context)]
