from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional

from .permissions import ADMIN, SITETREE_VIEW_ALL, has_capability


class ViewPolicy(str, Enum):
    ANYONE = "Anyone"
    LOGGED_IN_USERS = "LoggedInUsers"
    ONLY_LISTED_GROUPS = "OnlyListedGroups"


VIEW_POLICY_LABELS = {
    ViewPolicy.ANYONE: "Anyone",
    ViewPolicy.LOGGED_IN_USERS: "Logged-in users",
    ViewPolicy.ONLY_LISTED_GROUPS: "Only these people (choose from list)",
}


@dataclass(frozen=True)
class Viewer:
    """
    Identity a visibility decision is made for.

    member_id is None for anonymous viewers. Only build a non-anonymous
    Viewer from a verified identity: the resolver trusts it as-is.
    group_ids must already include ancestor groups.
    """

    member_id: Optional[str] = None
    group_ids: FrozenSet[str] = field(default_factory=frozenset)
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.member_id is not None


ANONYMOUS = Viewer()

# hook(block, viewer) -> True / False / None (no opinion)
ViewHook = Callable[[object, Viewer], Optional[bool]]


def can_view(block, viewer: Optional[Viewer], *, checker, hooks: Iterable[ViewHook] = ()) -> bool:
    """
    Decide whether viewer may see block.

    block needs view_policy and viewer_group_ids. Order of evaluation:
    admin override, extension hooks, then the block's own policy.
    """
    viewer = viewer or ANONYMOUS

    if viewer.is_authenticated and has_capability(checker, viewer, ADMIN, SITETREE_VIEW_ALL):
        return True

    for hook in hooks:
        extended = hook(block, viewer)
        if extended is not None:
            return bool(extended)

    policy = block.view_policy
    if not policy or policy == ViewPolicy.ANYONE:
        return True

    if policy == ViewPolicy.LOGGED_IN_USERS:
        return viewer.is_authenticated

    if policy == ViewPolicy.ONLY_LISTED_GROUPS:
        allowed = set(block.viewer_group_ids or ())
        return viewer.is_authenticated and bool(allowed & viewer.group_ids)

    return False
