import logging
from typing import Iterable, Protocol

from .exceptions import PermissionServiceError

logger = logging.getLogger(__name__)

ADMIN = "ADMIN"
SITETREE_VIEW_ALL = "SITETREE_VIEW_ALL"
BLOCK_EDIT = "BLOCK_EDIT"
BLOCK_DELETE = "BLOCK_DELETE"
BLOCK_CREATE = "BLOCK_CREATE"
BLOCK_PUBLISH = "BLOCK_PUBLISH"

KNOWN_CODES = frozenset({
    ADMIN,
    SITETREE_VIEW_ALL,
    BLOCK_EDIT,
    BLOCK_DELETE,
    BLOCK_CREATE,
    BLOCK_PUBLISH,
})


class CapabilityChecker(Protocol):
    def has_any(self, viewer, codes: Iterable[str]) -> bool: ...


class ViewerCapabilityChecker:
    """
    Answers from the capability set already resolved onto the viewer
    (see application.blocks.viewers.build_viewer).
    """

    def has_any(self, viewer, codes):
        return bool(viewer.capabilities & set(codes))


def has_capability(checker: CapabilityChecker, viewer, *codes: str) -> bool:
    """
    Fail-closed capability check.

    Unrecognized codes are dropped; an unreachable checker denies.
    """
    known = [code for code in codes if code in KNOWN_CODES]
    unknown = set(codes) - KNOWN_CODES
    if unknown:
        logger.warning("Ignoring unrecognized capability codes: %s", sorted(unknown))

    if not known or viewer is None:
        return False

    try:
        return bool(checker.has_any(viewer, known))
    except PermissionServiceError:
        logger.warning("Permission service unavailable, denying %s", known)
        return False


def can_edit(checker, viewer) -> bool:
    return has_capability(checker, viewer, ADMIN, BLOCK_EDIT)


def can_delete(checker, viewer) -> bool:
    return has_capability(checker, viewer, ADMIN, BLOCK_DELETE)


def can_create(checker, viewer) -> bool:
    return has_capability(checker, viewer, ADMIN, BLOCK_CREATE)


def can_publish(checker, viewer) -> bool:
    return has_capability(checker, viewer, ADMIN, BLOCK_PUBLISH)


def provide_permissions():
    return {
        BLOCK_EDIT: {"name": "Edit a Block", "category": "Blocks"},
        BLOCK_DELETE: {"name": "Delete a Block", "category": "Blocks"},
        BLOCK_CREATE: {"name": "Create a Block", "category": "Blocks"},
    }
