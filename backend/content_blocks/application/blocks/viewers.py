from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from content_blocks.extensions import db
from content_blocks.domain.visibility import ANONYMOUS, Viewer
from content_blocks.models.group import Permission
from content_blocks.models.member import Member


def group_ids_for(member):
    """Direct groups of member plus every ancestor group."""
    ids = set()
    for group in member.groups:
        ids.add(group.id)
        ids.update(ancestor.id for ancestor in group.ancestors())
    return frozenset(ids)


def capabilities_for(group_ids):
    if not group_ids:
        return frozenset()

    codes = (
        db.session.query(Permission.code)
        .filter(Permission.group_id.in_(group_ids))
        .distinct()
        .all()
    )
    return frozenset(code for (code,) in codes)


def build_viewer(member):
    """
    Viewer for a verified, active member; anonymous otherwise.
    """
    if member is None or not member.is_active:
        return ANONYMOUS

    group_ids = group_ids_for(member)
    return Viewer(
        member_id=member.id,
        group_ids=group_ids,
        capabilities=capabilities_for(group_ids),
    )


def load_current_viewer():
    """
    Resolve the request's viewer from an optional JWT and attach it to g.
    """
    member = None
    verify_jwt_in_request(optional=True)
    member_id = get_jwt_identity()
    if member_id:
        member = db.session.get(Member, member_id)

    g.current_viewer = build_viewer(member)
    g.current_user = member if g.current_viewer.is_authenticated else None
    return g.current_viewer
