"""Shared fixtures: a testing app on in-memory SQLite plus small factories."""

from __future__ import annotations

import pytest
from flask_jwt_extended import create_access_token

from content_blocks import create_app
from content_blocks.extensions import db as _db
from content_blocks.models import Block, BlockSet, Group, Member, Page, Permission


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_group(db):
    def _make(title, *, parent=None, codes=()):
        group = Group(title=title, parent=parent)
        for code in codes:
            group.permissions.append(Permission(code=code))
        db.session.add(group)
        db.session.commit()
        return group

    return _make


@pytest.fixture
def make_member(db):
    def _make(email, *, groups=(), password="secret", is_active=True):
        member = Member(email=email, is_active=is_active)
        member.set_password(password)
        member.groups = list(groups)
        db.session.add(member)
        db.session.commit()
        return member

    return _make


@pytest.fixture
def make_block(db):
    def _make(title="Banner", *, viewer_groups=(), **fields):
        fields.setdefault("type", "ContentBlock")
        fields.setdefault("view_policy", "Anyone")
        fields.setdefault("content", {"html": "<p>Hello</p>"})
        block = Block(title=title, **fields)
        block.viewer_groups = list(viewer_groups)
        db.session.add(block)
        db.session.commit()
        return block

    return _make


@pytest.fixture
def make_page(db):
    def _make(slug, *, title=None):
        page = Page(title=title or slug.title(), slug=slug)
        db.session.add(page)
        db.session.commit()
        return page

    return _make


@pytest.fixture
def make_block_set(db):
    def _make(title, *, blocks=()):
        block_set = BlockSet(title=title)
        block_set.blocks = list(blocks)
        db.session.add(block_set)
        db.session.commit()
        return block_set

    return _make


@pytest.fixture
def auth_headers():
    def _headers(member):
        token = create_access_token(identity=member.id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin(make_group, make_member):
    group = make_group("Administrators", codes=("ADMIN",))
    return make_member("admin@example.com", groups=[group])


@pytest.fixture
def editor(make_group, make_member):
    group = make_group("Content Editors", codes=("BLOCK_EDIT", "BLOCK_CREATE"))
    return make_member("editor@example.com", groups=[group])
