"""Tests for the block application services (create/update/duplicate/delete/publish)."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from content_blocks.application.blocks import (
    assign_block_to_page,
    assign_blocks_to_set,
    create_block,
    create_page,
    delete_block,
    duplicate_block,
    live_placements,
    publish_block,
    unpublish_block,
    update_block,
)
from content_blocks.application.blocks.usage import (
    is_published,
    pages_affected_by_changes,
    usage_list_as_string,
)
from content_blocks.application.blocks.viewers import build_viewer
from content_blocks.domain.invariants.exceptions import InvariantViolation
from content_blocks.domain.visibility import ANONYMOUS
from content_blocks.manager import get_block_manager
from content_blocks.models import AuditLog, Block, BlockLive, Page
from content_blocks.models.associations import block_set_blocks, page_blocks
from content_blocks.publishing import FilesystemPublisher


def count(db, table) -> int:
    return db.session.execute(select(func.count()).select_from(table)).scalar_one()


# ── create / update ─────────────────────────────────────────────────


class TestCreateBlock:
    def test_creates_with_defaults(self, app, db) -> None:
        block = create_block(data={"title": "Welcome"}, actor_id=None)

        stored = db.session.get(Block, block.id)
        assert stored.title == "Welcome"
        assert stored.type == "ContentBlock"
        assert stored.view_policy == "Anyone"
        assert AuditLog.query.filter_by(action="block.create", entity_id=block.id).count() == 1

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_empty_title_rejected_store_unchanged(self, app, db, title) -> None:
        with pytest.raises(InvariantViolation, match="Title is required"):
            create_block(data={"title": title}, actor_id=None)

        assert Block.query.count() == 0
        assert AuditLog.query.count() == 0

    def test_invalid_policy_rejected(self, app) -> None:
        with pytest.raises(InvariantViolation, match="view policy"):
            create_block(data={"title": "X", "view_policy": "Friends"}, actor_id=None)

    def test_unknown_type_rejected(self, app) -> None:
        with pytest.raises(InvariantViolation, match="block type"):
            create_block(data={"title": "X", "type": "Carousel"}, actor_id=None)

    def test_unknown_viewer_group_rejected(self, app) -> None:
        with pytest.raises(InvariantViolation, match="viewer groups"):
            create_block(data={"title": "X", "viewer_group_ids": ["nope"]}, actor_id=None)
        assert Block.query.count() == 0

    @pytest.mark.parametrize("content", ["hello", ["html"], 3])
    def test_non_object_content_rejected(self, app, content) -> None:
        with pytest.raises(InvariantViolation, match="content must be an object"):
            create_block(data={"title": "X", "content": content}, actor_id=None)
        assert Block.query.count() == 0


class TestUpdateBlock:
    def test_changes_whitelisted_fields(self, app, db, make_block, make_group) -> None:
        group = make_group("Members")
        block = make_block("Old")

        update_block(
            block=block,
            data={"title": "New", "view_policy": "OnlyListedGroups", "viewer_group_ids": [group.id]},
            actor_id=None,
        )

        stored = db.session.get(Block, block.id)
        assert stored.title == "New"
        assert stored.viewer_group_ids == {group.id}
        log = AuditLog.query.filter_by(action="block.update").one()
        assert set(log.payload["fields"]) == {"title", "view_policy", "viewer_group_ids"}

    def test_noop_update_rejected(self, app, make_block) -> None:
        block = make_block("Same")
        with pytest.raises(ValueError, match="No valid fields"):
            update_block(block=block, data={"title": "Same", "weight": 5}, actor_id=None)

    def test_empty_title_rolls_back(self, app, db, make_block) -> None:
        block = make_block("Keep me")
        with pytest.raises(InvariantViolation):
            update_block(block=block, data={"title": ""}, actor_id=None)

        db.session.expire_all()
        assert db.session.get(Block, block.id).title == "Keep me"

    @pytest.mark.parametrize("field", ["title", "type", "view_policy"])
    def test_null_field_with_groups_is_validation_error(
        self, app, db, make_block, make_group, field
    ) -> None:
        group = make_group("Members")
        block = make_block("Keep me")

        with pytest.raises(InvariantViolation):
            update_block(
                block=block,
                data={field: None, "viewer_group_ids": [group.id]},
                actor_id=None,
            )

        db.session.expire_all()
        stored = db.session.get(Block, block.id)
        assert (stored.title, stored.type, stored.view_policy) == ("Keep me", "ContentBlock", "Anyone")
        assert stored.viewer_group_ids == set()


# ── duplicate / delete ──────────────────────────────────────────────


class TestDuplicateBlock:
    def test_copy_keeps_fields_drops_placements(
        self, app, db, make_block, make_group, make_page, make_block_set
    ) -> None:
        group = make_group("Staff")
        block = make_block(
            "Promo",
            view_policy="OnlyListedGroups",
            extra_css_classes="wide",
            area="Sidebar",
            viewer_groups=[group],
        )
        page = make_page("home")
        assign_block_to_page(page=page, block=block, actor_id=None)
        make_block_set("Footer set", blocks=[block])
        publish_block(block=block, actor_id=None)

        copy = duplicate_block(block=block, actor_id=None)

        assert copy.id != block.id
        assert (copy.title, copy.view_policy, copy.extra_css_classes, copy.area) == (
            "Promo", "OnlyListedGroups", "wide", "Sidebar"
        )
        assert copy.viewer_group_ids == {group.id}
        assert copy.pages == []
        assert copy.block_sets == []
        assert not is_published(copy)

        db.session.expire_all()
        original = db.session.get(Block, block.id)
        assert [p.slug for p in original.pages] == ["home"]
        assert [s.title for s in original.block_sets] == ["Footer set"]


class TestDeleteBlock:
    def test_severs_relations_and_live_row(
        self, app, db, make_block, make_page, make_block_set
    ) -> None:
        block = make_block("Doomed")
        keep = make_block("Keeper")
        page = make_page("about")
        assign_block_to_page(page=page, block=block, actor_id=None)
        assign_block_to_page(page=page, block=keep, actor_id=None)
        make_block_set("Set", blocks=[block, keep])
        publish_block(block=block, actor_id=None)
        block_id = block.id

        delete_block(block=block, actor_id=None)

        assert db.session.get(Block, block_id) is None
        assert db.session.get(BlockLive, block_id) is None
        rows = db.session.execute(
            select(page_blocks.c.block_id).where(page_blocks.c.block_id == block_id)
        ).all()
        assert rows == []
        assert count(db, block_set_blocks) == 1
        assert count(db, page_blocks) == 1


# ── publishing ──────────────────────────────────────────────────────


class TestPublishing:
    def test_publish_creates_then_bumps_version(self, app, db, make_block) -> None:
        block = make_block("Live one")

        assert publish_block(block=block, actor_id=None)["version"] == 1
        update_block(block=block, data={"title": "Live two"}, actor_id=None)
        assert publish_block(block=block, actor_id=None)["version"] == 2

        live = db.session.get(BlockLive, block.id)
        assert live.title == "Live two"
        assert is_published(block)

    def test_live_copy_isolated_from_draft_edits(self, app, db, make_block) -> None:
        block = make_block("Published title")
        publish_block(block=block, actor_id=None)
        update_block(block=block, data={"title": "Draft title"}, actor_id=None)

        assert db.session.get(BlockLive, block.id).title == "Published title"

    def test_live_copy_carries_viewer_groups(self, app, db, make_block, make_group) -> None:
        group = make_group("Subscribers")
        block = make_block("Members only", view_policy="OnlyListedGroups", viewer_groups=[group])
        publish_block(block=block, actor_id=None)

        live = db.session.get(BlockLive, block.id)
        assert live.viewer_group_ids == [group.id]

    def test_unpublish(self, app, db, make_block) -> None:
        block = make_block("Short lived")
        publish_block(block=block, actor_id=None)
        unpublish_block(block=block, actor_id=None)

        assert not is_published(block)
        with pytest.raises(ValueError, match="not published"):
            unpublish_block(block=block, actor_id=None)


# ── placement & usage ───────────────────────────────────────────────


class TestUsage:
    def test_usage_strings(self, app, make_block, make_page, make_block_set) -> None:
        block = make_block("Shared")
        assert usage_list_as_string(block) is None

        make_block_set("Sidebar set", blocks=[block])
        assert usage_list_as_string(block) == "Block Sets: Sidebar set"

        assign_block_to_page(page=make_page("home"), block=block, actor_id=None)
        assign_block_to_page(page=make_page("contact"), block=block, actor_id=None)
        usage = usage_list_as_string(block)
        assert usage.startswith("Pages: ")
        assert "home" in usage and "contact" in usage
        assert usage.endswith("<br />Block Sets: Sidebar set")
        assert sorted(pages_affected_by_changes(block)) == ["/contact/", "/home/"]

    def test_placement_area_overrides_legacy_area(self, app, make_block, make_page) -> None:
        page = make_page("home")
        first = make_block("First", area="Main")
        second = make_block("Second", area="Main")
        assign_block_to_page(page=page, block=first, actor_id=None, sort=2)
        assign_block_to_page(page=page, block=second, actor_id=None, block_area="Sidebar", sort=1)
        publish_block(block=first, actor_id=None)
        publish_block(block=second, actor_id=None)

        placements = [(live.title, area) for live, area in live_placements(page)]
        assert placements == [("Second", "Sidebar"), ("First", "Main")]

    def test_reassigning_moves_placement(self, app, db, make_block, make_page) -> None:
        page = make_page("home")
        block = make_block("Mover")
        assign_block_to_page(page=page, block=block, actor_id=None, block_area="Header")
        assign_block_to_page(page=page, block=block, actor_id=None, block_area="Footer")

        assert count(db, page_blocks) == 1
        area = db.session.execute(select(page_blocks.c.block_area)).scalar_one()
        assert area == "Footer"

    def test_assign_blocks_to_set_replaces(self, app, make_block, make_block_set) -> None:
        a, b = make_block("A"), make_block("B")
        block_set = make_block_set("Set", blocks=[a])

        assign_blocks_to_set(block_set=block_set, block_ids=[b.id], actor_id=None)
        assert [blk.title for blk in block_set.blocks] == ["B"]

        with pytest.raises(InvariantViolation):
            assign_blocks_to_set(block_set=block_set, block_ids=["missing"], actor_id=None)


# ── viewers ─────────────────────────────────────────────────────────


class TestBuildViewer:
    def test_includes_ancestor_groups_and_their_capabilities(
        self, app, make_group, make_member
    ) -> None:
        parent = make_group("Staff", codes=("BLOCK_EDIT",))
        child = make_group("Interns", parent=parent)
        viewer = build_viewer(make_member("intern@example.com", groups=[child]))

        assert viewer.group_ids == {parent.id, child.id}
        assert viewer.capabilities == {"BLOCK_EDIT"}

    def test_inactive_member_is_anonymous(self, app, make_member) -> None:
        assert build_viewer(make_member("gone@example.com", is_active=False)) is ANONYMOUS


# ── static publisher ────────────────────────────────────────────────


class TestFilesystemRepublish:
    def test_save_evicts_cached_pages(self, app, make_block, make_page, tmp_path) -> None:
        manager = get_block_manager()
        manager.publisher = FilesystemPublisher(str(tmp_path))

        cached = tmp_path / "home" / "index.html"
        cached.parent.mkdir()
        cached.write_text("<html>stale</html>")
        untouched = tmp_path / "other" / "index.html"
        untouched.parent.mkdir()
        untouched.write_text("<html>fine</html>")

        block = make_block("Cached")
        assign_block_to_page(page=make_page("home"), block=block, actor_id=None)
        cached.write_text("<html>stale again</html>")

        update_block(block=block, data={"title": "Fresh"}, actor_id=None)

        assert not cached.exists()
        assert untouched.exists()

    def test_disabled_by_default(self, app, make_block) -> None:
        assert get_block_manager().publisher is None

    def test_never_evicts_outside_cache_dir(self, app, make_block, make_page, tmp_path) -> None:
        cache_dir = tmp_path / "cache"
        cache_dir.mkdir()
        manager = get_block_manager()
        manager.publisher = FilesystemPublisher(str(cache_dir))

        outside = tmp_path / "outside" / "index.html"
        outside.parent.mkdir()
        outside.write_text("<html>not ours</html>")

        assign_block_to_page(page=make_page("../outside"), block=make_block("Sneaky"), actor_id=None)

        assert outside.exists()
        assert manager.publisher.path_for("/../outside/") is None


# ── pages ───────────────────────────────────────────────────────────


class TestCreatePage:
    def test_slug_is_trimmed(self, app) -> None:
        page = create_page(data={"title": "About", "slug": "/company/about/"}, actor_id=None)
        assert page.slug == "company/about"
        assert page.link() == "/company/about/"

    @pytest.mark.parametrize("slug", ["../outside", "news/../../etc", "with space", "a//b", 42])
    def test_unsafe_slug_rejected(self, app, slug) -> None:
        with pytest.raises(InvariantViolation, match="Invalid page slug"):
            create_page(data={"title": "Bad", "slug": slug}, actor_id=None)
        assert Page.query.count() == 0
