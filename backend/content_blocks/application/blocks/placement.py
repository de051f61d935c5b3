from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from werkzeug.utils import secure_filename
from content_blocks.extensions import db
from content_blocks.models.associations import page_blocks
from content_blocks.models.block import Block
from content_blocks.models.block_live import BlockLive
from content_blocks.models.block_set import BlockSet
from content_blocks.models.page import Page
from content_blocks.domain.invariants.exceptions import InvariantViolation
from content_blocks.manager import get_block_manager
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional
from .republish import republish_block


def clean_slug(slug: str) -> str:
    """
    Normalise a page slug to its path segments. Every segment must already
    be a safe filename, so a slug can never step outside the page tree.
    """
    if not isinstance(slug, str):
        raise InvariantViolation(f"Invalid page slug: {slug!r}")

    segments = slug.strip("/").split("/")
    if not all(segment and secure_filename(segment) == segment for segment in segments):
        raise InvariantViolation(f"Invalid page slug: {slug!r}")
    return "/".join(segments)


def create_page(
    *,
    data: Dict[str, Any],
    actor_id: Optional[str],
) -> Page:
    title = data.get("title")
    slug = data.get("slug")

    if not title or not slug:
        raise InvariantViolation("Both title and slug are required")

    page = Page()
    page.title = title
    page.slug = clean_slug(slug)

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()

            log_action(
                action="page.create",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor_id,
                payload={"title": page.title, "slug": page.slug},
            )
    except IntegrityError as exc:
        raise InvariantViolation("A page with this slug already exists") from exc

    return page


def assign_block_to_page(
    *,
    page: Page,
    block: Block,
    actor_id: Optional[str],
    block_area: Optional[str] = None,
    sort: int = 0,
) -> None:
    """
    Place block on page, or move an existing placement to a new area/sort.
    """
    existing = db.session.execute(
        select(page_blocks.c.block_id).where(
            page_blocks.c.page_id == page.id,
            page_blocks.c.block_id == block.id,
        )
    ).first()

    with transactional():
        if existing:
            db.session.execute(
                page_blocks.update()
                .where(
                    page_blocks.c.page_id == page.id,
                    page_blocks.c.block_id == block.id,
                )
                .values(block_area=block_area, sort=sort)
            )
        else:
            db.session.execute(
                page_blocks.insert().values(
                    page_id=page.id,
                    block_id=block.id,
                    block_area=block_area,
                    sort=sort,
                )
            )

        log_action(
            action="page.assign_block",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"block_id": block.id, "block_area": block_area, "sort": sort},
        )

    db.session.expire(block, ["pages"])
    db.session.expire(page, ["blocks"])
    republish_block(block, get_block_manager())


def create_block_set(
    *,
    data: Dict[str, Any],
    actor_id: Optional[str],
) -> BlockSet:
    title = data.get("title")
    if not title:
        raise InvariantViolation("Block Set Title is required")

    block_set = BlockSet()
    block_set.title = title

    with transactional():
        db.session.add(block_set)
        db.session.flush()

        log_action(
            action="block_set.create",
            entity_type="block_set",
            entity_id=block_set.id,
            actor_id=actor_id,
            payload={"title": title},
        )

    return block_set


def assign_blocks_to_set(
    *,
    block_set: BlockSet,
    block_ids: List[str],
    actor_id: Optional[str],
) -> BlockSet:
    """Replace the blocks of a set with block_ids (in order)."""
    block_ids = list(dict.fromkeys(block_ids))
    blocks = Block.query.filter(Block.id.in_(block_ids)).all() if block_ids else []

    missing = set(block_ids) - {block.id for block in blocks}
    if missing:
        raise InvariantViolation(f"Unknown blocks: {sorted(missing)}")

    with transactional():
        block_set.blocks = blocks

        log_action(
            action="block_set.assign_blocks",
            entity_type="block_set",
            entity_id=block_set.id,
            actor_id=actor_id,
            payload={"block_ids": block_ids},
        )

    return block_set


def live_placements(page: Page):
    """
    (live block, effective area) for every published block on page, in
    placement order. The placement's area wins over the block's legacy one.
    """
    rows = db.session.execute(
        select(BlockLive, page_blocks.c.block_area)
        .join(page_blocks, page_blocks.c.block_id == BlockLive.id)
        .where(page_blocks.c.page_id == page.id)
        .order_by(page_blocks.c.sort, BlockLive.title)
    ).all()

    return [(live, block_area or live.area) for live, block_area in rows]
