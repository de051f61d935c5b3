from content_blocks.extensions import db

block_viewer_groups = db.Table(
    "block_viewer_groups",
    db.Column("block_id", db.String(36), db.ForeignKey("blocks.id"), primary_key=True),
    db.Column("group_id", db.String(36), db.ForeignKey("groups.id"), primary_key=True),
)

# Placement of a block on a page. block_area overrides the block's legacy area.
page_blocks = db.Table(
    "page_blocks",
    db.Column("page_id", db.String(36), db.ForeignKey("pages.id"), primary_key=True),
    db.Column("block_id", db.String(36), db.ForeignKey("blocks.id"), primary_key=True),
    db.Column("block_area", db.String(100), nullable=True),
    db.Column("sort", db.Integer, nullable=False, default=0),
)

block_set_blocks = db.Table(
    "block_set_blocks",
    db.Column("block_set_id", db.String(36), db.ForeignKey("block_sets.id"), primary_key=True),
    db.Column("block_id", db.String(36), db.ForeignKey("blocks.id"), primary_key=True),
)

member_groups = db.Table(
    "member_groups",
    db.Column("member_id", db.String(36), db.ForeignKey("members.id"), primary_key=True),
    db.Column("group_id", db.String(36), db.ForeignKey("groups.id"), primary_key=True),
)
