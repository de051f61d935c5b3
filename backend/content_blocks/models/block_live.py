from content_blocks.extensions import db
from .base import utc_now


class BlockLive(db.Model):
    """
    Published slot of a block, keyed by the draft's id.

    Holds a copy of everything needed to render and gate the block, so
    later draft edits do not leak to viewers until republished.
    """

    __tablename__ = "blocks_live"

    id = db.Column(db.String(36), db.ForeignKey("blocks.id"), primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(100), nullable=False)
    area = db.Column(db.String(100), nullable=True)
    view_policy = db.Column(db.String(20), nullable=False)
    extra_css_classes = db.Column(db.String(255), nullable=True)
    content = db.Column(db.JSON, default=dict)
    viewer_group_ids = db.Column(db.JSON, nullable=False, default=list)

    version = db.Column(db.Integer, nullable=False, default=1)
    published_by = db.Column(db.String(36), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), default=utc_now)

    block = db.relationship("Block", back_populates="live")
