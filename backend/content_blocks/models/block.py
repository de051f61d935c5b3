from content_blocks.extensions import db
from content_blocks.domain.visibility import ViewPolicy
from .base import BaseModel
from .associations import block_viewer_groups, page_blocks, block_set_blocks


class Block(BaseModel):
    """Draft slot of a content block. The published copy lives in BlockLive."""

    __tablename__ = "blocks"

    title = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(100), nullable=False, default="ContentBlock")
    area = db.Column(db.String(100), nullable=True)  # legacy, superseded by page_blocks.block_area
    weight = db.Column(db.Integer, nullable=True)  # legacy, unused
    view_policy = db.Column(db.String(20), nullable=False, default=ViewPolicy.ANYONE.value)
    extra_css_classes = db.Column(db.String(255), nullable=True)
    content = db.Column(db.JSON, default=dict)

    viewer_groups = db.relationship("Group", secondary=block_viewer_groups)
    pages = db.relationship("Page", secondary=page_blocks, back_populates="blocks")
    block_sets = db.relationship("BlockSet", secondary=block_set_blocks, back_populates="blocks")

    live = db.relationship(
        "BlockLive",
        uselist=False,
        back_populates="block",
        cascade="all, delete-orphan",
    )

    @property
    def viewer_group_ids(self):
        return {group.id for group in self.viewer_groups}

    def __repr__(self):
        return f"<Block {self.type} {self.title!r}>"
