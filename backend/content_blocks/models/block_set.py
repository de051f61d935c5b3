from content_blocks.extensions import db
from .base import BaseModel
from .associations import block_set_blocks


class BlockSet(BaseModel):
    __tablename__ = "block_sets"

    title = db.Column(db.String(255), nullable=False)

    blocks = db.relationship("Block", secondary=block_set_blocks, back_populates="block_sets")
