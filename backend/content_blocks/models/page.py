from content_blocks.extensions import db
from .base import BaseModel
from .associations import page_blocks


class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)

    blocks = db.relationship(
        "Block",
        secondary=page_blocks,
        back_populates="pages",
        order_by=page_blocks.c.sort,
    )

    def link(self):
        return f"/{self.slug.strip('/')}/"
