from content_blocks.extensions import db
from .base import BaseModel


class Group(BaseModel):
    __tablename__ = "groups"

    title = db.Column(db.String(255), nullable=False)
    parent_id = db.Column(db.String(36), db.ForeignKey("groups.id"), nullable=True)

    parent = db.relationship("Group", remote_side="Group.id", backref="children")
    permissions = db.relationship(
        "Permission",
        back_populates="group",
        cascade="all, delete-orphan"
    )

    def ancestors(self):
        """Parent chain, nearest first."""
        chain = []
        current = self.parent
        while current is not None and current not in chain:
            chain.append(current)
            current = current.parent
        return chain

    def breadcrumbs(self, separator=" > "):
        titles = [g.title for g in reversed(self.ancestors())]
        titles.append(self.title)
        return separator.join(titles)


class Permission(BaseModel):
    __tablename__ = "permissions"

    group_id = db.Column(db.String(36), db.ForeignKey("groups.id"), nullable=False, index=True)
    code = db.Column(db.String(50), nullable=False, index=True)

    group = db.relationship("Group", back_populates="permissions")

    __table_args__ = (
        db.UniqueConstraint("group_id", "code", name="uq_group_permission_code"),
    )
