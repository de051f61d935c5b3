from werkzeug.security import generate_password_hash, check_password_hash
from content_blocks.extensions import db
from .base import BaseModel
from .associations import member_groups


class Member(BaseModel):
    __tablename__ = "members"

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    is_active = db.Column(db.Boolean, default=True)

    groups = db.relationship("Group", secondary=member_groups, backref="members")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
