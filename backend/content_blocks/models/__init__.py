from .member import Member
from .group import Group, Permission
from .page import Page
from .block_set import BlockSet
from .block import Block
from .block_live import BlockLive
from .audit_log import AuditLog

__all__ = [
    "Member",
    "Group",
    "Permission",
    "Page",
    "BlockSet",
    "Block",
    "BlockLive",
    "AuditLog",
]
