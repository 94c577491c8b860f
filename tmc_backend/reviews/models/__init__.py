from .admin_reply import AdminReply
from .review import Review

__all__ = [
    "Review",
    "AdminReply",
]
