from .replies import ReviewReplyView
from .reviews import CanReviewView, ReviewCreateView, ReviewDetailView

__all__ = [
    "ReviewCreateView",
    "ReviewDetailView",
    "CanReviewView",
    "ReviewReplyView",
]
