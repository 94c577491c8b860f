# reviews/models/admin_reply.py

import uuid

from django.db import models

from .review import Review


class AdminReply(models.Model):
    """
    The store's single public answer to a review.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    review = models.OneToOneField(
        Review,
        on_delete=models.CASCADE,
        related_name="admin_reply",
    )
    comment = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "admin replies"

    def __str__(self):
        return f"Reply to {self.review_id}"
