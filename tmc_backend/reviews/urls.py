# reviews/urls.py

from django.urls import path

from .views import CanReviewView, ReviewCreateView, ReviewDetailView, ReviewReplyView

app_name = "reviews"

urlpatterns = [
    path("", ReviewCreateView.as_view(), name="review-create"),
    path("can-review/", CanReviewView.as_view(), name="can-review"),
    path("<uuid:review_id>/", ReviewDetailView.as_view(), name="review-detail"),
    path("<uuid:review_id>/reply/", ReviewReplyView.as_view(), name="review-reply"),
]
