# reviews/admin.py

from django.contrib import admin

from reviews.models import AdminReply, Review


class AdminReplyInline(admin.StackedInline):
    model = AdminReply
    extra = 0


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "rating", "created_at")
    list_filter = ("rating", "created_at")
    search_fields = ("product__name", "user__email", "comment")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [AdminReplyInline]
