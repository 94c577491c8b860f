# reviews/serializers.py

from rest_framework import serializers

from reviews.models import AdminReply, Review


class AdminReplySerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminReply
        fields = ["id", "review", "comment", "created_at", "updated_at"]
        read_only_fields = fields


class ReviewAuthorSerializer(serializers.Serializer):
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)


class ReviewSerializer(serializers.ModelSerializer):
    """
    Public review shape (author first/last name + the store's reply).
    """

    user = ReviewAuthorSerializer(read_only=True)
    admin_reply = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            "id",
            "product",
            "user",
            "rating",
            "comment",
            "admin_reply",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_admin_reply(self, obj):
        reply = getattr(obj, "admin_reply", None)
        return AdminReplySerializer(reply).data if reply else None


class ReviewCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(allow_blank=False, trim_whitespace=True)


class AdminReplyInputSerializer(serializers.Serializer):
    comment = serializers.CharField(allow_blank=False, trim_whitespace=True)
