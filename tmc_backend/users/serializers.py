# users/serializers.py

"""
USER SERIALIZERS

- RegisterSerializer: consumer or business signup (business data nested)
- LoginSerializer: input only; authentication happens in the view
- UserSerializer / BusinessSerializer: safe output shapes
- Business application inputs for the admin endpoints
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from users.models import Business

User = get_user_model()


# ---------------- BUSINESS ----------------
class BusinessDataSerializer(serializers.Serializer):
    business_name = serializers.CharField(max_length=255)
    business_type = serializers.ChoiceField(choices=Business.BusinessType.choices)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=120)
    state = serializers.CharField(max_length=120)
    zip_code = serializers.CharField(max_length=20)
    contact_person = serializers.CharField(max_length=255)
    website = serializers.CharField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "email", "phone"]
        read_only_fields = fields


class BusinessSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Business
        fields = [
            "id",
            "user",
            "business_name",
            "business_type",
            "address",
            "city",
            "state",
            "zip_code",
            "contact_person",
            "website",
            "description",
            "status",
            "rejection_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    USER_TYPE_CONSUMER = "consumer"
    USER_TYPE_BUSINESS = "business"

    first_name = serializers.CharField(min_length=1, max_length=100)
    last_name = serializers.CharField(min_length=1, max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={"input_type": "password"},
    )
    phone = serializers.CharField(min_length=10, max_length=32)
    user_type = serializers.ChoiceField(choices=[USER_TYPE_CONSUMER, USER_TYPE_BUSINESS])
    business_data = BusinessDataSerializer(required=False)

    def validate_email(self, value):
        value = User.objects.normalize_email((value or "").strip())
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User with this email already exists")
        return value

    def validate(self, attrs):
        if attrs["user_type"] == self.USER_TYPE_BUSINESS and not attrs.get("business_data"):
            raise serializers.ValidationError(
                {"business_data": "Business details are required for business accounts"}
            )
        return attrs


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    business_status = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "role",
            "business_status",
        ]
        read_only_fields = fields


# ---------------- ADMIN INPUTS ----------------
class BusinessStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Business.Status.choices)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class RejectBusinessInputSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")
