# public/serializers.py

from __future__ import annotations

from rest_framework import serializers


class ContactMessageSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    subject = serializers.CharField(max_length=255)
    message = serializers.CharField(max_length=5000)


class ContactResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
