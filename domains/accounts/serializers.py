# domains/accounts/serializers.py
from rest_framework import serializers


class IdentitySerializer(serializers.Serializer):
    """Identity dataclass → 응답"""

    id = serializers.UUIDField()
    display_name = serializers.CharField()
    is_staff = serializers.BooleanField()


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()
