from phonenumber_field.serializerfields import PhoneNumberField
from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Public view of a player, including the current wallet balance."""

    phone_number = serializers.CharField(read_only=True)
    wallet_balance = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = User
        fields = ("id", "username", "phone_number", "email", "is_verified", "wallet_balance")
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    phone_number = PhoneNumberField()
    username = serializers.CharField(max_length=150, required=False, allow_blank=True)


class SignupSerializer(serializers.Serializer):
    phone_number = PhoneNumberField()
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)


class VerifyOTPSerializer(serializers.Serializer):
    phone_number = PhoneNumberField(required=False)
    email = serializers.EmailField(required=False)
    code = serializers.CharField(max_length=10)
    username = serializers.CharField(max_length=150, required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get("phone_number") and not attrs.get("email"):
            raise serializers.ValidationError("Phone number or email is required.")
        return attrs


class ResendOTPSerializer(serializers.Serializer):
    email = serializers.EmailField()
