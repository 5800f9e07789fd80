from phonenumber_field.serializerfields import PhoneNumberField
from rest_framework import serializers

from .models import Transaction, Wallet


class TransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Transaction
        fields = (
            "id",
            "amount",
            "transaction_type",
            "description",
            "balance_after",
            "timestamp",
        )
        read_only_fields = fields


class WalletSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    phone_number = serializers.CharField(source="user.phone_number", read_only=True)

    class Meta:
        model = Wallet
        fields = ("username", "phone_number", "balance", "updated_at")
        read_only_fields = fields


class WalletAmountSerializer(serializers.Serializer):
    phone_number = PhoneNumberField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
