import logging

from drf_spectacular.utils import extend_schema
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttles import MediumThrottle, StrictThrottle

from .serializers import (TransactionSerializer, WalletAmountSerializer,
                          WalletSerializer)
from .services import WalletService

logger = logging.getLogger(__name__)


class WalletBalanceAPIView(APIView):
    throttle_classes = [MediumThrottle]

    @extend_schema(responses=WalletSerializer)
    def get(self, request, phone_number):
        service = WalletService.for_phone(phone_number)
        wallet = service.get_wallet()
        return Response(
            {
                "success": True,
                "wallet_balance": wallet.balance,
                "wallet": WalletSerializer(wallet).data,
            }
        )


class AddMoneyAPIView(generics.GenericAPIView):
    serializer_class = WalletAmountSerializer
    throttle_classes = [StrictThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = WalletService.for_phone(serializer.validated_data["phone_number"])
        new_balance = service.add_money(serializer.validated_data["amount"])
        return Response(
            {
                "success": True,
                "message": "Money added to wallet",
                "new_balance": new_balance,
            }
        )


class WithdrawMoneyAPIView(generics.GenericAPIView):
    serializer_class = WalletAmountSerializer
    throttle_classes = [StrictThrottle]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = WalletService.for_phone(serializer.validated_data["phone_number"])
        new_balance = service.withdraw_money(serializer.validated_data["amount"])
        return Response(
            {
                "success": True,
                "message": "Money withdrawn from wallet",
                "new_balance": new_balance,
            }
        )


class TransactionListAPIView(APIView):
    throttle_classes = [MediumThrottle]

    @extend_schema(responses=TransactionSerializer(many=True))
    def get(self, request, phone_number):
        service = WalletService.for_phone(phone_number)
        transactions = service.get_transactions()
        return Response(
            {
                "success": True,
                "transactions": TransactionSerializer(transactions, many=True).data,
            }
        )
