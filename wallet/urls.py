from django.urls import path

from .views import (AddMoneyAPIView, TransactionListAPIView,
                    WalletBalanceAPIView, WithdrawMoneyAPIView)

urlpatterns = [
    path("add/", AddMoneyAPIView.as_view(), name="wallet-add"),
    path("withdraw/", WithdrawMoneyAPIView.as_view(), name="wallet-withdraw"),
    path(
        "transactions/<str:phone_number>/",
        TransactionListAPIView.as_view(),
        name="wallet-transactions",
    ),
    path("<str:phone_number>/", WalletBalanceAPIView.as_view(), name="wallet-balance"),
]
