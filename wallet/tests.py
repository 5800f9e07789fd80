from decimal import Decimal

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import NoReverseMatch, reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import Transaction, Wallet
from .services import WalletService

User = get_user_model()


class WalletConstraintTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="walletuser", password="password", phone_number="+919876543210"
        )

    def test_balance_cannot_go_negative_in_database(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Wallet.objects.filter(user=self.user).update(balance=Decimal("-0.01"))

    def test_transaction_amount_must_be_positive(self):
        wallet = Wallet.objects.get(user=self.user)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Transaction.objects.create(
                    wallet=wallet,
                    amount=Decimal("0"),
                    transaction_type=Transaction.CREDIT,
                    balance_after=Decimal("0"),
                )


class WalletAPITests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(
            username="walletuser", password="password", phone_number="+919876543210"
        )
        WalletService(self.user).add_money(Decimal("200"))

    def test_balance_by_phone(self):
        url = reverse("wallet-balance", kwargs={"phone_number": "+919876543210"})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["wallet_balance"], Decimal("200.00"))

    def test_transactions_by_phone(self):
        url = reverse("wallet-transactions", kwargs={"phone_number": "+919876543210"})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["transactions"]), 1)
        self.assertEqual(response.data["transactions"][0]["description"], "Money added to wallet")


class WalletAdminTests(TestCase):
    def test_ledger_admins_cannot_import(self):
        for name in ("admin:wallet_wallet_import", "admin:wallet_transaction_import"):
            with self.assertRaises(NoReverseMatch):
                reverse(name)

    def test_ledger_rows_cannot_be_edited_or_deleted(self):
        transaction_admin = admin.site._registry[Transaction]
        wallet_admin = admin.site._registry[Wallet]
        self.assertFalse(transaction_admin.has_add_permission(None))
        self.assertFalse(transaction_admin.has_change_permission(None))
        self.assertFalse(transaction_admin.has_delete_permission(None))
        self.assertFalse(wallet_admin.has_delete_permission(None))
