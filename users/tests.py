from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from wallet.models import Wallet

from .models import OTP, User


class UserModelTests(TestCase):

    def test_wallet_is_created_with_user(self):
        user = User.objects.create_user(
            username="testuser", password="password", phone_number="+919876543210"
        )
        self.assertTrue(Wallet.objects.filter(user=user).exists())
        self.assertEqual(user.wallet_balance, 0)
        self.assertEqual(str(user), "testuser")

    def test_blank_email_does_not_collide(self):
        """
        Two users without an email must both be storable even though email is unique.
        """
        User.objects.create_user(username="one", phone_number="+919876543211", email="")
        User.objects.create_user(username="two", phone_number="+919876543212", email="")
        self.assertEqual(User.objects.filter(email__isnull=True).count(), 2)

    def test_phone_number_is_normalised(self):
        user = User.objects.create_user(username="local", phone_number="9876543213")
        user.refresh_from_db()
        self.assertEqual(str(user.phone_number), "+919876543213")


class OTPModelTests(TestCase):

    def test_default_expiry_is_in_the_future(self):
        otp = OTP.objects.create(phone_number="+919876543210", email="a@example.com", code="123456")
        self.assertFalse(otp.is_expired)
        self.assertGreater(otp.expires_at, timezone.now() + timedelta(minutes=5))

    def test_past_expiry(self):
        otp = OTP.objects.create(
            phone_number="+919876543210",
            email="a@example.com",
            code="123456",
            expires_at=timezone.now() - timedelta(minutes=1),
        )
        self.assertTrue(otp.is_expired)
