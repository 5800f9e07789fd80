from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone
from phonenumber_field.modelfields import PhoneNumberField


class User(AbstractUser):
    phone_number = PhoneNumberField(unique=True)
    email = models.EmailField("email address", unique=True, null=True, blank=True)
    is_verified = models.BooleanField(default=False)

    REQUIRED_FIELDS = ["phone_number"]

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        # Blank emails are stored as NULL so the unique index ignores them.
        if not self.email:
            self.email = None
        super().save(*args, **kwargs)

    @property
    def wallet_balance(self):
        wallet = getattr(self, "wallet", None)
        return wallet.balance if wallet is not None else None


def default_otp_expiry():
    return timezone.now() + timedelta(minutes=settings.OTP_EXPIRY_MINUTES)


class OTP(models.Model):
    """
    A code mailed during signup. The pending account details ride along on
    the row so the user is only created once the code is confirmed.
    """

    phone_number = PhoneNumberField(db_index=True)
    email = models.EmailField(db_index=True)
    code = models.CharField(max_length=10)
    username = models.CharField(max_length=150, blank=True)
    password = models.CharField(max_length=128, blank=True)
    expires_at = models.DateTimeField(default=default_otp_expiry)
    is_used = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.email} - {self.code}"

    @property
    def is_expired(self):
        return timezone.now() >= self.expires_at
