from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone

from common.exceptions import Conflict, InvalidInput, NotFound
from users.models import OTP, User
from users.services import (login_or_register, resend_otp_service,
                            signup_service, verify_otp_service)
from wallet.models import Wallet

PHONE = "+919812345678"
EMAIL = "player@example.com"


def signup(**overrides):
    data = {
        "phone_number": PHONE,
        "username": "sniper",
        "email": EMAIL,
        "password": "s3cret-pass",
    }
    data.update(overrides)
    return signup_service(**data)


@pytest.mark.django_db
class TestLoginOrRegister:
    def test_first_login_creates_user_with_wallet(self):
        user = login_or_register(phone_number=PHONE)

        assert user.phone_number == PHONE
        assert user.username == "player_919812345678"
        assert not user.has_usable_password()
        assert Wallet.objects.filter(user=user).exists()

    def test_later_login_returns_same_user(self):
        first = login_or_register(phone_number=PHONE, username="sniper")
        second = login_or_register(phone_number=PHONE)

        assert first.pk == second.pk
        assert User.objects.count() == 1
        assert second.username == "sniper"

    def test_login_can_rename(self):
        login_or_register(phone_number=PHONE)
        user = login_or_register(phone_number=PHONE, username="renamed")
        assert user.username == "renamed"

    def test_username_of_another_player_is_rejected(self, user_factory):
        user_factory(username="taken")
        with pytest.raises(Conflict, match="Username already taken"):
            login_or_register(phone_number=PHONE, username="taken")

    def test_phone_number_is_required(self, db):
        with pytest.raises(InvalidInput, match="Phone number required"):
            login_or_register(phone_number="")


@pytest.mark.django_db
class TestOTPFlow:
    def test_signup_mails_a_six_digit_code(self):
        """
        GIVEN a new player
        WHEN they sign up
        THEN an OTP is stored and mailed, and no user exists yet
        """
        otp = signup()

        assert len(otp.code) == 6 and otp.code.isdigit()
        assert otp.expires_at > timezone.now()
        assert not User.objects.exists()
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "BattleX OTP Verification"
        assert mail.outbox[0].to == [EMAIL]
        assert f"Your OTP is: {otp.code}" in mail.outbox[0].body

    def test_signup_with_existing_user_is_rejected(self, user_factory):
        user_factory(email=EMAIL)
        with pytest.raises(Conflict, match="User already exists"):
            signup()

    def test_signup_requires_every_field(self, db):
        with pytest.raises(InvalidInput):
            signup(password="")

    def test_verify_creates_verified_user(self):
        otp = signup()

        user = verify_otp_service(code=otp.code, phone_number=PHONE)

        assert user.is_verified
        assert user.username == "sniper"
        assert user.email == EMAIL
        assert user.check_password("s3cret-pass")
        assert Wallet.objects.filter(user=user).exists()
        assert OTP.objects.get(pk=otp.pk).is_used

    def test_verify_by_email(self):
        otp = signup()
        user = verify_otp_service(code=otp.code, email=EMAIL.upper())
        assert user.phone_number == PHONE

    def test_code_cannot_be_reused(self):
        otp = signup()
        verify_otp_service(code=otp.code, phone_number=PHONE)

        with pytest.raises(InvalidInput, match="Invalid OTP"):
            verify_otp_service(code=otp.code, phone_number=PHONE)

    def test_wrong_code(self):
        otp = signup()
        wrong = "000000" if otp.code != "000000" else "111111"
        with pytest.raises(InvalidInput, match="Invalid OTP"):
            verify_otp_service(code=wrong, phone_number=PHONE)
        assert not User.objects.exists()

    def test_expired_code(self):
        otp = signup()
        OTP.objects.filter(pk=otp.pk).update(expires_at=timezone.now() - timedelta(seconds=1))

        with pytest.raises(InvalidInput, match="OTP has expired"):
            verify_otp_service(code=otp.code, phone_number=PHONE)
        assert not User.objects.exists()

    def test_verify_activates_user_who_logged_in_by_phone(self):
        existing = login_or_register(phone_number=PHONE)
        otp = signup(phone_number="+919812345679")
        # Point the pending signup at the phone-only account.
        OTP.objects.filter(pk=otp.pk).update(phone_number=PHONE)

        user = verify_otp_service(code=otp.code, phone_number=PHONE, password="new-pass-1")

        assert user.pk == existing.pk
        assert user.is_verified
        assert user.email == EMAIL
        assert user.check_password("new-pass-1")

    def test_resend_invalidates_previous_code(self):
        first = signup()

        second = resend_otp_service(email=EMAIL)

        assert OTP.objects.get(pk=first.pk).is_used
        assert second.phone_number == PHONE
        assert len(mail.outbox) == 2
        assert mail.outbox[1].subject == "BattleX OTP Resend"
        assert f"Your new OTP is: {second.code}" in mail.outbox[1].body

        user = verify_otp_service(code=second.code, email=EMAIL)
        assert user.username == "sniper"

    def test_resend_for_unknown_email(self, db):
        with pytest.raises(NotFound):
            resend_otp_service(email="ghost@example.com")

    def test_resend_for_verified_user(self):
        otp = signup()
        verify_otp_service(code=otp.code, phone_number=PHONE)

        with pytest.raises(Conflict, match="User already verified"):
            resend_otp_service(email=EMAIL)


@pytest.mark.django_db
def test_blank_email_is_stored_as_null(user_factory):
    first = user_factory(email="")
    second = user_factory(email="")

    assert User.objects.get(pk=first.pk).email is None
    assert User.objects.get(pk=second.pk).email is None
