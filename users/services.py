import logging
import random
import string

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from django.db.models import Q

from common.exceptions import Conflict, InvalidInput, NotFound
from notifications.tasks import send_email_notification

from .models import OTP, User

logger = logging.getLogger(__name__)


def get_user_by_phone(phone_number):
    if not phone_number:
        raise InvalidInput("Phone number required")
    try:
        return User.objects.select_related("wallet").get(phone_number=phone_number)
    except User.DoesNotExist:
        raise NotFound("User not found")


def _default_username(phone_number):
    digits = "".join(ch for ch in str(phone_number) if ch.isdigit())
    return f"player_{digits}"


def _generate_code():
    return "".join(random.choices(string.digits, k=settings.OTP_LENGTH))


def login_or_register(phone_number=None, username=None):
    """
    Returns the user owning ``phone_number``, creating it on first login.
    A different ``username`` renames the existing user.
    """
    if not phone_number:
        raise InvalidInput("Phone number required")

    if username and User.objects.filter(username=username).exclude(
        phone_number=phone_number
    ).exists():
        raise Conflict("Username already taken")

    try:
        user, created = User.objects.get_or_create(
            phone_number=phone_number,
            defaults={"username": username or _default_username(phone_number)},
        )
    except IntegrityError:
        raise Conflict("Username already taken")

    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info("Registered user %s on first login", user.pk)
    elif username and username != user.username:
        user.username = username
        user.save(update_fields=["username"])

    return user


def _send_otp_email(otp, subject, message):
    send_email_notification.delay(
        subject=subject,
        message=message,
        recipient_list=[otp.email],
    )


def signup_service(phone_number=None, username=None, email=None, password=None):
    """
    Stores the pending signup on a fresh OTP and mails the code to ``email``.
    """
    if not all([phone_number, username, email, password]):
        raise InvalidInput("All fields are required")

    if User.objects.filter(
        Q(email__iexact=email) | Q(phone_number=phone_number) | Q(username=username)
    ).exists():
        raise Conflict("User already exists")

    with transaction.atomic():
        # Only the latest code for a contact stays valid.
        OTP.objects.filter(
            Q(email__iexact=email) | Q(phone_number=phone_number), is_used=False
        ).update(is_used=True)

        otp = OTP.objects.create(
            phone_number=phone_number,
            email=email.lower(),
            username=username,
            password=make_password(password),
            code=_generate_code(),
        )

    _send_otp_email(
        otp,
        subject="BattleX OTP Verification",
        message=f"Hello {username},\n\nYour OTP is: {otp.code}\n\nDo not share this with anyone.",
    )
    logger.info("Issued signup OTP %s", otp.pk)
    return otp


def resend_otp_service(email=None):
    if not email:
        raise InvalidInput("Email is required")

    if User.objects.filter(email__iexact=email, is_verified=True).exists():
        raise Conflict("User already verified")

    pending = OTP.objects.filter(email__iexact=email).first()
    if pending is None:
        raise NotFound("User not found")

    with transaction.atomic():
        OTP.objects.filter(email__iexact=email, is_used=False).update(is_used=True)
        otp = OTP.objects.create(
            phone_number=pending.phone_number,
            email=pending.email,
            username=pending.username,
            password=pending.password,
            code=_generate_code(),
        )

    _send_otp_email(
        otp,
        subject="BattleX OTP Resend",
        message=f"Your new OTP is: {otp.code}",
    )
    return otp


def verify_otp_service(code=None, phone_number=None, email=None, username=None, password=None):
    """
    Confirms a signup code and creates (or activates) the account it was
    issued for. ``username``/``password`` override the values given at signup.
    """
    if not code:
        raise InvalidInput("Code is required")
    if not phone_number and not email:
        raise InvalidInput("Phone number or email is required")

    lookup = Q(phone_number=phone_number) if phone_number else Q(email__iexact=email)

    with transaction.atomic():
        otp = (
            OTP.objects.select_for_update()
            .filter(lookup, code=code, is_used=False)
            .first()
        )
        if otp is None:
            raise InvalidInput("Invalid OTP")
        if otp.is_expired:
            raise InvalidInput("OTP has expired")

        otp.is_used = True
        otp.save(update_fields=["is_used"])

        user = User.objects.filter(phone_number=otp.phone_number).first()
        if user is None:
            user = User(
                phone_number=otp.phone_number,
                username=username or otp.username or _default_username(otp.phone_number),
                email=otp.email,
            )
            user.password = make_password(password) if password else otp.password
        else:
            if user.email and user.email.lower() != otp.email.lower():
                raise Conflict("Phone number is registered with another email")
            user.email = otp.email
            if password:
                user.set_password(password)
            if username:
                user.username = username
        user.is_verified = True

        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            raise Conflict("User already exists")

    logger.info("Verified user %s via OTP", user.pk)
    return user
