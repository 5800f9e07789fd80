from smtplib import SMTPException
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings

from .tasks import send_email_notification


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    EMAIL_HOST_USER="battlex@example.com",
)
class SendEmailNotificationTests(TestCase):

    def test_sends_plain_text_email(self):
        send_email_notification("BattleX OTP Verification", "Your OTP is: 123456", ["player@example.com"])

        self.assertEqual(len(mail.outbox), 1)
        email = mail.outbox[0]
        self.assertEqual(email.subject, "BattleX OTP Verification")
        self.assertEqual(email.to, ["player@example.com"])
        self.assertEqual(email.from_email, "battlex@example.com")
        self.assertIn("123456", email.body)

    def test_single_recipient_is_wrapped_in_list(self):
        send_email_notification("Subject", "Body", "player@example.com")

        self.assertEqual(mail.outbox[0].to, ["player@example.com"])

    @patch("notifications.tasks.send_mail", side_effect=SMTPException("down"))
    def test_mail_errors_are_raised_for_retry(self, mock_send_mail):
        with self.assertRaises(SMTPException):
            send_email_notification("Subject", "Body", ["player@example.com"])
        mock_send_mail.assert_called_once()
