from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import NoReverseMatch, reverse

from tournaments.models import Tournament
from users.models import User

from .models import Result


class ResultModelTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="shooter", password="password", phone_number="+919876543201"
        )
        self.tournament = Tournament.objects.create(title="Result Cup", date="2026-11-01")

    def test_new_result_is_pending(self):
        result = Result.objects.create(user=self.user, tournament=self.tournament, kills=4, rank=2)
        self.assertEqual(result.status, Result.PENDING)
        self.assertFalse(result.is_final)
        self.assertEqual(result.prize, 0)

    def test_one_result_per_player_and_tournament(self):
        Result.objects.create(user=self.user, tournament=self.tournament, kills=4, rank=2)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Result.objects.create(user=self.user, tournament=self.tournament, kills=1, rank=9)

    def test_prize_cannot_be_negative(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Result.objects.create(
                    user=self.user, tournament=self.tournament, kills=1, rank=1, prize=Decimal("-1")
                )


class ResultAdminTests(TestCase):
    def test_results_cannot_be_imported(self):
        with self.assertRaises(NoReverseMatch):
            reverse("admin:results_result_import")
