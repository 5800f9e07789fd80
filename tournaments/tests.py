from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import User
from wallet.services import WalletService

from .models import Participant, Tournament
from .services import join_tournament


class TournamentModelTests(TestCase):
    def setUp(self):
        self.tournament = Tournament.objects.create(
            title="Test Tournament", date="2026-11-01", entry_fee=Decimal("0"), max_players=3
        )

    def test_tournament_defaults(self):
        self.assertEqual(self.tournament.game, "Free Fire")
        self.assertEqual(self.tournament.rules, ["No emulators", "No teaming"])
        self.assertTrue(self.tournament.is_free)
        self.assertEqual(self.tournament.spots_left, 3)
        self.assertEqual(str(self.tournament), "Test Tournament")

    def test_spots_left_counts_roster(self):
        user = User.objects.create_user(username="p1", password="p", phone_number="+919876543101")
        Participant.objects.create(
            tournament=self.tournament, user=user, username=user.username, phone_number=str(user.phone_number)
        )
        self.assertEqual(self.tournament.player_count, 1)
        self.assertEqual(self.tournament.spots_left, 2)
        self.assertFalse(self.tournament.is_full)


class TournamentJoinAPITests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(
            username="joiner", password="password", phone_number="+919876543102"
        )
        WalletService(self.user).add_money(Decimal("30"))
        self.tournament = Tournament.objects.create(
            title="Weekend Cup", date="2026-11-01", entry_fee=Decimal("25"), max_players=10,
            room_id="ROOM-7", room_password="pw7",
        )

    def test_join_returns_room_details(self):
        url = reverse("tournament-join", kwargs={"pk": self.tournament.pk})
        response = self.client.post(url, {"phone_number": "+919876543102"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["room_id"], "ROOM-7")
        self.assertEqual(response.data["wallet_balance"], Decimal("5.00"))

    def test_players_endpoint_lists_joined_players(self):
        join_tournament(self.tournament.pk, "+919876543102")
        url = reverse("tournament-players", kwargs={"pk": self.tournament.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["tournament"], "Weekend Cup")
        self.assertEqual([p["username"] for p in response.data["players"]], ["joiner"])
