from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import OperationalError

from common.exceptions import (CapacityExceeded, Conflict, InsufficientFunds,
                               NotFound, TransientStoreFailure)
from tournaments.models import Participant
from tournaments.services import add_player, join_tournament
from wallet.models import Transaction, Wallet


def balance_of(user):
    return Wallet.objects.get(user=user).balance


@pytest.mark.django_db
class TestJoinTournament:
    def test_paid_join_debits_fee_and_adds_player(self, user_factory, tournament):
        """
        GIVEN a player with 100 and a tournament with a fee of 10
        WHEN the player joins
        THEN 10 is debited, the player is on the roster and room details are returned
        """
        user = user_factory(balance="100")

        outcome = join_tournament(tournament.pk, str(user.phone_number))

        assert outcome.already_joined is False
        assert outcome.wallet_balance == Decimal("90.00")
        assert outcome.player_count == 1
        assert (outcome.room_id, outcome.room_password) == ("ROOM-1", "secret")
        assert balance_of(user) == Decimal("90.00")

        player = Participant.objects.get(tournament=tournament)
        assert player.user == user
        assert player.username == user.username
        assert player.phone_number == str(user.phone_number)

        tx = Transaction.objects.get(wallet__user=user)
        assert tx.transaction_type == Transaction.ENTRY_FEE
        assert tx.amount == Decimal("10.00")
        assert tx.description == f"Joined tournament: {tournament.title}"

    def test_second_join_is_idempotent(self, user_factory, tournament):
        user = user_factory(balance="100")
        join_tournament(tournament.pk, str(user.phone_number))

        outcome = join_tournament(tournament.pk, str(user.phone_number))

        assert outcome.already_joined is True
        assert outcome.wallet_balance == Decimal("90.00")
        assert outcome.room_id == "ROOM-1"
        assert Participant.objects.filter(tournament=tournament).count() == 1
        assert Transaction.objects.filter(wallet__user=user).count() == 1

    def test_full_tournament_rejects_without_charging(self, user_factory, tournament_factory):
        tournament = tournament_factory(max_players=1)
        first = user_factory(balance="100")
        second = user_factory(balance="100")
        join_tournament(tournament.pk, str(first.phone_number))

        with pytest.raises(CapacityExceeded, match="Tournament is full"):
            join_tournament(tournament.pk, str(second.phone_number))

        assert balance_of(second) == Decimal("100.00")
        assert not Transaction.objects.filter(wallet__user=second).exists()
        assert tournament.players.count() == 1

    def test_full_tournament_still_answers_existing_player(self, user_factory, tournament_factory):
        tournament = tournament_factory(max_players=1)
        user = user_factory(balance="100")
        join_tournament(tournament.pk, str(user.phone_number))

        outcome = join_tournament(tournament.pk, str(user.phone_number))
        assert outcome.already_joined is True

    def test_insufficient_balance_leaves_roster_untouched(self, user_factory, tournament):
        """
        GIVEN a player with 5 and a tournament with a fee of 10
        WHEN the player joins
        THEN the join fails and neither the wallet nor the roster changes
        """
        user = user_factory(balance="5")

        with pytest.raises(InsufficientFunds, match="Insufficient wallet balance"):
            join_tournament(tournament.pk, str(user.phone_number))

        assert balance_of(user) == Decimal("5.00")
        assert not tournament.players.exists()
        assert not Transaction.objects.filter(wallet__user=user).exists()

    def test_free_tournament_writes_no_transaction(self, user_factory, tournament_factory):
        tournament = tournament_factory(entry_fee=Decimal("0"))
        user = user_factory()

        outcome = join_tournament(tournament.pk, str(user.phone_number))

        assert outcome.wallet_balance == Decimal("0.00")
        assert tournament.players.count() == 1
        assert not Transaction.objects.filter(wallet__user=user).exists()

    def test_unknown_tournament(self, user_factory):
        user = user_factory(balance="100")
        with pytest.raises(NotFound, match="Tournament not found"):
            join_tournament(999999, str(user.phone_number))

    def test_unknown_user(self, tournament):
        with pytest.raises(NotFound, match="User not found"):
            join_tournament(tournament.pk, "+919111111111")

    def test_store_failure_after_debit_rolls_back(self, user_factory, tournament):
        """
        GIVEN the roster write fails after the fee was debited
        THEN the debit is rolled back and the failure is reported as retryable
        """
        user = user_factory(balance="100")

        with patch("tournaments.services.add_player", side_effect=OperationalError("lock timeout")):
            with pytest.raises(TransientStoreFailure):
                join_tournament(tournament.pk, str(user.phone_number))

        assert balance_of(user) == Decimal("100.00")
        assert not Transaction.objects.filter(wallet__user=user).exists()
        assert not tournament.players.exists()


@pytest.mark.django_db
class TestRoster:
    def test_add_player_rejects_duplicates(self, user_factory, tournament):
        user = user_factory()
        add_player(tournament, user)

        with pytest.raises(Conflict, match="Already joined this tournament"):
            add_player(tournament, user)

    def test_add_player_rejects_when_full(self, user_factory, tournament_factory):
        tournament = tournament_factory(max_players=1)
        add_player(tournament, user_factory())

        with pytest.raises(CapacityExceeded):
            add_player(tournament, user_factory())

    def test_roster_keeps_join_order(self, user_factory, tournament_factory):
        tournament = tournament_factory(max_players=3)
        users = [user_factory() for _ in range(3)]
        for user in users:
            add_player(tournament, user)

        assert [p.user for p in tournament.players.all()] == users
        assert tournament.is_full
        assert tournament.spots_left == 0

    def test_room_credentials_only_for_joined_players(self, user_factory, tournament):
        joined = user_factory()
        outsider = user_factory()
        add_player(tournament, joined)

        assert tournament.has_joined(joined)
        assert not tournament.has_joined(outsider)
        assert tournament.room_credentials(joined) == ("ROOM-1", "secret")
        assert tournament.room_credentials(outsider) is None

    def test_default_rules(self, tournament):
        assert tournament.rules == ["No emulators", "No teaming"]
        assert tournament.game == "Free Fire"
        assert tournament.game_type == "BR"
