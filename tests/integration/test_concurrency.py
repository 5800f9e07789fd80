"""
Races between concurrent joins and verifications.

The first group only checks what must hold on any backend: every racing call
either succeeds or fails with a business error, and money moves at most once.
The second group pins the exact winner and needs real row locks, so it only
runs against PostgreSQL.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import connection, connections

from common.exceptions import (ApplicationError, CapacityExceeded, Conflict,
                               TransientStoreFailure)
from results.services import submit_result, verify_result
from tournaments.models import Participant
from tournaments.services import JoinOutcome, join_tournament
from wallet.models import Transaction, Wallet

pytestmark = pytest.mark.django_db(transaction=True)

needs_row_locks = pytest.mark.skipif(
    connection.vendor != "postgresql", reason="row locks need PostgreSQL"
)

RACE_ERRORS = (CapacityExceeded, Conflict, TransientStoreFailure)


def run_concurrently(func, args_list):
    def call(args):
        try:
            return func(*args)
        except ApplicationError as exc:
            return exc
        finally:
            connections.close_all()

    with ThreadPoolExecutor(max_workers=len(args_list)) as pool:
        return list(pool.map(call, args_list))


def assert_ledger_matches(user):
    wallet = Wallet.objects.get(user=user)
    total = Decimal("0")
    for tx in wallet.transactions.all():
        if tx.transaction_type in Transaction.INCOMING_TYPES:
            total += tx.amount
        else:
            total -= tx.amount
    assert wallet.balance == Decimal("100.00") + total


def test_racing_joins_respect_capacity(user_factory, tournament_factory):
    """
    GIVEN one seat and three funded players
    WHEN all of them join at once
    THEN at most one takes the seat and only roster members are charged
    """
    tournament = tournament_factory(max_players=1)
    players = [user_factory(balance="100") for _ in range(3)]

    outcomes = run_concurrently(
        join_tournament, [(tournament.pk, str(p.phone_number)) for p in players]
    )

    assert all(isinstance(o, (JoinOutcome,) + RACE_ERRORS) for o in outcomes)
    assert Participant.objects.filter(tournament=tournament).count() <= 1
    assert sum(isinstance(o, JoinOutcome) for o in outcomes) <= 1
    for player in players:
        charged = Transaction.objects.filter(wallet__user=player).count()
        on_roster = Participant.objects.filter(tournament=tournament, user=player).count()
        assert charged == on_roster
        assert_ledger_matches(player)


def test_racing_double_join_charges_at_most_once(user_factory, tournament):
    player = user_factory(balance="100")

    outcomes = run_concurrently(
        join_tournament, [(tournament.pk, str(player.phone_number))] * 3
    )

    assert all(isinstance(o, (JoinOutcome,) + RACE_ERRORS) for o in outcomes)
    on_roster = Participant.objects.filter(tournament=tournament, user=player).count()
    assert on_roster <= 1
    assert Transaction.objects.filter(wallet__user=player).count() == on_roster
    assert_ledger_matches(player)


def test_racing_approvals_pay_exactly_once(user_factory, tournament):
    """
    GIVEN a pending result with a prize
    WHEN it is approved several times at once, then retried if every attempt
        hit a transient failure
    THEN the prize lands in the wallet exactly once
    """
    player = user_factory(balance="100")
    result = submit_result(player.pk, tournament.pk, kills=3, rank=1, prize=50)

    outcomes = run_concurrently(verify_result, [(result.pk, "approved")] * 3)

    assert all(not isinstance(o, ApplicationError) or isinstance(o, RACE_ERRORS) for o in outcomes)
    assert sum(not isinstance(o, ApplicationError) for o in outcomes) <= 1
    if all(isinstance(o, TransientStoreFailure) for o in outcomes):
        verify_result(result.pk, "approved")

    assert Transaction.objects.filter(wallet__user=player).count() == 1
    assert Wallet.objects.get(user=player).balance == Decimal("150.00")
    assert_ledger_matches(player)


@needs_row_locks
def test_concurrent_joins_never_overfill(user_factory, tournament_factory):
    """
    GIVEN one seat left and two funded players
    WHEN both join at the same time
    THEN exactly one gets the seat and only that player is charged
    """
    tournament = tournament_factory(max_players=1)
    players = [user_factory(balance="100"), user_factory(balance="100")]

    outcomes = run_concurrently(
        join_tournament, [(tournament.pk, str(p.phone_number)) for p in players]
    )

    assert sum(isinstance(o, CapacityExceeded) for o in outcomes) == 1
    assert tournament.players.count() == 1
    winner = tournament.players.get().user
    for player in players:
        expected = Decimal("90.00") if player == winner else Decimal("100.00")
        assert Wallet.objects.get(user=player).balance == expected


@needs_row_locks
def test_same_player_joining_twice_at_once_is_charged_once(user_factory, tournament):
    player = user_factory(balance="100")

    outcomes = run_concurrently(
        join_tournament, [(tournament.pk, str(player.phone_number))] * 2
    )

    assert sorted(o.already_joined for o in outcomes) == [False, True]
    assert Wallet.objects.get(user=player).balance == Decimal("90.00")
    assert Transaction.objects.filter(wallet__user=player).count() == 1


@needs_row_locks
def test_concurrent_spending_never_goes_negative(user_factory, tournament_factory):
    """
    GIVEN a player who can afford exactly one of two tournaments
    WHEN they join both at the same time
    THEN one join fails and the balance ends at zero
    """
    player = user_factory(balance="10")
    cups = [tournament_factory(), tournament_factory()]

    outcomes = run_concurrently(
        join_tournament, [(cup.pk, str(player.phone_number)) for cup in cups]
    )

    assert sum(isinstance(o, ApplicationError) for o in outcomes) == 1
    assert Wallet.objects.get(user=player).balance == Decimal("0.00")


@needs_row_locks
def test_concurrent_approvals_pay_once(user_factory, tournament):
    player = user_factory()
    result = submit_result(player.pk, tournament.pk, kills=3, rank=1, prize=50)

    outcomes = run_concurrently(verify_result, [(result.pk, "approved")] * 2)

    assert sum(isinstance(o, Conflict) for o in outcomes) == 1
    assert Wallet.objects.get(user=player).balance == Decimal("50.00")
    assert Transaction.objects.filter(wallet__user=player).count() == 1
