import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction

from common.exceptions import (CapacityExceeded, Conflict, NotFound,
                               TransientStoreFailure)
from users.services import get_user_by_phone
from wallet.models import Transaction
from wallet.services import WalletService

from .models import Participant, Tournament

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinOutcome:
    already_joined: bool
    wallet_balance: Decimal
    player_count: int
    room_id: str
    room_password: str


def get_tournament(tournament_id, for_update=False):
    queryset = Tournament.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=tournament_id)
    except (Tournament.DoesNotExist, ValueError, TypeError):
        raise NotFound("Tournament not found")


def add_player(tournament: Tournament, user) -> Participant:
    """
    Appends ``user`` to the roster. The caller must hold the tournament row
    lock so the duplicate and capacity checks cannot race with another join.
    """
    if tournament.has_joined(user):
        raise Conflict("Already joined this tournament")
    if tournament.is_full:
        raise CapacityExceeded()
    return Participant.objects.create(
        tournament=tournament,
        user=user,
        username=user.username,
        phone_number=str(user.phone_number),
    )


def _outcome(tournament, user, already_joined):
    return JoinOutcome(
        already_joined=already_joined,
        wallet_balance=WalletService(user).get_balance(),
        player_count=tournament.player_count,
        room_id=tournament.room_id,
        room_password=tournament.room_password,
    )


def join_tournament(tournament_id, phone_number) -> JoinOutcome:
    """
    Charges the entry fee and puts the player on the roster as one unit.

    Joining twice is not an error: the second call reports ``already_joined``
    with the room credentials and charges nothing. Any failure after the
    debit rolls the debit back.
    """
    try:
        with transaction.atomic():
            user = get_user_by_phone(phone_number)
            # Tournament row first, then the wallet row inside debit().
            tournament = get_tournament(tournament_id, for_update=True)

            if tournament.has_joined(user):
                return _outcome(tournament, user, already_joined=True)

            if tournament.is_full:
                logger.warning(f"User {user.pk} rejected from full tournament {tournament.pk}")
                raise CapacityExceeded()

            if tournament.entry_fee > 0:
                WalletService(user).debit(
                    tournament.entry_fee,
                    f"Joined tournament: {tournament.title}",
                    transaction_type=Transaction.ENTRY_FEE,
                )

            add_player(tournament, user)
            outcome = _outcome(tournament, user, already_joined=False)
    except IntegrityError as exc:
        logger.warning(f"Duplicate join of tournament {tournament_id} by {phone_number}: {exc}")
        raise Conflict("Already joined this tournament") from exc
    except DatabaseError as exc:
        logger.error(f"Join of tournament {tournament_id} by {phone_number} aborted: {exc}")
        raise TransientStoreFailure() from exc

    logger.info(
        f"User {user.pk} joined tournament {tournament.pk} "
        f"({outcome.player_count}/{tournament.max_players})"
    )
    return outcome


def get_players(tournament_id):
    tournament = get_tournament(tournament_id)
    return tournament, tournament.players.all()
