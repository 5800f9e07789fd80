import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone

from common.exceptions import (Conflict, InvalidInput, NotFound,
                               TransientStoreFailure)
from tournaments.services import get_tournament
from users.models import User
from wallet.models import Transaction
from wallet.services import WalletService, to_amount

from .models import Result

logger = logging.getLogger(__name__)


def _get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound("User not found")


def _non_negative_int(value, field):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInput(f"{field} must be a non-negative integer")
    return value


def submit_result(user_id, tournament_id, kills, rank, screenshot_url="", prize=0) -> Result:
    kills = _non_negative_int(kills, "kills")
    rank = _non_negative_int(rank, "rank")
    prize = to_amount(prize)
    if prize < 0:
        raise InvalidInput("prize must not be negative")

    user = _get_user(user_id)
    tournament = get_tournament(tournament_id)

    try:
        with transaction.atomic():
            result = Result.objects.create(
                user=user,
                tournament=tournament,
                kills=kills,
                rank=rank,
                prize=prize,
                screenshot_url=screenshot_url or "",
            )
    except IntegrityError as exc:
        raise Conflict("Result already submitted") from exc
    except DatabaseError as exc:
        logger.error(f"Result submission by user {user.pk} aborted: {exc}")
        raise TransientStoreFailure() from exc

    logger.info(f"Result {result.pk} submitted by user {user.pk} for tournament {tournament.pk}")
    return result


def verify_result(result_id, status) -> Result:
    """
    Moves a pending result to approved or rejected. Approval pays the
    result's prize into the player's wallet in the same transaction, so the
    prize is credited exactly once however many times this is called.
    """
    if status not in (Result.APPROVED, Result.REJECTED):
        raise InvalidInput("Status must be approved or rejected")

    try:
        with transaction.atomic():
            try:
                result = Result.objects.select_for_update().get(pk=result_id)
            except (Result.DoesNotExist, ValueError, TypeError):
                raise NotFound("Result not found")

            if result.is_final:
                logger.warning(f"Result {result.pk} is already {result.status}")
                raise Conflict(f"Result already {result.status}")

            if status == Result.APPROVED:
                tournament = result.tournament
                WalletService(result.user).credit(
                    result.prize,
                    f"Prize for {tournament.title}",
                    transaction_type=Transaction.PRIZE,
                )

            result.status = status
            result.verified_at = timezone.now()
            result.save(update_fields=["status", "verified_at"])
    except DatabaseError as exc:
        logger.error(f"Verification of result {result_id} aborted: {exc}")
        raise TransientStoreFailure() from exc

    logger.info(f"Result {result.pk} {status}")
    return result


def list_results():
    return Result.objects.select_related("user", "tournament")


def user_history(user_id):
    user = _get_user(user_id)
    return Result.objects.filter(user=user).select_related("tournament")


def _leaderboard_row(row, metric):
    return {
        "user_id": row["user_id"],
        "username": row["user__username"],
        "phone_number": str(row["user__phone_number"]),
        metric: row[metric],
    }


def get_leaderboard(limit=None):
    """
    Top players by total kills over every submitted result, and by prize
    money actually paid out (approved results only).
    """
    limit = limit or settings.LEADERBOARD_SIZE
    columns = ("user_id", "user__username", "user__phone_number")

    by_kills = (
        Result.objects.values(*columns)
        .annotate(total_kills=Sum("kills"), matches=Count("id"))
        .order_by("-total_kills", "user_id")[:limit]
    )
    by_prize = (
        Result.objects.filter(status=Result.APPROVED)
        .values(*columns)
        .annotate(total_prize=Sum("prize"))
        .order_by("-total_prize", "user_id")[:limit]
    )

    return {
        "top_killers": [_leaderboard_row(row, "total_kills") for row in by_kills],
        "top_earners": [_leaderboard_row(row, "total_prize") for row in by_prize],
    }
