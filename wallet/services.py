import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import DataError, DatabaseError, transaction

from common.exceptions import (InsufficientFunds, InvalidInput, NotFound,
                               TransientStoreFailure)
from users.services import get_user_by_phone

from .models import Transaction, Wallet

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _column_limit(model, name):
    field = model._meta.get_field(name)
    return Decimal(10) ** (field.max_digits - field.decimal_places)


# Exclusive upper bounds of the amount and balance columns.
AMOUNT_LIMIT = _column_limit(Transaction, "amount")
BALANCE_LIMIT = _column_limit(Wallet, "balance")


def to_amount(value) -> Decimal:
    """Coerces ``value`` to a two-place Decimal, rejecting non-numbers."""
    if isinstance(value, bool):
        raise InvalidInput("Amount must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInput("Amount must be a number")
    if not amount.is_finite():
        raise InvalidInput("Amount must be a number")
    try:
        amount = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidInput("Amount is too large")
    if abs(amount) >= AMOUNT_LIMIT:
        raise InvalidInput("Amount is too large")
    return amount


class WalletService:
    """
    The only writer of wallet balances and ledger rows.

    Every balance change locks the wallet row and appends its Transaction
    inside the same atomic block, so callers that already hold a transaction
    (the tournament and result coordinators) get the debit or credit rolled
    back together with their own writes.
    """

    def __init__(self, user):
        self.user = user

    @classmethod
    def for_phone(cls, phone_number):
        return cls(get_user_by_phone(phone_number))

    def get_wallet(self):
        try:
            return Wallet.objects.get(user=self.user)
        except Wallet.DoesNotExist:
            raise NotFound("Wallet not found")

    def get_balance(self) -> Decimal:
        return self.get_wallet().balance

    def get_transactions(self):
        return self.get_wallet().transactions.all()

    def debit(self, amount, reason, transaction_type=Transaction.DEBIT) -> Decimal:
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidInput("Amount must be positive")
        if amount == 0:
            return self.get_balance()
        tx = self.process_transaction(self.user, amount, transaction_type, reason)
        return tx.balance_after

    def credit(self, amount, reason, transaction_type=Transaction.CREDIT) -> Decimal:
        amount = to_amount(amount)
        if amount < 0:
            raise InvalidInput("Amount must be positive")
        if amount == 0:
            # Nothing moved, so nothing is recorded.
            return self.get_balance()
        tx = self.process_transaction(self.user, amount, transaction_type, reason)
        return tx.balance_after

    def add_money(self, amount) -> Decimal:
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidInput("Amount must be positive")
        return self.credit(amount, "Money added to wallet", Transaction.CREDIT)

    def withdraw_money(self, amount) -> Decimal:
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidInput("Amount must be positive")
        minimum = settings.MINIMUM_WITHDRAWAL_AMOUNT
        if amount < minimum:
            raise InvalidInput(f"Minimum withdrawal amount is ₹{minimum:,.0f}")
        return self.debit(amount, "Money withdrawn from wallet", Transaction.DEBIT)

    @staticmethod
    def process_transaction(user, amount: Decimal, transaction_type: str, description: str = "") -> Transaction:
        is_debit = transaction_type not in Transaction.INCOMING_TYPES

        try:
            with transaction.atomic():
                try:
                    wallet = Wallet.objects.select_for_update().get(user=user)
                except Wallet.DoesNotExist:
                    raise NotFound("Wallet not found")

                if is_debit:
                    if wallet.balance < amount:
                        logger.warning(
                            f"Rejected {transaction_type} of {amount} for user {user.pk}: "
                            f"balance {wallet.balance}"
                        )
                        raise InsufficientFunds()
                    wallet.balance -= amount
                else:
                    if wallet.balance + amount >= BALANCE_LIMIT:
                        logger.warning(
                            f"Rejected {transaction_type} of {amount} for user {user.pk}: "
                            f"balance {wallet.balance} would exceed the wallet limit"
                        )
                        raise InvalidInput("Wallet balance limit exceeded")
                    wallet.balance += amount
                wallet.save(update_fields=["balance", "updated_at"])

                tx = Transaction.objects.create(
                    wallet=wallet,
                    amount=amount,
                    transaction_type=transaction_type,
                    description=description,
                    balance_after=wallet.balance,
                )
        except DataError as exc:
            logger.error(f"Wallet update for user {user.pk} rejected: {exc}")
            raise InvalidInput("Amount out of range") from exc
        except DatabaseError as exc:
            logger.error(f"Wallet update for user {user.pk} aborted: {exc}")
            raise TransientStoreFailure() from exc

        logger.info(
            f"{transaction_type} of {amount} applied to wallet {wallet.pk}, "
            f"balance now {wallet.balance}"
        )
        return tx
