from django.conf import settings
from django.db import models
from django.db.models import Q


class Wallet(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="wallet"
    )
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def latest_transactions(self):
        return self.transactions.order_by("-timestamp", "-id")[:10]

    def __str__(self):
        return f"{self.user.username} - {self.balance}"

    class Meta:
        app_label = "wallet"
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0), name="wallet_balance_non_negative"
            ),
        ]


class Transaction(models.Model):
    CREDIT = "credit"
    DEBIT = "debit"
    ENTRY_FEE = "entry_fee"
    PRIZE = "prize"
    TRANSACTION_TYPE_CHOICES = (
        (CREDIT, "Credit"),
        (DEBIT, "Debit"),
        (ENTRY_FEE, "Entry Fee"),
        (PRIZE, "Prize"),
    )
    # Types that add money to the wallet; everything else takes it out.
    INCOMING_TYPES = (CREDIT, PRIZE)

    wallet = models.ForeignKey(
        Wallet, on_delete=models.PROTECT, related_name="transactions"
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPE_CHOICES)
    description = models.CharField(max_length=255, blank=True)
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self):
        return f"{self.wallet.user.username} - {self.transaction_type} - {self.amount}"

    class Meta:
        app_label = "wallet"
        ordering = ["-timestamp", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0), name="transaction_amount_positive"
            ),
        ]
