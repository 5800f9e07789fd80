from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Result(models.Model):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    STATUS_CHOICES = (
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="results"
    )
    tournament = models.ForeignKey(
        "tournaments.Tournament", on_delete=models.PROTECT, related_name="results"
    )
    kills = models.PositiveIntegerField(default=0)
    rank = models.PositiveIntegerField(default=0)
    prize = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    screenshot_url = models.CharField(max_length=500, blank=True)
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=PENDING, db_index=True
    )
    submitted_at = models.DateTimeField(auto_now_add=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-submitted_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "tournament"], name="unique_result_per_player"
            ),
            models.CheckConstraint(
                condition=Q(prize__gte=0), name="result_prize_non_negative"
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.tournament} ({self.status})"

    @property
    def is_final(self):
        return self.status != self.PENDING
