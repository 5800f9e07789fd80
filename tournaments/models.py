from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


def default_rules():
    return ["No emulators", "No teaming"]


class Tournament(models.Model):
    GAME_TYPE_CHOICES = (
        ("BR", "Battle Royale"),
        ("CS", "Clash Squad"),
    )

    title = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    game = models.CharField(max_length=100, default="Free Fire")
    game_type = models.CharField(
        max_length=2, choices=GAME_TYPE_CHOICES, default="BR", db_index=True
    )
    date = models.DateField(db_index=True)
    time = models.CharField(max_length=20, blank=True)
    entry_fee = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    max_players = models.PositiveIntegerField(
        default=100, validators=[MinValueValidator(1)]
    )
    room_id = models.CharField(max_length=100, blank=True)
    room_password = models.CharField(max_length=100, blank=True)
    prize_pool = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    rules = models.JSONField(default=default_rules, blank=True)
    image = models.CharField(
        max_length=500, blank=True, help_text="Image name or URL; files are not stored."
    )
    participants = models.ManyToManyField(
        "users.User", through="Participant", related_name="tournaments", blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(entry_fee__gte=0), name="tournament_entry_fee_non_negative"
            ),
            models.CheckConstraint(
                condition=Q(prize_pool__gte=0), name="tournament_prize_pool_non_negative"
            ),
            models.CheckConstraint(
                condition=Q(max_players__gte=1), name="tournament_max_players_positive"
            ),
        ]

    def __str__(self):
        return self.title

    @property
    def player_count(self):
        # Listing querysets annotate ``joined_count`` to skip the per-row COUNT.
        annotated = getattr(self, "joined_count", None)
        if annotated is not None:
            return annotated
        return self.players.count()

    @property
    def spots_left(self):
        return max(self.max_players - self.player_count, 0)

    @property
    def is_full(self):
        return self.player_count >= self.max_players

    @property
    def is_free(self):
        return self.entry_fee == 0

    def has_joined(self, user):
        return self.players.filter(user=user).exists()

    def room_credentials(self, user):
        """Room id and password, revealed only to players on the roster."""
        if not self.has_joined(user):
            return None
        return self.room_id, self.room_password


class Participant(models.Model):
    """One roster entry; username and phone are copied at join time."""

    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="players"
    )
    user = models.ForeignKey(
        "users.User", on_delete=models.PROTECT, related_name="tournament_entries"
    )
    username = models.CharField(max_length=150)
    phone_number = models.CharField(max_length=128)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["tournament", "user"], name="unique_tournament_player"
            ),
        ]

    def __str__(self):
        return f"{self.username} in {self.tournament}"
