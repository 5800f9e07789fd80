import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import tournaments.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200, unique=True)),
                ("description", models.TextField(blank=True)),
                ("game", models.CharField(default="Free Fire", max_length=100)),
                ("game_type", models.CharField(choices=[("BR", "Battle Royale"), ("CS", "Clash Squad")], db_index=True, default="BR", max_length=2)),
                ("date", models.DateField(db_index=True)),
                ("time", models.CharField(blank=True, max_length=20)),
                ("entry_fee", models.DecimalField(decimal_places=2, default=0, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("max_players", models.PositiveIntegerField(default=100, validators=[django.core.validators.MinValueValidator(1)])),
                ("room_id", models.CharField(blank=True, max_length=100)),
                ("room_password", models.CharField(blank=True, max_length=100)),
                ("prize_pool", models.DecimalField(decimal_places=2, default=0, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("rules", models.JSONField(blank=True, default=tournaments.models.default_rules)),
                ("image", models.CharField(blank=True, help_text="Image name or URL; files are not stored.", max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-date", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("username", models.CharField(max_length=150)),
                ("phone_number", models.CharField(max_length=128)),
                ("joined_at", models.DateTimeField(auto_now_add=True)),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="players", to="tournaments.tournament")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="tournament_entries", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["joined_at", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("tournament", "user"), name="unique_tournament_player"),
                ],
            },
        ),
        migrations.AddField(
            model_name="tournament",
            name="participants",
            field=models.ManyToManyField(blank=True, related_name="tournaments", through="tournaments.Participant", to=settings.AUTH_USER_MODEL),
        ),
        migrations.AddConstraint(
            model_name="tournament",
            constraint=models.CheckConstraint(condition=models.Q(("entry_fee__gte", 0)), name="tournament_entry_fee_non_negative"),
        ),
        migrations.AddConstraint(
            model_name="tournament",
            constraint=models.CheckConstraint(condition=models.Q(("prize_pool__gte", 0)), name="tournament_prize_pool_non_negative"),
        ),
        migrations.AddConstraint(
            model_name="tournament",
            constraint=models.CheckConstraint(condition=models.Q(("max_players__gte", 1)), name="tournament_max_players_positive"),
        ),
    ]
