from phonenumber_field.serializerfields import PhoneNumberField
from rest_framework import serializers

from .models import Participant, Tournament


class ParticipantSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(source="user.id", read_only=True)

    class Meta:
        model = Participant
        fields = ("user_id", "username", "phone_number", "joined_at")
        read_only_fields = fields


class TournamentSerializer(serializers.ModelSerializer):
    """Room credentials are write-only; players learn them from the join response."""

    player_count = serializers.IntegerField(read_only=True)
    spots_left = serializers.IntegerField(read_only=True)
    rules = serializers.ListField(
        child=serializers.CharField(max_length=255), required=False
    )

    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "description",
            "game",
            "game_type",
            "date",
            "time",
            "entry_fee",
            "max_players",
            "prize_pool",
            "rules",
            "image",
            "room_id",
            "room_password",
            "player_count",
            "spots_left",
            "created_at",
        )
        read_only_fields = ("id", "created_at")
        extra_kwargs = {
            "room_id": {"write_only": True},
            "room_password": {"write_only": True},
        }


class JoinTournamentSerializer(serializers.Serializer):
    phone_number = PhoneNumberField()
