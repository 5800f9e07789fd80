from rest_framework import serializers

from .models import Result


class ResultSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    phone_number = serializers.CharField(source="user.phone_number", read_only=True)
    tournament_title = serializers.CharField(source="tournament.title", read_only=True)

    class Meta:
        model = Result
        fields = (
            "id",
            "user",
            "username",
            "phone_number",
            "tournament",
            "tournament_title",
            "kills",
            "rank",
            "prize",
            "screenshot_url",
            "status",
            "submitted_at",
            "verified_at",
        )
        read_only_fields = fields


class SubmitResultSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    tournament_id = serializers.IntegerField()
    kills = serializers.IntegerField(min_value=0)
    rank = serializers.IntegerField(min_value=0)
    prize = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )
    screenshot_url = serializers.CharField(
        max_length=500, required=False, allow_blank=True, default=""
    )


class VerifyResultSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=("approved", "rejected"))


class LeaderboardRowSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    username = serializers.CharField()
    phone_number = serializers.CharField()
    total_kills = serializers.IntegerField(required=False)
    total_prize = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
