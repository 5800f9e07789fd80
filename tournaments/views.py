from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from common.throttles import MediumThrottle, RelaxedThrottle, StrictThrottle

from .filters import TournamentFilter
from .models import Tournament
from .serializers import (JoinTournamentSerializer, ParticipantSerializer,
                          TournamentSerializer)
from .services import get_players, join_tournament


class TournamentViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Tournaments are created by admins; anyone can browse them and join by
    phone number.
    """

    queryset = Tournament.objects.annotate(joined_count=Count("players"))
    serializer_class = TournamentSerializer
    filterset_class = TournamentFilter

    def get_permissions(self):
        if self.action == "create":
            return [IsAdminUser()]
        return [AllowAny()]

    def get_throttles(self):
        if self.action == "join":
            self.throttle_classes = [StrictThrottle]
        elif self.action in ["list", "retrieve", "players"]:
            self.throttle_classes = [MediumThrottle]
        else:
            self.throttle_classes = [RelaxedThrottle]
        return super().get_throttles()

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({"success": True, "tournaments": serializer.data})

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({"success": True, "tournament": serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {
                "success": True,
                "message": "Tournament created successfully",
                "tournament": serializer.data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=JoinTournamentSerializer)
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        serializer = JoinTournamentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = join_tournament(pk, serializer.validated_data["phone_number"])
        message = (
            "Already joined this tournament"
            if outcome.already_joined
            else "Successfully joined tournament"
        )
        return Response(
            {
                "success": True,
                "message": message,
                "already_joined": outcome.already_joined,
                "wallet_balance": outcome.wallet_balance,
                "player_count": outcome.player_count,
                "room_id": outcome.room_id,
                "room_password": outcome.room_password,
            }
        )

    @extend_schema(responses=ParticipantSerializer(many=True))
    @action(detail=True, methods=["get"])
    def players(self, request, pk=None):
        tournament, players = get_players(pk)
        return Response(
            {
                "success": True,
                "tournament": tournament.title,
                "players": ParticipantSerializer(players, many=True).data,
            }
        )
