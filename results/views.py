from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from common.throttles import MediumThrottle, RelaxedThrottle, StrictThrottle

from .serializers import (LeaderboardRowSerializer, ResultSerializer,
                          SubmitResultSerializer, VerifyResultSerializer)
from .services import (get_leaderboard, list_results, submit_result,
                       user_history, verify_result)


class ResultViewSet(viewsets.GenericViewSet):
    serializer_class = ResultSerializer

    def get_queryset(self):
        return list_results()

    def get_permissions(self):
        if self.action in ["list", "verify"]:
            return [IsAdminUser()]
        return [AllowAny()]

    def get_throttles(self):
        if self.action == "submit":
            self.throttle_classes = [StrictThrottle]
        elif self.action in ["leaderboard", "player_history"]:
            self.throttle_classes = [MediumThrottle]
        else:
            self.throttle_classes = [RelaxedThrottle]
        return super().get_throttles()

    def list(self, request):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "results": serializer.data})

    @extend_schema(request=SubmitResultSerializer, responses=ResultSerializer)
    @action(detail=False, methods=["post"])
    def submit(self, request):
        serializer = SubmitResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = submit_result(**serializer.validated_data)
        return Response(
            {
                "success": True,
                "message": "Result submitted successfully",
                "result": ResultSerializer(result).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=VerifyResultSerializer, responses=ResultSerializer)
    @action(detail=True, methods=["post"])
    def verify(self, request, pk=None):
        serializer = VerifyResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = verify_result(pk, serializer.validated_data["status"])
        return Response(
            {
                "success": True,
                "message": f"Result {result.status} successfully",
                "result": ResultSerializer(result).data,
            }
        )

    @extend_schema(responses=ResultSerializer(many=True))
    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>[^/.]+)")
    def player_history(self, request, user_id=None):
        results = user_history(user_id)
        return Response(
            {"success": True, "results": ResultSerializer(results, many=True).data}
        )

    @extend_schema(responses=LeaderboardRowSerializer(many=True))
    @action(detail=False, methods=["get"])
    def leaderboard(self, request):
        board = get_leaderboard()
        return Response({"success": True, **board})
