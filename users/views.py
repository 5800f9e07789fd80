from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from common.throttles import StrictThrottle, VeryStrictThrottle

from .serializers import (LoginSerializer, ResendOTPSerializer,
                          SignupSerializer, UserSerializer,
                          VerifyOTPSerializer)
from .services import (login_or_register, resend_otp_service, signup_service,
                       verify_otp_service)


class AuthViewSet(viewsets.GenericViewSet):
    """
    Phone-number login plus the email OTP signup flow.
    """

    permission_classes = [AllowAny]
    serializer_class = UserSerializer

    def get_throttles(self):
        if self.action in ["signup", "verify_otp", "resend_otp"]:
            self.throttle_classes = [VeryStrictThrottle]
        else:
            self.throttle_classes = [StrictThrottle]
        return super().get_throttles()

    @extend_schema(request=LoginSerializer, responses=UserSerializer)
    @action(detail=False, methods=["post"])
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = login_or_register(**serializer.validated_data)
        return Response(
            {
                "success": True,
                "message": "Login successful",
                "user": UserSerializer(user).data,
            }
        )

    @extend_schema(request=SignupSerializer)
    @action(detail=False, methods=["post"])
    def signup(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        otp = signup_service(**serializer.validated_data)
        return Response(
            {
                "success": True,
                "message": "OTP sent to your email",
                "email": otp.email,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=VerifyOTPSerializer, responses=UserSerializer)
    @action(detail=False, methods=["post"], url_path="verify-otp")
    def verify_otp(self, request):
        serializer = VerifyOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = verify_otp_service(**serializer.validated_data)
        return Response(
            {
                "success": True,
                "message": "OTP verified successfully",
                "user": UserSerializer(user).data,
            }
        )

    @extend_schema(request=ResendOTPSerializer)
    @action(detail=False, methods=["post"], url_path="resend-otp")
    def resend_otp(self, request):
        serializer = ResendOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resend_otp_service(**serializer.validated_data)
        return Response({"success": True, "message": "OTP resent successfully"})
