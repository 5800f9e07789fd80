from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import TournamentViewSet

router = SimpleRouter()
router.register(r"tournaments", TournamentViewSet, basename="tournament")

urlpatterns = [
    path("", include(router.urls)),
]
