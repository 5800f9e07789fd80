from django.contrib import admin
from django.urls import include, path

# Import drf-spectacular views
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    # --- Admin Panel ---
    path("admin/", admin.site.urls),

    # --- API Documentation (drf-spectacular) ---
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/schema/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),

    # --- App URLs ---
    path("api/", include("users.urls")),
    path("api/wallet/", include("wallet.urls")),
    path("api/", include("tournaments.urls")),
    path("api/", include("results.urls")),
]
