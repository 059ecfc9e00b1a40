from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounts.views import UserViewSet, initialize_data

router = DefaultRouter(trailing_slash=False)
router.register("users", UserViewSet, basename="user")

urlpatterns = [
    path("api/", include(router.urls)),
    path("api/init-data", initialize_data, name="init-data"),
    path("api/", include("microlearning.api.urls")),
]
