from django.urls import include, path

from .views import initialize_data

urlpatterns = [
    path("initialize", initialize_data, name="initialize"),
    path("", include("scheduler.api.urls")),
]
