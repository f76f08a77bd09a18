from django.urls import include, path

urlpatterns = [
    path("srs/", include("srs.api.urls")),
]
