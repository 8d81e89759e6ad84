from django.urls import path

from .views import bundle_view

app_name = "assets"

urlpatterns = [
    path("<str:name>", bundle_view, name="bundle"),
]
