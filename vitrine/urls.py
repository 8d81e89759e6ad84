"""
URL configuration for vitrine project.

``bundles/`` sert les bundles générés à l'exécution par le pipeline d'assets
(cf. ``ASSETS["PIPELINE_URL"]`` en prod).
"""
from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path

urlpatterns = [
    path("bundles/", include("apps.assets.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
