from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("accounts.urls")),
    path("", include("grading.urls")),
    path("", include("results.urls")),
    path("", include("analytics.urls")),
]
