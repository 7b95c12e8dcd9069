from django.urls import path
from .views import exam_stats

urlpatterns = [
    path("api/analytics/examinations/<int:examination_id>/stats/", exam_stats, name="exam-stats"),
]
