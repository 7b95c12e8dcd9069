from django.urls import path
from .views import (
    ProcessResultsView, RankResultsView, ResultListView,
    ReportCardView, ReportCardPDFView, ResultVerifyPage,
)

urlpatterns = [
    path("api/results/", ResultListView.as_view(), name="results-list"),
    path("api/results/process/", ProcessResultsView.as_view(), name="results-process"),
    path("api/results/rank/", RankResultsView.as_view(), name="results-rank"),
    path("api/results/<int:pk>/report-card/", ReportCardView.as_view(), name="result-report-card"),
    path("api/results/<int:pk>/report-card/pdf/", ReportCardPDFView.as_view(), name="result-report-card-pdf"),
    path("results/verify/<uuid:uid>/", ResultVerifyPage.as_view(), name="result-verify"),
]
