from django.http import HttpResponse, Http404
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.views.generic import TemplateView

from rest_framework.views import APIView
from rest_framework.response import Response

from accounts.permissions import IsManager, IsManagerOrReadOnly
from .exceptions import ResultProcessingError
from .models import Result
from .report_cards import build_report_card, build_pdf_html, render_pdf_from_html, sha1_bytes
from .serializers import ResultSerializer
from .services import process_results, rank_results, get_results

class ProcessResultsView(APIView):
    """POST {examination, class_level, section?, grading_system?}"""
    permission_classes = [IsManager]

    def post(self, request):
        data = request.data
        try:
            outcome = process_results(
                data.get("examination"), data.get("class_level"),
                data.get("section"), data.get("grading_system"),
            )
        except ResultProcessingError as exc:
            return Response(exc.as_dict(), status=exc.status_code)
        results = outcome["results"]
        return Response({
            "message": f"Successfully processed results for {len(results)} students",
            "summary": outcome["summary"],
            "results": ResultSerializer(results, many=True).data,
        })

class RankResultsView(APIView):
    """Relance du classement seul, POST {examination, class_level, section?}"""
    permission_classes = [IsManager]

    def post(self, request):
        data = request.data
        try:
            outcome = rank_results(data.get("examination"), data.get("class_level"), data.get("section"))
        except ResultProcessingError as exc:
            return Response(exc.as_dict(), status=exc.status_code)
        return Response(outcome)

class ResultListView(APIView):
    permission_classes = [IsManagerOrReadOnly]

    def get(self, request):
        params = request.query_params
        try:
            qs = get_results(
                examination_id=params.get("examination"),
                class_level_id=params.get("class_level"),
                section_id=params.get("section"),
                enrollment_id=params.get("enrollment"),
            )
        except ResultProcessingError as exc:
            return Response(exc.as_dict(), status=exc.status_code)
        return Response({"results": ResultSerializer(qs, many=True).data})

def _get_result(pk):
    return get_object_or_404(
        Result.objects.select_related(
            "enrollment__student", "enrollment__class_level", "enrollment__section",
            "enrollment__academic_year", "examination__academic_year",
            "final_grade", "grading_system", "rank_section",
        ),
        pk=pk,
    )

class ReportCardView(APIView):
    permission_classes = [IsManagerOrReadOnly]

    def get(self, request, pk):
        result = _get_result(pk)
        return Response(build_report_card(result))

class ReportCardPDFView(APIView):
    permission_classes = [IsManagerOrReadOnly]

    def get(self, request, pk):
        result = _get_result(pk)
        payload = build_report_card(result)
        verify_url = request.build_absolute_uri(reverse("result-verify", args=[str(result.uid)]))
        html = build_pdf_html(payload, verify_url)
        pdf = render_pdf_from_html(html)

        filename = f"{payload['student']['matricule']}_{payload['exam']['name']}.pdf".replace(" ", "_")
        resp = HttpResponse(pdf, content_type="application/pdf")
        resp["Content-Disposition"] = f'inline; filename="{filename}"'
        resp["X-Content-SHA1"] = sha1_bytes(pdf)
        return resp

class ResultVerifyPage(TemplateView):
    template_name = "results/verify.html"  # page publique

    def get(self, request, uid):
        try:
            result = Result.objects.select_related(
                "enrollment__student", "enrollment__class_level", "enrollment__section",
                "examination__academic_year", "final_grade",
            ).get(uid=uid)
        except Result.DoesNotExist:
            raise Http404("Unknown result UID")
        e = result.enrollment
        ctx = {
            "student": {"matricule": e.student.matricule, "name": e.student.full_name},
            "class_level": e.class_level.name,
            "section": e.section.name if e.section else "",
            "year": result.examination.academic_year.name,
            "exam": result.examination.name,
            "percentage": result.percentage,
            "gpa": result.gpa,
            "final_grade": result.final_grade.grade_name,
            "rank": result.rank,
            "processed_at": result.processed_at,
        }
        return self.render_to_response(ctx)
