from unittest import mock

import pytest
from rest_framework.test import APIClient

from results.models import Result
from results.services import process_results

pytestmark = pytest.mark.django_db


def payload(school, **extra):
    body = {"examination": school["midterm"].id, "class_level": school["class5"].id}
    body.update(extra)
    return body


@pytest.fixture
def processed(school, midterm_marks):
    process_results(school["midterm"].id, school["class5"].id)
    return {r.enrollment.student.matricule: r for r in Result.objects.select_related("enrollment__student")}


def test_process_endpoint(api, school, midterm_marks):
    resp = api.post("/api/results/process/", payload(school), format="json")
    assert resp.status_code == 200, resp.data
    assert resp.data["message"] == "Successfully processed results for 2 students"
    assert resp.data["summary"]["average_percentage"] == 83.34
    first = resp.data["results"][0]
    assert first["matricule"] == "S1"
    assert first["percentage"] == 90.0
    assert first["gpa"] == 3.75
    assert first["final_grade"] == "A+"
    assert first["grade_points"] == 4.0
    assert first["rank"] == 1
    assert first["section"] == "A"


def test_process_endpoint_reports_missing_marks(api, school, standard):
    from tests.factories import enroll
    enroll(school, "S9")
    resp = api.post("/api/results/process/", payload(school), format="json")
    assert resp.status_code == 400
    assert resp.data["code"] == "incomplete_marks"
    assert len(resp.data["missing"]) == 2
    assert resp.data["retryable"] is False


def test_process_endpoint_input_errors(api, school, standard):
    resp = api.post("/api/results/process/", {"class_level": school["class5"].id}, format="json")
    assert resp.status_code == 400
    assert resp.data["code"] == "invalid_input"
    resp = api.post("/api/results/process/", payload(school, examination=999999), format="json")
    assert resp.status_code == 404
    assert resp.data["detail"] == "Exam not found"


def test_process_requires_manager(teacher_api, school, midterm_marks):
    resp = teacher_api.post("/api/results/process/", payload(school), format="json")
    assert resp.status_code == 403
    assert Result.objects.count() == 0


def test_anonymous_is_rejected(school):
    resp = APIClient().get("/api/results/")
    assert resp.status_code in (401, 403)


def test_rank_endpoint(api, school, processed):
    Result.objects.update(rank=None)
    resp = api.post("/api/results/rank/", payload(school), format="json")
    assert resp.status_code == 200
    assert resp.data == {"ranked_count": 2}
    assert Result.objects.get(pk=processed["S1"].pk).rank == 1


def test_list_results(teacher_api, school, processed):
    resp = teacher_api.get("/api/results/", {"examination": school["midterm"].id})
    assert resp.status_code == 200
    assert [r["matricule"] for r in resp.data["results"]] == ["S1", "S2"]
    resp = teacher_api.get("/api/results/", {"section": school["section_b"].id})
    assert [r["matricule"] for r in resp.data["results"]] == ["S2"]
    assert teacher_api.get("/api/results/", {"examination": "x"}).status_code == 400


def test_report_card(teacher_api, processed):
    s2 = processed["S2"]
    resp = teacher_api.get(f"/api/results/{s2.id}/report-card/")
    assert resp.status_code == 200
    card = resp.data
    assert card["uid"] == str(s2.uid)
    assert card["student"]["matricule"] == "S2"
    assert card["class_stats"] == {"rank": 2, "count": 2, "scope": "Class 5"}
    assert card["totals"]["final_grade"] == "B"
    lines = {line["code"]: line for line in card["lines"]}
    assert lines["MATH"]["grade"] == "B"
    assert lines["ENG"]["percentage"] == 90.0
    assert lines["ENG"]["grade"] == "A+"
    assert lines["ENG"]["passed"] is True


def test_report_card_unknown_result(teacher_api, db):
    assert teacher_api.get("/api/results/999999/report-card/").status_code == 404


def test_report_card_pdf(teacher_api, processed):
    s1 = processed["S1"]
    with mock.patch("results.views.render_pdf_from_html", return_value=b"%PDF-1.4 fake") as render:
        resp = teacher_api.get(f"/api/results/{s1.id}/report-card/pdf/")
    assert resp.status_code == 200
    assert resp["Content-Type"] == "application/pdf"
    assert resp["Content-Disposition"] == 'inline; filename="S1_Midterm.pdf"'
    assert len(resp["X-Content-SHA1"]) == 40
    html = render.call_args[0][0]
    assert f"/results/verify/{s1.uid}/" in html
    assert "data:image/png;base64," in html


def test_verify_page_is_public(processed):
    s1 = processed["S1"]
    resp = APIClient().get(f"/results/verify/{s1.uid}/")
    assert resp.status_code == 200
    content = resp.content.decode()
    assert "S1" in content
    assert "Midterm" in content


def test_verify_page_unknown_uid(db):
    resp = APIClient().get("/results/verify/00000000-0000-0000-0000-000000000000/")
    assert resp.status_code == 404


def test_report_card_counts_the_section_that_produced_the_rank(teacher_api, school, midterm_marks):
    from tests.factories import enroll, give_marks
    s3 = enroll(school, "S3", section=school["section_b"], roll_number=3)
    give_marks(school, s3, 100, 50)
    process_results(school["midterm"].id, school["class5"].id, school["section_b"].id)

    s2 = Result.objects.get(enrollment=midterm_marks["s2"])
    card = teacher_api.get(f"/api/results/{s2.id}/report-card/").data
    assert card["class_stats"] == {"rank": 2, "count": 2, "scope": "Class 5 - B"}

    # le traitement du niveau entier reclasse tout le monde sur 3
    process_results(school["midterm"].id, school["class5"].id)
    card = teacher_api.get(f"/api/results/{s2.id}/report-card/").data
    assert card["class_stats"] == {"rank": 3, "count": 3, "scope": "Class 5"}


@pytest.mark.parametrize("bad", [True, 1.9])
def test_process_rejects_non_integer_ids(api, school, midterm_marks, bad):
    resp = api.post("/api/results/process/", payload(school, class_level=bad), format="json")
    assert resp.status_code == 400
    assert resp.data["code"] == "invalid_input"
    assert Result.objects.count() == 0
