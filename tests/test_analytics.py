import pytest

from results.services import process_results
from tests.factories import enroll, give_marks

pytestmark = pytest.mark.django_db


def url(school):
    return f"/api/analytics/examinations/{school['midterm'].id}/stats/"


@pytest.fixture
def three_students(school, midterm_marks):
    s3 = enroll(school, "S3", section=school["section_a"], roll_number=3)
    give_marks(school, s3, 30, 45)  # échoue en maths (30 < 40)
    process_results(school["midterm"].id, school["class5"].id)


def test_exam_stats(teacher_api, school, three_students):
    resp = teacher_api.get(url(school), {"class_level": school["class5"].id})
    assert resp.status_code == 200
    data = resp.data
    assert data["count_students"] == 3
    assert data["class_avg"] == pytest.approx(72.22, abs=0.01)
    assert data["pass_rate"] == pytest.approx(66.67, abs=0.01)
    assert [s["matricule"] for s in data["top_students"]] == ["S1", "S2", "S3"]
    assert data["grade_distribution"] == [
        {"grade": "A+", "count": 1}, {"grade": "B", "count": 1}, {"grade": "F", "count": 1},
    ]
    counts = {b["range"]: b["count"] for b in data["distribution"]}
    assert counts["90-100"] == 1 and counts["70-80"] == 1 and counts["50-60"] == 1

    subjects = {s["subject_code"]: s for s in data["per_subject"]}
    assert subjects["MATH"]["avg_percentage"] == pytest.approx(65.0)
    assert subjects["MATH"]["pass_rate"] == pytest.approx(66.67, abs=0.01)
    assert subjects["ENG"]["pass_rate"] == 100.0


def test_exam_stats_by_section(teacher_api, school, three_students):
    resp = teacher_api.get(url(school), {"class_level": school["class5"].id, "section": school["section_b"].id})
    assert resp.status_code == 200
    assert resp.data["count_students"] == 1
    assert resp.data["section"]["name"] == "B"


def test_exam_stats_requires_class_level(teacher_api, school):
    resp = teacher_api.get(url(school))
    assert resp.status_code == 400


def test_exam_stats_unknown_exam(teacher_api, school):
    resp = teacher_api.get("/api/analytics/examinations/999999/stats/", {"class_level": school["class5"].id})
    assert resp.status_code == 404


def test_exam_stats_before_processing(teacher_api, school, midterm_marks):
    resp = teacher_api.get(url(school), {"class_level": school["class5"].id})
    assert resp.status_code == 200
    assert resp.data["count_students"] == 0
    assert resp.data["class_avg"] == 0.0
