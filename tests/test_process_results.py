from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, IntegrityError
from django.utils import timezone

from exams.models import Mark, SubjectOffering
from grading.models import GradingSystem, Grade
from results.exceptions import (
    GradingConfigurationError, IncompleteMarks, InvalidScope, NoScheduleConfigured,
    NoStudentsFound, RankingFailed, ResultStorageConflict, ScopeBusy, ScopeNotFound,
)
from results.locks import scope_key
from results.models import Result, ResultProcessingLock
from results.services import process_results, rank_results, get_results
from tests.factories import enroll, give_marks

pytestmark = pytest.mark.django_db


def run(school, **kwargs):
    return process_results(school["midterm"].id, school["class5"].id, **kwargs)


def test_midterm_example(school, midterm_marks):
    out = run(school)
    summary = out["summary"]
    assert summary["processed_count"] == 2
    assert summary["exam_name"] == "Midterm"
    assert summary["class_name"] == "Class 5"
    assert summary["section_name"] is None
    assert summary["academic_year"] == "2025/2026"
    assert summary["grading_system_name"] == "Standard"
    assert summary["average_percentage"] == 83.34
    assert summary["highest_percentage"] == 90.0
    assert summary["lowest_percentage"] == 76.67

    s1, s2 = out["results"]
    assert s1.enrollment == midterm_marks["s1"]
    assert (s1.total_marks, s1.total_full_marks) == (Decimal("135.00"), Decimal("150.00"))
    assert (s1.percentage, s1.gpa, s1.final_grade.grade_name, s1.rank) == (
        Decimal("90.00"), Decimal("3.75"), "A+", 1)
    assert (s2.percentage, s2.gpa, s2.final_grade.grade_name, s2.rank) == (
        Decimal("76.67"), Decimal("3.50"), "B", 2)


def test_incomplete_marks_writes_nothing(school, midterm_marks):
    s3 = enroll(school, "S3", roll_number=3)
    Mark.objects.create(enrollment=s3, offering=school["math"], marks_obtained=Decimal("50"))
    with pytest.raises(IncompleteMarks) as excinfo:
        run(school)
    assert len(excinfo.value.missing) == 1
    assert excinfo.value.missing[0]["subject"] == "English"
    assert "Missing marks for 1 student-subject combinations" in excinfo.value.detail
    assert Result.objects.count() == 0


def test_no_schedule(school, standard):
    SubjectOffering.objects.all().delete()
    with pytest.raises(NoScheduleConfigured):
        run(school)


def test_no_students(school, standard):
    with pytest.raises(NoStudentsFound):
        run(school)


def test_inactive_enrollments_are_not_eligible(school, standard):
    gone = enroll(school, "GONE", active=False)
    give_marks(school, gone, 90, 45)
    with pytest.raises(NoStudentsFound):
        run(school)


def test_no_default_grading_system(school, midterm_marks, standard):
    GradingSystem.objects.update(is_default=False)
    with pytest.raises(GradingConfigurationError) as excinfo:
        run(school)
    assert "create a default grading system" in excinfo.value.detail


def test_explicit_grading_system(school, midterm_marks):
    pass_fail = GradingSystem.objects.create(name="PassFail")
    Grade.objects.create(system=pass_fail, grade_name="P", min_percentage=50, max_percentage=100, points=1)
    Grade.objects.create(system=pass_fail, grade_name="NP", min_percentage=0, max_percentage="49.99", points=0)
    out = run(school, grading_system_id=pass_fail.id)
    assert out["summary"]["grading_system_name"] == "PassFail"
    assert {r.final_grade.grade_name for r in out["results"]} == {"P"}


def test_band_gap_fails_whole_batch(school, midterm_marks, standard):
    # S2 a 70% en maths: plus aucune tranche B
    Grade.objects.filter(system=standard, grade_name="B").delete()
    with pytest.raises(GradingConfigurationError):
        run(school)
    assert Result.objects.count() == 0


def test_rerun_is_content_idempotent(school, midterm_marks):
    first = {r.enrollment_id: (r.percentage, r.gpa, r.final_grade_id, r.rank, r.uid) for r in run(school)["results"]}
    second = {r.enrollment_id: (r.percentage, r.gpa, r.final_grade_id, r.rank, r.uid) for r in run(school)["results"]}
    assert first == second
    assert Result.objects.count() == 2


def test_section_scope_ranks_within_section(school, midterm_marks):
    s3 = enroll(school, "S3", section=school["section_b"], roll_number=3)
    give_marks(school, s3, 100, 50)
    out = run(school, section_id=school["section_b"].id)
    assert out["summary"]["section_name"] == "B"
    assert [(r.enrollment.student.matricule, r.rank) for r in out["results"]] == [("S3", 1), ("S2", 2)]
    assert not Result.objects.filter(enrollment=midterm_marks["s1"]).exists()


def test_class_run_reranks_every_section(school, midterm_marks):
    run(school, section_id=school["section_b"].id)
    out = run(school)
    assert [(r.enrollment.student.matricule, r.rank) for r in out["results"]] == [("S1", 1), ("S2", 2)]


def test_deactivated_enrollment_loses_rank(school, midterm_marks):
    run(school)
    s1 = midterm_marks["s1"]
    s1.active = False
    s1.save()
    out = run(school)
    assert [(r.enrollment_id, r.rank) for r in out["results"]] == [(midterm_marks["s2"].id, 1)]
    assert Result.objects.get(enrollment=s1).rank is None


def test_busy_scope(school, midterm_marks):
    ResultProcessingLock.objects.create(
        key=scope_key(school["midterm"].id, school["class5"].id),
        locked_until=timezone.now() + timedelta(minutes=5),
        locked_by="other-worker",
    )
    with pytest.raises(ScopeBusy) as excinfo:
        run(school)
    assert excinfo.value.retryable
    assert excinfo.value.as_dict()["locked_until"]


def test_expired_lock_is_taken_over_and_released(school, midterm_marks):
    key = scope_key(school["midterm"].id, school["class5"].id)
    ResultProcessingLock.objects.create(key=key, locked_until=timezone.now() - timedelta(minutes=1))
    run(school)
    lock = ResultProcessingLock.objects.get(key=key)
    assert lock.locked_until <= timezone.now()
    assert lock.locked_by != ""


def test_storage_conflict(school, midterm_marks):
    with mock.patch("results.services.write_result", side_effect=IntegrityError("duplicate")):
        with pytest.raises(ResultStorageConflict) as excinfo:
            run(school)
    assert excinfo.value.status_code == 409
    assert Result.objects.count() == 0


def test_ranking_failure_keeps_aggregates(school, midterm_marks):
    with mock.patch("results.services.assign_ranks", side_effect=DatabaseError("boom")):
        with pytest.raises(RankingFailed):
            run(school)
    assert Result.objects.count() == 2
    assert not Result.objects.exclude(rank=None).exists()

    out = rank_results(school["midterm"].id, school["class5"].id)
    assert out == {"ranked_count": 2}
    assert sorted(Result.objects.values_list("rank", flat=True)) == [1, 2]


@pytest.mark.parametrize("exam, class_level, section, expected", [
    (None, 1, None, InvalidScope),
    ("abc", 1, None, InvalidScope),
    (999999, "class5", None, ScopeNotFound),
    ("midterm", 999999, None, ScopeNotFound),
    ("midterm", "class5", 999999, ScopeNotFound),
])
def test_invalid_scope(school, standard, exam, class_level, section, expected):
    exam = school[exam].id if exam in school else exam
    class_level = school[class_level].id if class_level in school else class_level
    with pytest.raises(expected):
        process_results(exam, class_level, section)


def test_section_of_other_class_level_is_not_found(school, standard):
    from core.models import ClassLevel, Section
    other = Section.objects.create(class_level=ClassLevel.objects.create(name="Class 6"), name="A")
    with pytest.raises(ScopeNotFound):
        run(school, section_id=other.id)


def test_get_results_orders_unranked_last(school, midterm_marks):
    run(school)
    Result.objects.filter(enrollment=midterm_marks["s1"]).update(rank=None)
    rows = list(get_results(examination_id=school["midterm"].id))
    assert [r.enrollment_id for r in rows] == [midterm_marks["s2"].id, midterm_marks["s1"].id]
    assert list(get_results(enrollment_id=midterm_marks["s1"].id)) == [rows[1]]
    assert list(get_results(section_id=school["section_a"].id)) == [rows[1]]
    with pytest.raises(InvalidScope):
        get_results(examination_id="x")


@pytest.mark.parametrize("bad", [True, False, 1.9])
def test_bool_and_fractional_ids_are_rejected(school, standard, bad):
    with pytest.raises(InvalidScope):
        process_results(bad, school["class5"].id)


def test_integral_float_id_is_accepted(school, midterm_marks):
    out = process_results(float(school["midterm"].id), school["class5"].id)
    assert out["summary"]["processed_count"] == 2


def test_rank_scope_is_recorded(school, midterm_marks):
    run(school, section_id=school["section_a"].id)
    assert Result.objects.get(enrollment=midterm_marks["s1"]).rank_section == school["section_a"]
    run(school)
    assert set(Result.objects.values_list("rank_section", flat=True)) == {None}
