import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

from core.models import ClassLevel, Section
from enrollments.models import Enrollment
from exams.models import Examination, SubjectOffering, Mark
from grading.models import GradingSystem
from grading.services import load_bands
from .engine import aggregate_enrollment, assign_ranks, find_missing_marks, summarize
from .exceptions import (
    GradingConfigurationError, IncompleteMarks, InvalidScope, NoScheduleConfigured,
    NoStudentsFound, RankingFailed, ResultStorageConflict, ScopeNotFound,
)
from .locks import scope_lock
from .models import Result

logger = logging.getLogger(__name__)


def _as_id(value, name, required=True):
    if value in (None, ""):
        if required:
            raise InvalidScope(f"Missing required field: {name}", field=name)
        return None
    # JSON: true/1.9 ne doivent pas devenir l'id 1
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidScope(f"{name} must be an integer id", field=name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidScope(f"{name} must be an integer id", field=name)


# -------------------------
#  Lectures (entrées du moteur)
# -------------------------

def resolve_scope(examination_id, class_level_id, section_id=None):
    exam = Examination.objects.select_related("academic_year").filter(id=examination_id).first()
    if exam is None:
        raise ScopeNotFound("Exam not found", field="examination")
    class_level = ClassLevel.objects.filter(id=class_level_id).first()
    if class_level is None:
        raise ScopeNotFound("Class level not found", field="class_level")
    section = None
    if section_id is not None:
        section = Section.objects.filter(id=section_id, class_level=class_level).first()
        if section is None:
            raise ScopeNotFound("Section not found for this class level", field="section")
    return exam, class_level, section


def resolve_grading_system(grading_system_id=None):
    """Barème explicite, sinon celui marqué par défaut."""
    if grading_system_id is not None:
        system = GradingSystem.objects.filter(id=grading_system_id).first()
        if system is None:
            raise GradingConfigurationError(f"Grading system {grading_system_id} not found.")
    else:
        system = GradingSystem.objects.filter(is_default=True).first()
        if system is None:
            raise GradingConfigurationError(
                "No grading system found. Please create a default grading system first."
            )
    bands = load_bands(system)
    if not bands:
        raise GradingConfigurationError(f"Grading system {system.name} has no grade bands.")
    return system, bands


def fetch_offerings(exam, class_level):
    return list(SubjectOffering.objects
                .filter(examination=exam, class_level=class_level)
                .select_related("subject")
                .order_by("subject__name", "id"))


def eligible_enrollments(exam, class_level, section=None):
    qs = Enrollment.objects.filter(
        class_level=class_level, academic_year_id=exam.academic_year_id, active=True
    )
    if section is not None:
        qs = qs.filter(section=section)
    return qs


def fetch_enrollments(exam, class_level, section=None):
    return list(eligible_enrollments(exam, class_level, section)
                .select_related("student", "section")
                .order_by("id"))


def fetch_marks(enrollments, offerings):
    """{(enrollment_id, offering_id): Mark}"""
    marks = Mark.objects.filter(
        enrollment_id__in=[e.id for e in enrollments],
        offering_id__in=[o.id for o in offerings],
    )
    return {(m.enrollment_id, m.offering_id): m for m in marks}


def scope_results(exam, class_level, section=None, active=True):
    qs = Result.objects.filter(
        examination=exam,
        enrollment__class_level=class_level,
        enrollment__academic_year_id=exam.academic_year_id,
        enrollment__active=active,
    )
    if section is not None:
        qs = qs.filter(enrollment__section=section)
    return qs


# -------------------------
#  Écritures
# -------------------------

def write_result(enrollment, exam, system, aggregate):
    result, _ = Result.objects.update_or_create(
        enrollment=enrollment,
        examination=exam,
        defaults={
            "total_marks": aggregate["total_marks"],
            "total_full_marks": aggregate["total_full_marks"],
            "percentage": aggregate["percentage"],
            "gpa": aggregate["gpa"],
            "final_grade_id": aggregate["final_band"].grade_id,
            "grading_system": system,
            "rank": None,  # recalculé par le classement
            "rank_section": None,
        },
    )
    return result


def aggregate_scope(exam, enrollments, offerings, marks, system, bands):
    """Phase 1: tout ou rien, aucun résultat partiel n'est validé."""
    try:
        with transaction.atomic():
            written = [
                write_result(e, exam, system,
                             aggregate_enrollment(e, offerings, marks, bands, system.name))
                for e in enrollments
            ]
    except IntegrityError as exc:
        logger.error(f"Result upsert conflict for exam {exam.id}: {exc}", exc_info=True)
        raise ResultStorageConflict(
            "Results were modified concurrently. Please retry."
        ) from exc
    except GradingConfigurationError as exc:
        logger.error(f"Aggregation aborted for exam {exam.id}: {exc.detail}")
        raise
    logger.info(f"Aggregated {len(written)} results for exam {exam.id}")
    return written


def rank_scope(exam, class_level, section=None):
    """
    Phase 2: relit TOUS les résultats du périmètre (pas seulement ceux écrits)
    et réattribue les rangs 1..N.
    """
    with transaction.atomic():
        rows = list(scope_results(exam, class_level, section).select_for_update(of=("self",)))
        for result, rank in assign_ranks(rows):
            result.rank = rank
            result.rank_section = section
        Result.objects.bulk_update(rows, ["rank", "rank_section"])
        # inscriptions désactivées: plus de rang
        scope_results(exam, class_level, section, active=False).exclude(rank=None).update(rank=None, rank_section=None)
    logger.info(f"Ranked {len(rows)} results for exam {exam.id}, class {class_level.id}"
                f"{f', section {section.id}' if section else ''}")
    return len(rows)


# -------------------------
#  Opérations exposées
# -------------------------

def process_results(examination_id, class_level_id, section_id=None, grading_system_id=None):
    """
    Valide la complétude des notes, agrège (transaction 1), classe (transaction 2),
    puis retourne le résumé et les résultats classés.
    """
    examination_id = _as_id(examination_id, "examination")
    class_level_id = _as_id(class_level_id, "class_level")
    section_id = _as_id(section_id, "section", required=False)
    grading_system_id = _as_id(grading_system_id, "grading_system", required=False)

    exam, class_level, section = resolve_scope(examination_id, class_level_id, section_id)
    logger.info(f"Processing results: exam={exam.id} class={class_level.id} section={section_id}")

    with scope_lock(exam.id, class_level.id):
        offerings = fetch_offerings(exam, class_level)
        if not offerings:
            raise NoScheduleConfigured("No exam schedules found for this exam and class")

        enrollments = fetch_enrollments(exam, class_level, section)
        if not enrollments:
            raise NoStudentsFound("No students found for this class and academic year")

        marks = fetch_marks(enrollments, offerings)
        missing = find_missing_marks(enrollments, offerings, marks)
        if missing:
            logger.warning(f"Exam {exam.id} class {class_level.id}: {len(missing)} marks missing")
            raise IncompleteMarks(missing)

        system, bands = resolve_grading_system(grading_system_id)
        aggregate_scope(exam, enrollments, offerings, marks, system, bands)

        try:
            rank_scope(exam, class_level, section)
        except DatabaseError as exc:
            logger.error(f"Ranking failed for exam {exam.id}: {exc}", exc_info=True)
            raise RankingFailed(
                "Results were saved but ranking failed. Retry ranking for this scope."
            ) from exc

    results = list(_ranked(scope_results(exam, class_level, section)))
    summary = {
        "exam_name": exam.name,
        "class_name": class_level.name,
        "section_name": section.name if section else None,
        "academic_year": exam.academic_year.name,
        "grading_system_name": system.name,
    }
    summary.update(summarize(results))
    return {"summary": summary, "results": results}


def rank_results(examination_id, class_level_id, section_id=None):
    """Relance seule du classement (ex: après un échec de la phase 2)."""
    examination_id = _as_id(examination_id, "examination")
    class_level_id = _as_id(class_level_id, "class_level")
    section_id = _as_id(section_id, "section", required=False)

    exam, class_level, section = resolve_scope(examination_id, class_level_id, section_id)
    with scope_lock(exam.id, class_level.id):
        ranked = rank_scope(exam, class_level, section)
    return {"ranked_count": ranked}


def get_results(examination_id=None, class_level_id=None, section_id=None, enrollment_id=None):
    """Lecture seule, triée par examen puis rang (non classés en dernier)."""
    examination_id = _as_id(examination_id, "examination", required=False)
    class_level_id = _as_id(class_level_id, "class_level", required=False)
    section_id = _as_id(section_id, "section", required=False)
    enrollment_id = _as_id(enrollment_id, "enrollment", required=False)

    qs = Result.objects.all()
    if examination_id is not None:
        qs = qs.filter(examination_id=examination_id)
    if class_level_id is not None:
        qs = qs.filter(enrollment__class_level_id=class_level_id)
    if section_id is not None:
        qs = qs.filter(enrollment__section_id=section_id)
    if enrollment_id is not None:
        qs = qs.filter(enrollment_id=enrollment_id)
    return _ranked(qs)


def _ranked(qs):
    return (qs
            .select_related("enrollment__student", "enrollment__section", "enrollment__class_level",
                            "examination__academic_year", "final_grade", "grading_system")
            .order_by("-examination__academic_year__name", "examination__name", "examination_id",
                      F("rank").asc(nulls_last=True), "enrollment_id"))
