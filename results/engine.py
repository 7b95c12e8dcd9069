"""
Calculs purs du traitement des résultats (aucun accès base).

Règles:
  - pourcentage matière = note / note max * 100, arrondi à 0.01 avant recherche de la tranche
  - pourcentage global = total des notes / total des notes max * 100
  - GPA = moyenne simple des points des matières (chaque matière pèse pareil,
    quelle que soit sa note max)
  - rang = position dans le tri (pourcentage desc, total desc, inscription asc);
    les ex aequo reçoivent des rangs distincts et consécutifs
"""
from decimal import Decimal, ROUND_HALF_UP

from grading.services import find_band
from .exceptions import GradingConfigurationError

D0 = Decimal("0")
D100 = Decimal("100")


def _q2(x) -> Decimal:
    """Arrondi à 2 décimales en Decimal."""
    return Decimal(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def resolve_band(bands, percentage, system_name):
    band = find_band(bands, percentage)
    if band is None:
        raise GradingConfigurationError(
            f"No grade found for percentage {percentage} in grading system {system_name}",
            percentage=float(percentage),
            grading_system=system_name,
        )
    return band


def find_missing_marks(enrollments, offerings, marks):
    """
    marks: dict {(enrollment_id, offering_id): Mark}
    Retourne TOUS les couples manquants (pas seulement le premier).
    """
    missing = []
    for e in enrollments:
        for o in offerings:
            if (e.id, o.id) in marks:
                continue
            missing.append({
                "enrollment_id": e.id,
                "student": e.student.full_name,
                "matricule": e.student.matricule,
                "roll_number": e.roll_number,
                "offering_id": o.id,
                "subject": o.subject.name,
            })
    return missing


def aggregate_enrollment(enrollment, offerings, marks, bands, system_name):
    """
    Agrège les notes d'un élève sur toutes les épreuves de l'examen.
    Lève GradingConfigurationError si une tranche manque ou si une note max est nulle.
    """
    total_marks = D0
    total_full = D0
    points = []

    for o in offerings:
        mark = marks[(enrollment.id, o.id)]
        obtained = Decimal(mark.marks_obtained)
        full = Decimal(o.full_marks)
        if full <= D0:
            raise GradingConfigurationError(
                f"Full marks for {o.subject.name} must be greater than zero.",
                offering_id=o.id,
            )
        # arrondi avant la tranche: 89.995 devient 90.00 et tombe en A+ (bornes à 0.01)
        subject_pct = _q2(obtained / full * D100)
        band = resolve_band(bands, subject_pct, system_name)

        total_marks += obtained
        total_full += full
        points.append(band.points)

    if total_full <= D0:
        raise GradingConfigurationError(
            f"Total full marks is zero for enrollment {enrollment.id}; check the exam schedule.",
            enrollment_id=enrollment.id,
        )

    # même arrondi que par matière avant la recherche de la tranche finale
    percentage = _q2(total_marks / total_full * D100)
    # GPA à poids égal: moyenne simple des points matière
    gpa = _q2(sum(points, D0) / len(points))
    final_band = resolve_band(bands, percentage, system_name)

    return {
        "total_marks": _q2(total_marks),
        "total_full_marks": _q2(total_full),
        "percentage": percentage,
        "gpa": gpa,
        "final_band": final_band,
    }


def ranking_key(result):
    return (-Decimal(result.percentage), -Decimal(result.total_marks), result.enrollment_id)


def assign_ranks(results):
    """[(result, rang)] avec rangs 1..N sans trou ni doublon."""
    ordered = sorted(results, key=ranking_key)
    return [(r, position) for position, r in enumerate(ordered, start=1)]


def summarize(results):
    results = list(results)
    count = len(results)
    if not count:
        return {
            "processed_count": 0,
            "average_percentage": 0.0,
            "average_gpa": 0.0,
            "highest_percentage": 0.0,
            "lowest_percentage": 0.0,
        }
    percentages = [Decimal(r.percentage) for r in results]
    gpas = [Decimal(r.gpa) for r in results]
    return {
        "processed_count": count,
        "average_percentage": float(_q2(sum(percentages, D0) / count)),
        "average_gpa": float(_q2(sum(gpas, D0) / count)),
        "highest_percentage": float(max(percentages)),
        "lowest_percentage": float(min(percentages)),
    }
