from decimal import Decimal
from collections import defaultdict, Counter
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import ClassLevel, Section
from exams.models import Examination, SubjectOffering, Mark
from results.services import scope_results

# Create your views here.

@api_view(["GET"])
@permission_classes([IsAuthenticated])
def exam_stats(request, examination_id: int):
    class_level_id = request.GET.get("class_level")
    if not class_level_id:
        return Response({"detail": "class_level is required"}, status=400)
    try:
        class_level_id = int(class_level_id)
        section_id = int(request.GET["section"]) if request.GET.get("section") else None
    except ValueError:
        return Response({"detail": "class_level and section must be integer ids"}, status=400)

    # Contexte examen/niveau
    exam = Examination.objects.select_related("academic_year").filter(id=examination_id).first()
    if exam is None:
        return Response({"detail": "Exam not found"}, status=404)
    class_level = ClassLevel.objects.filter(id=class_level_id).first()
    if class_level is None:
        return Response({"detail": "Class level not found"}, status=404)
    section = None
    if section_id is not None:
        section = Section.objects.filter(id=section_id, class_level=class_level).first()
        if section is None:
            return Response({"detail": "Section not found for this class level"}, status=404)

    # Résultats traités (inscriptions actives)
    results = list(
        scope_results(exam, class_level, section)
        .select_related("enrollment__student", "final_grade")
        .order_by("rank", "enrollment_id")
    )
    enroll_ids = [r.enrollment_id for r in results]

    # Épreuves de l'examen pour ce niveau
    offerings = list(
        SubjectOffering.objects.select_related("subject")
        .filter(examination=exam, class_level=class_level)
        .order_by("subject__name", "id")
    )
    off_by_id = {o.id: o for o in offerings}

    marks = list(
        Mark.objects.filter(enrollment_id__in=enroll_ids, offering_id__in=off_by_id.keys())
        .values("enrollment_id", "offering_id", "marks_obtained")
    )

    # Réussite = toutes les matières >= note de passage
    failed_enrollments = set()
    pct_by_offering = defaultdict(list)
    passed_by_offering = defaultdict(int)
    for m in marks:
        o = off_by_id[m["offering_id"]]
        obtained = Decimal(m["marks_obtained"])
        pct_by_offering[o.id].append(float(obtained / Decimal(o.full_marks) * 100))
        if obtained >= Decimal(o.pass_marks):
            passed_by_offering[o.id] += 1
        else:
            failed_enrollments.add(m["enrollment_id"])

    # KPIs
    count_students = len(results)
    class_avg = round(sum(float(r.percentage) for r in results) / count_students, 2) if count_students else 0.0
    avg_gpa = round(sum(float(r.gpa) for r in results) / count_students, 2) if count_students else 0.0
    pass_count = sum(1 for r in results if r.enrollment_id not in failed_enrollments)
    pass_rate = round((pass_count / count_students) * 100, 2) if count_students else 0.0

    # Perf par matière
    per_subject = []
    for o in offerings:
        vals = pct_by_offering.get(o.id, [])
        per_subject.append({
            "offering_id": o.id,
            "subject_code": o.subject.code,
            "subject_name": o.subject.name,
            "avg_percentage": round(sum(vals) / len(vals), 2) if vals else 0.0,
            "pass_rate": round(passed_by_offering[o.id] / len(vals) * 100, 2) if vals else 0.0,
        })

    # Répartition des mentions
    grades = Counter(r.final_grade.grade_name for r in results)
    grade_distribution = [{"grade": g, "count": c} for g, c in sorted(grades.items())]

    # Distribution des pourcentages (classes de 10)
    bins = [{"range": f"{i*10}-{(i+1)*10}", "count": 0} for i in range(10)]
    for r in results:
        idx = int(min(max(float(r.percentage), 0), 100)) // 10
        if idx == 10: idx = 9
        bins[idx]["count"] += 1

    # Top 3 (rang déjà attribué au traitement)
    top3 = [{
        "enrollment_id": r.enrollment_id,
        "matricule": r.enrollment.student.matricule,
        "student_name": r.enrollment.student.full_name,
        "percentage": float(r.percentage),
        "rank": r.rank,
    } for r in results if r.rank is not None][:3]

    return Response({
        "examination": {"id": exam.id, "name": exam.name, "academic_year": exam.academic_year.name},
        "class_level": {"id": class_level.id, "name": class_level.name},
        "section": {"id": section.id, "name": section.name} if section else None,
        "count_students": count_students,
        "class_avg": class_avg,
        "avg_gpa": avg_gpa,
        "pass_rate": pass_rate,
        "top_students": top3,
        "per_subject": per_subject,
        "grade_distribution": grade_distribution,
        "distribution": bins,
    })
