import io, base64, hashlib
from decimal import Decimal
from django.conf import settings
from django.template.loader import render_to_string
from xhtml2pdf import pisa
import qrcode

from exams.models import SubjectOffering, Mark
from grading.services import load_bands, find_band
from .engine import _q2, D0, D100
from .services import scope_results

TIMES_STACK = '"Times New Roman", Times, serif'


def build_report_card(result):
    """
    Bulletin d'un résultat: lignes matières + totaux + rang.
    Les lettres par matière sont recalculées avec le barème du résultat.
    """
    e = result.enrollment
    exam = result.examination
    bands = load_bands(result.grading_system)

    offerings = list(SubjectOffering.objects
                     .filter(examination=exam, class_level_id=e.class_level_id)
                     .select_related("subject")
                     .order_by("subject__name", "id"))
    marks = {m.offering_id: m for m in Mark.objects.filter(enrollment=e, offering__in=offerings)}

    lines = []
    for o in offerings:
        mark = marks.get(o.id)
        if mark is None:
            continue
        obtained = Decimal(mark.marks_obtained)
        pct = _q2(obtained / Decimal(o.full_marks) * D100) if o.full_marks else D0
        band = find_band(bands, pct)
        lines.append({
            "code": o.subject.code,
            "name": o.subject.name,
            "marks_obtained": float(obtained),
            "full_marks": float(o.full_marks),
            "pass_marks": float(o.pass_marks),
            "percentage": float(pct),
            "grade": band.name if band else "N/A",
            "points": float(band.points) if band else 0.0,
            "passed": obtained >= Decimal(o.pass_marks),
            "remarks": mark.remarks,
        })

    # taille du périmètre qui a produit le rang (section ou niveau entier)
    rank_section = result.rank_section
    out_of = scope_results(exam, e.class_level, rank_section).count()
    rank_scope = f"{e.class_level.name} - {rank_section.name}" if rank_section else e.class_level.name

    return {
        "uid": str(result.uid),
        "school": {
            "name": getattr(settings, "SCHOOL_NAME", "Your School"),
            "address": getattr(settings, "SCHOOL_ADDRESS", ""),
            "phone": getattr(settings, "SCHOOL_PHONE", ""),
        },
        "student": {
            "id": e.student.id,
            "matricule": e.student.matricule,
            "name": e.student.full_name,
            "sex": e.student.sex,
            "dob": e.student.dob.isoformat() if e.student.dob else None,
        },
        "enrollment": {
            "id": e.id,
            "roll_number": e.roll_number,
            "class_level": e.class_level.name,
            "section": e.section.name if e.section else "",
            "academic_year": e.academic_year.name,
        },
        "exam": {"id": exam.id, "name": exam.name, "academic_year": exam.academic_year.name},
        "lines": lines,
        "totals": {
            "total_marks": float(result.total_marks),
            "total_full_marks": float(result.total_full_marks),
            "percentage": float(result.percentage),
            "gpa": float(result.gpa),
            "final_grade": result.final_grade.grade_name,
            "final_points": float(result.final_grade.points),
        },
        "class_stats": {
            "rank": result.rank,
            "count": out_of,
            "scope": rank_scope,
        },
        "grading_system": {
            "name": result.grading_system.name,
            "grades": [
                {"grade_name": b.name, "min_percentage": float(b.min_percentage),
                 "max_percentage": float(b.max_percentage), "points": float(b.points)}
                for b in bands
            ],
        },
    }


def make_qr_png_b64(text: str) -> str:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def render_pdf_from_html(html: str) -> bytes:
    out = io.BytesIO()
    pisa.CreatePDF(io.StringIO(html), dest=out)
    return out.getvalue()


def build_pdf_html(payload: dict, verify_url: str) -> str:
    qr_b64 = make_qr_png_b64(verify_url)
    return render_to_string("results/report_card.html", {
        "p": payload,
        "verify_url": verify_url,
        "qr_b64": qr_b64,
        "TIMES_STACK": TIMES_STACK,
    })


def sha1_bytes(b: bytes) -> str:
    return hashlib.sha1(b).hexdigest()
