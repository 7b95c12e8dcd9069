from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from tests.factories import make_user, enroll, give_marks
from core.models import AcademicYear, ClassLevel, Section
from subjects.models import Subject
from exams.models import Examination, SubjectOffering
from grading.models import GradingSystem, Grade


@pytest.fixture
def principal(db):
    return make_user("principal", User.Role.PRINCIPAL)


@pytest.fixture
def teacher(db):
    return make_user("teacher", User.Role.TEACHER)


@pytest.fixture
def api(principal):
    client = APIClient()
    client.force_authenticate(principal)
    return client


@pytest.fixture
def teacher_api(teacher):
    client = APIClient()
    client.force_authenticate(teacher)
    return client


@pytest.fixture
def standard(db):
    """Barème 'Standard' par défaut, couvrant 0-100."""
    system = GradingSystem.objects.create(name="Standard", is_default=True)
    for name, lo, hi, pts in [
        ("A+", "90", "100", "4.0"),
        ("A", "80", "89.99", "3.5"),
        ("B", "70", "79.99", "3.0"),
        ("F", "0", "69.99", "0.0"),
    ]:
        Grade.objects.create(system=system, grade_name=name, min_percentage=Decimal(lo),
                             max_percentage=Decimal(hi), points=Decimal(pts))
    return system


@pytest.fixture
def school(db):
    year = AcademicYear.objects.create(name="2025/2026")
    class5 = ClassLevel.objects.create(name="Class 5", numeric_level=5)
    section_a = Section.objects.create(class_level=class5, name="A")
    section_b = Section.objects.create(class_level=class5, name="B")
    midterm = Examination.objects.create(academic_year=year, name="Midterm")
    math = Subject.objects.create(code="MATH", name="Math")
    english = Subject.objects.create(code="ENG", name="English")
    math_off = SubjectOffering.objects.create(examination=midterm, class_level=class5, subject=math,
                                              full_marks=Decimal("100"), pass_marks=Decimal("40"))
    eng_off = SubjectOffering.objects.create(examination=midterm, class_level=class5, subject=english,
                                             full_marks=Decimal("50"), pass_marks=Decimal("20"))
    return {
        "year": year, "class5": class5, "section_a": section_a, "section_b": section_b,
        "midterm": midterm, "math": math_off, "english": eng_off,
    }


@pytest.fixture
def midterm_marks(school, standard):
    """S1: 95/100 + 40/50; S2: 70/100 + 45/50."""
    s1 = enroll(school, "S1", section=school["section_a"], roll_number=1)
    s2 = enroll(school, "S2", section=school["section_b"], roll_number=2)
    give_marks(school, s1, 95, 40)
    give_marks(school, s2, 70, 45)
    return {"s1": s1, "s2": s2}
