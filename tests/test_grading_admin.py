import pytest
from django.forms.models import inlineformset_factory

from grading.admin import GradeInlineFormSet
from grading.models import GradingSystem, Grade

pytestmark = pytest.mark.django_db

GradeFormSet = inlineformset_factory(
    GradingSystem, Grade, formset=GradeInlineFormSet,
    fields=["grade_name", "min_percentage", "max_percentage", "points"], extra=0,
)


def formset_data(rows):
    data = {
        "grades-TOTAL_FORMS": str(len(rows)),
        "grades-INITIAL_FORMS": "0",
        "grades-MIN_NUM_FORMS": "0",
        "grades-MAX_NUM_FORMS": "1000",
    }
    for i, (name, lo, hi, pts) in enumerate(rows):
        data.update({
            f"grades-{i}-grade_name": name,
            f"grades-{i}-min_percentage": lo,
            f"grades-{i}-max_percentage": hi,
            f"grades-{i}-points": pts,
        })
    return data


@pytest.fixture
def system():
    return GradingSystem.objects.create(name="Admin scale")


def bound(system, rows):
    return GradeFormSet(formset_data(rows), instance=system, prefix="grades")


def test_contiguous_bands_are_valid(system):
    fs = bound(system, [("P", "50", "100", "1"), ("NP", "0", "49.99", "0")])
    assert fs.is_valid(), fs.non_form_errors()


def test_gap_is_reported_as_form_error(system):
    fs = bound(system, [("P", "60", "100", "1"), ("NP", "0", "49.99", "0")])
    assert not fs.is_valid()
    assert any("Gap between grade" in e for e in fs.non_form_errors())


def test_invalid_row_is_a_field_error_not_a_crash(system):
    fs = bound(system, [("P", "abc", "100", "1"), ("NP", "0", "49.99", "0")])
    assert not fs.is_valid()
    assert "min_percentage" in fs.forms[0].errors
    assert list(fs.non_form_errors()) == []


def test_validate_bands_reports_missing_bound():
    from django.core.exceptions import ValidationError
    from grading.services import validate_bands
    with pytest.raises(ValidationError) as excinfo:
        validate_bands([{"grade_name": "P", "max_percentage": "100"}])
    assert "Grade P: percentages must be numbers." in excinfo.value.messages
