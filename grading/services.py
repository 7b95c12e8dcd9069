from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from django.core.exceptions import ValidationError

D0 = Decimal("0")
D100 = Decimal("100")
# granularité des bornes (pourcentages à 2 décimales)
STEP = Decimal("0.01")


class Band(NamedTuple):
    """Tranche d'un barème: [min, max] inclusifs -> lettre + points."""
    grade_id: int
    name: str
    min_percentage: Decimal
    max_percentage: Decimal
    points: Decimal

    def contains(self, percentage) -> bool:
        return self.min_percentage <= percentage <= self.max_percentage


def load_bands(grading_system):
    """Tranches du barème, de la plus haute à la plus basse."""
    return [
        Band(g.id, g.grade_name, Decimal(g.min_percentage), Decimal(g.max_percentage), Decimal(g.points))
        for g in grading_system.grades.order_by("-min_percentage")
    ]


def find_band(bands, percentage):
    """Première tranche contenant le pourcentage, sinon None."""
    for band in bands:
        if band.contains(percentage):
            return band
    return None


def _field(band, key):
    return band.get(key) if isinstance(band, dict) else getattr(band, key, None)


def validate_bands(bands):
    """
    Vérifie un barème au moment de sa configuration:
      - min < max, bornes dans [0, 100]
      - aucun chevauchement
      - couverture continue de 0 à 100 (pas de trou à 0.01 près)
    Lève ValidationError avec la liste des problèmes trouvés.
    """
    if not bands:
        raise ValidationError("At least one grade band is required.")

    errors = []
    rows = []
    seen = set()
    for b in bands:
        name = _field(b, "grade_name")
        try:
            lo = Decimal(str(_field(b, "min_percentage")))
            hi = Decimal(str(_field(b, "max_percentage")))
        except (InvalidOperation, TypeError):
            errors.append(f"Grade {name}: percentages must be numbers.")
            continue
        if name in seen:
            errors.append(f"Grade name {name} is used more than once.")
        seen.add(name)
        if lo < D0 or hi > D100:
            errors.append(f"Grade {name}: percentages must be between 0 and 100.")
        if lo >= hi:
            errors.append(f"Grade {name}: min_percentage must be less than max_percentage.")
        rows.append((lo, hi, name))

    if errors:
        raise ValidationError(errors)

    rows.sort()
    if rows[0][0] != D0:
        errors.append(f"Grade bands must start at 0 (lowest band {rows[0][2]} starts at {rows[0][0]}).")
    if rows[-1][1] != D100:
        errors.append(f"Grade bands must end at 100 (highest band {rows[-1][2]} ends at {rows[-1][1]}).")
    for (lo1, hi1, n1), (lo2, hi2, n2) in zip(rows, rows[1:]):
        if lo2 <= hi1:
            errors.append(f"Grade percentage ranges cannot overlap ({n1} and {n2}).")
        elif lo2 - hi1 > STEP:
            errors.append(f"Gap between grade {n1} (max {hi1}) and grade {n2} (min {lo2}).")

    if errors:
        raise ValidationError(errors)
