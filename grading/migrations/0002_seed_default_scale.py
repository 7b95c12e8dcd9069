from decimal import Decimal
from django.db import migrations

def seed(apps, schema_editor):
    GradingSystem = apps.get_model("grading", "GradingSystem")
    Grade = apps.get_model("grading", "Grade")

    # pas de second barème par défaut si un autre existe déjà
    has_default = GradingSystem.objects.filter(is_default=True).exists()
    system, _ = GradingSystem.objects.get_or_create(
        name="Default A-F",
        defaults={"is_default": not has_default, "description": "Seeded default scale"},
    )

    bands = [
        ("A", "80.00", "100.00", "4.00"),
        ("B", "70.00", "79.99", "3.00"),
        ("C", "60.00", "69.99", "2.00"),
        ("D", "50.00", "59.99", "1.00"),
        ("E", "40.00", "49.99", "0.50"),
        ("F", "0.00", "39.99", "0.00"),
    ]
    for name, lo, hi, points in bands:
        Grade.objects.get_or_create(
            system=system, grade_name=name,
            defaults={"min_percentage": Decimal(lo), "max_percentage": Decimal(hi), "points": Decimal(points)}
        )

def unseed(apps, schema_editor):
    GradingSystem = apps.get_model("grading", "GradingSystem")
    GradingSystem.objects.filter(name="Default A-F").delete()

class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, reverse_code=unseed),
    ]
