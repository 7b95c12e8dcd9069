from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enrollments", "0001_initial"),
        ("exams", "0001_initial"),
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Result",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("total_marks", models.DecimalField(decimal_places=2, max_digits=8)),
                ("total_full_marks", models.DecimalField(decimal_places=2, max_digits=8)),
                ("percentage", models.DecimalField(decimal_places=2, max_digits=5)),
                ("gpa", models.DecimalField(decimal_places=2, max_digits=4)),
                ("rank", models.PositiveIntegerField(blank=True, null=True)),
                ("processed_at", models.DateTimeField(auto_now=True)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="enrollments.enrollment")),
                ("examination", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="exams.examination")),
                ("final_grade", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="results", to="grading.grade")),
                ("grading_system", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="results", to="grading.gradingsystem")),
            ],
            options={
                "ordering": ["examination", "rank", "enrollment"],
                "unique_together": {("enrollment", "examination")},
            },
        ),
        migrations.CreateModel(
            name="ResultProcessingLock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=128, unique=True)),
                ("locked_until", models.DateTimeField()),
                ("locked_by", models.CharField(blank=True, max_length=128)),
            ],
        ),
    ]
