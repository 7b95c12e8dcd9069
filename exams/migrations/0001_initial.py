import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("subjects", "0001_initial"),
        ("enrollments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Examination",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=64)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("academic_year", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="examinations", to="core.academicyear")),
            ],
            options={
                "ordering": ["-academic_year__name", "name"],
                "unique_together": {("academic_year", "name")},
            },
        ),
        migrations.CreateModel(
            name="SubjectOffering",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("exam_date", models.DateField(blank=True, null=True)),
                ("start_time", models.TimeField(blank=True, null=True)),
                ("end_time", models.TimeField(blank=True, null=True)),
                ("full_marks", models.DecimalField(decimal_places=2, max_digits=6, validators=[django.core.validators.MinValueValidator(0.01)])),
                ("pass_marks", models.DecimalField(decimal_places=2, default=0, max_digits=6, validators=[django.core.validators.MinValueValidator(0)])),
                ("class_level", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="offerings", to="core.classlevel")),
                ("examination", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="offerings", to="exams.examination")),
                ("subject", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="offerings", to="subjects.subject")),
            ],
            options={
                "ordering": ["examination", "class_level__numeric_level", "subject__name"],
                "unique_together": {("examination", "class_level", "subject")},
            },
        ),
        migrations.CreateModel(
            name="Mark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("marks_obtained", models.DecimalField(decimal_places=2, max_digits=6, validators=[django.core.validators.MinValueValidator(0)])),
                ("remarks", models.CharField(blank=True, max_length=255)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="marks", to="enrollments.enrollment")),
                ("offering", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="marks", to="exams.subjectoffering")),
            ],
            options={
                "ordering": ["offering", "enrollment"],
                "unique_together": {("enrollment", "offering")},
            },
        ),
    ]
