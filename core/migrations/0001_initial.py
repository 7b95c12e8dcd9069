from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AcademicYear",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=9, unique=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
            ],
            options={"ordering": ["-name"]},
        ),
        migrations.CreateModel(
            name="ClassLevel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=32, unique=True)),
                ("numeric_level", models.PositiveSmallIntegerField(default=0)),
            ],
            options={"ordering": ["numeric_level", "name"]},
        ),
        migrations.CreateModel(
            name="Section",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=16)),
                ("class_level", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sections", to="core.classlevel")),
            ],
            options={
                "ordering": ["class_level__numeric_level", "name"],
                "unique_together": {("class_level", "name")},
            },
        ),
    ]
