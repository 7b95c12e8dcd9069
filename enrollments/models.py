from django.db import models
from core.models import AcademicYear, ClassLevel, Section
# Create your models here.

class Student(models.Model):
    SEX_CHOICES = (("M","M"),("F","F"))
    matricule = models.CharField(max_length=32, unique=True)
    last_name = models.CharField(max_length=64)
    first_name = models.CharField(max_length=64)
    sex = models.CharField(max_length=1, choices=SEX_CHOICES, blank=True)
    dob = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["last_name","first_name"]

    def __str__(self):
        return f"{self.matricule} - {self.last_name} {self.first_name}"

    @property
    def full_name(self):
        return f"{self.last_name} {self.first_name}"

class Enrollment(models.Model):
    """
    Inscription d'un élève pour une année: niveau + section (optionnelle).
    Seules les inscriptions actives sont prises en compte par le moteur de résultats.
    """
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments")
    academic_year = models.ForeignKey(AcademicYear, on_delete=models.PROTECT, related_name="enrollments")
    class_level = models.ForeignKey(ClassLevel, on_delete=models.PROTECT, related_name="enrollments")
    section = models.ForeignKey(Section, on_delete=models.PROTECT, null=True, blank=True, related_name="enrollments")
    roll_number = models.PositiveIntegerField(null=True, blank=True)
    date_enrolled = models.DateField(auto_now_add=True)
    active = models.BooleanField(default=True)

    class Meta:
        unique_together = (("student","academic_year"),)
        ordering = ["academic_year","class_level","section","roll_number","student__last_name"]

    def __str__(self):
        where = self.section or self.class_level
        return f"{self.student} @ {where} ({self.academic_year})"
