from django.db import models
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from core.models import AcademicYear, ClassLevel
from subjects.models import Subject
from enrollments.models import Enrollment

# Create your models here.

class Examination(models.Model):
    academic_year = models.ForeignKey(AcademicYear, on_delete=models.PROTECT, related_name="examinations")
    name = models.CharField(max_length=64)  # ex: Midterm, Final
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    class Meta:
        unique_together = (("academic_year", "name"),)
        ordering = ["-academic_year__name", "name"]

    def __str__(self):
        return f"{self.name} ({self.academic_year.name})"

class SubjectOffering(models.Model):
    """
    Épreuve planifiée: une matière, pour un niveau, dans un examen.
    full_marks = dénominateur du pourcentage; pass_marks = seuil informatif.
    """
    examination = models.ForeignKey(Examination, on_delete=models.CASCADE, related_name="offerings")
    class_level = models.ForeignKey(ClassLevel, on_delete=models.PROTECT, related_name="offerings")
    subject = models.ForeignKey(Subject, on_delete=models.PROTECT, related_name="offerings")
    exam_date = models.DateField(null=True, blank=True)
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    full_marks = models.DecimalField(max_digits=6, decimal_places=2, validators=[MinValueValidator(0.01)])
    pass_marks = models.DecimalField(max_digits=6, decimal_places=2, default=0, validators=[MinValueValidator(0)])

    class Meta:
        unique_together = (("examination", "class_level", "subject"),)
        ordering = ["examination", "class_level__numeric_level", "subject__name"]

    def __str__(self):
        return f"{self.examination} | {self.class_level} | {self.subject.name}"

    def clean(self):
        if self.full_marks is not None and self.pass_marks is not None and self.pass_marks > self.full_marks:
            raise ValidationError({"pass_marks": "Pass marks cannot exceed full marks."})
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({"end_time": "End time must be after start time."})

class Mark(models.Model):
    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name="marks")
    offering = models.ForeignKey(SubjectOffering, on_delete=models.CASCADE, related_name="marks")
    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, validators=[MinValueValidator(0)])
    remarks = models.CharField(max_length=255, blank=True)

    class Meta:
        unique_together = (("enrollment", "offering"),)
        ordering = ["offering", "enrollment"]

    def __str__(self):
        return f"{self.enrollment} → {self.offering.subject.name}: {self.marks_obtained}"

    def clean(self):
        offering = self.offering if self.offering_id else None
        if offering and self.marks_obtained is not None and self.marks_obtained > offering.full_marks:
            raise ValidationError({"marks_obtained": f"Marks must be between 0 and {offering.full_marks}."})
        enrollment = self.enrollment if self.enrollment_id else None
        if offering and enrollment:
            if enrollment.class_level_id != offering.class_level_id:
                raise ValidationError("Enrollment is not for the class level of this exam schedule.")
            if enrollment.academic_year_id != offering.examination.academic_year_id:
                raise ValidationError("Enrollment is not in the academic year of this examination.")
