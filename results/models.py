import uuid
from django.db import models
from core.models import Section
from enrollments.models import Enrollment
from exams.models import Examination
from grading.models import GradingSystem, Grade

# Create your models here.
class Result(models.Model):
    """
    Résultat agrégé d'un élève pour un examen.
    Réécrit à chaque traitement; le rang est remis à NULL par l'agrégation
    puis recalculé par le classement.
    """
    uid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)  # vérification publique du bulletin
    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name="results")
    examination = models.ForeignKey(Examination, on_delete=models.CASCADE, related_name="results")
    total_marks = models.DecimalField(max_digits=8, decimal_places=2)
    total_full_marks = models.DecimalField(max_digits=8, decimal_places=2)
    percentage = models.DecimalField(max_digits=5, decimal_places=2)
    gpa = models.DecimalField(max_digits=4, decimal_places=2)
    final_grade = models.ForeignKey(Grade, on_delete=models.PROTECT, related_name="results")
    grading_system = models.ForeignKey(GradingSystem, on_delete=models.PROTECT, related_name="results")
    rank = models.PositiveIntegerField(null=True, blank=True)
    # section dans laquelle le rang a été calculé (NULL = niveau entier)
    rank_section = models.ForeignKey(Section, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    processed_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("enrollment", "examination"),)
        ordering = ["examination", "rank", "enrollment"]

    def __str__(self):
        return f"{self.enrollment.student} | {self.examination} | {self.percentage}% (rank {self.rank or '-'})"

class ResultProcessingLock(models.Model):
    """Bail de traitement par périmètre (examen, niveau)."""
    key = models.CharField(max_length=128, unique=True)
    locked_until = models.DateTimeField()
    locked_by = models.CharField(max_length=128, blank=True)

    def __str__(self):
        return f"{self.key} until {self.locked_until} ({self.locked_by or '-'})"
