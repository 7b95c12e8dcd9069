from django.db import models, transaction
from django.core.validators import MinValueValidator, MaxValueValidator
# Create your models here.

class GradingSystem(models.Model):
    name = models.CharField(max_length=64, unique=True)
    is_default = models.BooleanField(default=False)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["-is_default", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_default"],
                condition=models.Q(is_default=True),
                name="single_default_grading_system",
            ),
        ]

    def __str__(self):
        return f"{self.name}{' (default)' if self.is_default else ''}"

    def save(self, *args, **kwargs):
        # un seul barème par défaut: on retire le flag des autres avant d'écrire
        with transaction.atomic():
            if self.is_default:
                GradingSystem.objects.filter(is_default=True).exclude(pk=self.pk).update(is_default=False)
            super().save(*args, **kwargs)

    @property
    def is_in_use(self):
        return self.results.exists()

class Grade(models.Model):
    system = models.ForeignKey(GradingSystem, on_delete=models.CASCADE, related_name="grades")
    grade_name = models.CharField(max_length=8)  # A+, A, B, ...
    min_percentage = models.DecimalField(max_digits=5, decimal_places=2,
                                         validators=[MinValueValidator(0), MaxValueValidator(100)])  # inclusif
    max_percentage = models.DecimalField(max_digits=5, decimal_places=2,
                                         validators=[MinValueValidator(0), MaxValueValidator(100)])  # inclusif
    points = models.DecimalField(max_digits=4, decimal_places=2, default=0, validators=[MinValueValidator(0)])

    class Meta:
        unique_together = (("system", "grade_name"),)
        ordering = ["system", "-min_percentage"]

    def __str__(self):
        return f"{self.grade_name}: {self.min_percentage}-{self.max_percentage} ({self.points})"
