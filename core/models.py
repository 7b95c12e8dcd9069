from django.db import models

# Create your models here.
class AcademicYear(models.Model):
    """
    Exemple de nom: '2025/2026'
    """
    name = models.CharField(max_length=9, unique=True)
    start_date = models.DateField(null=True, blank=True)
    end_date   = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["-name"]

    def __str__(self):
        return self.name

class ClassLevel(models.Model):
    """
    Niveau de classe indépendant de l'année ('Class 5', 'Grade 10', ...)
    """
    name = models.CharField(max_length=32, unique=True)
    numeric_level = models.PositiveSmallIntegerField(default=0)  # pour le tri

    class Meta:
        ordering = ["numeric_level", "name"]

    def __str__(self):
        return self.name

class Section(models.Model):
    class_level = models.ForeignKey(ClassLevel, on_delete=models.CASCADE, related_name="sections")
    name = models.CharField(max_length=16)  # 'A', 'B', 'Blue', ...

    class Meta:
        unique_together = (("class_level", "name"),)
        ordering = ["class_level__numeric_level", "name"]

    def __str__(self):
        return f"{self.class_level.name} - {self.name}"
