from django.db import models
from django.contrib.auth.models import AbstractUser
# Create your models here.

class User(AbstractUser):
    """
    Utilisateur de l'établissement.
    Le rôle décide de l'accès: lecture des résultats pour tous les rôles,
    traitement/classement et barèmes pour PRINCIPAL/ADMIN.
    """
    class Role(models.TextChoices):
        """Rôles connus des permissions (accounts.permissions)."""
        TEACHER = "TEACHER"
        REGISTRAR = "REGISTRAR"
        PRINCIPAL = "PRINCIPAL"
        ADMIN = "ADMIN"

    role = models.CharField(max_length=16, choices=Role.choices, default=Role.TEACHER)

    @property
    def can_manage_results(self):
        # superuser: accès complet quel que soit le rôle
        return self.is_superuser or self.role in (self.Role.PRINCIPAL, self.Role.ADMIN)
