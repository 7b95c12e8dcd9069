# accounts/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS

READONLY_ROLES = {"TEACHER", "REGISTRAR", "PRINCIPAL", "ADMIN"}
MANAGE_ROLES   = {"PRINCIPAL", "ADMIN"}

def has_role(user, roles) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_superuser", False):
        return True
    return getattr(user, "role", None) in roles

def can_manage(user) -> bool:
    return bool(getattr(user, "is_authenticated", False) and user.can_manage_results)

class IsManager(BasePermission):
    """Traitement/classement des résultats: PRINCIPAL/ADMIN uniquement."""
    def has_permission(self, request, view):
        return can_manage(request.user)

class IsManagerOrReadOnly(BasePermission):
    """
    - Lecture: tout utilisateur authentifié avec un rôle prévu
    - Écriture: PRINCIPAL/ADMIN
    """
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return has_role(request.user, READONLY_ROLES)
        return can_manage(request.user)
