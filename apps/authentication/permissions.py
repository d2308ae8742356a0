#apps/authentication/permissions.py:

from rest_framework.permissions import BasePermission

GRUPO_ADMINISTRADOR = 'Administrador'
GRUPO_DOCENTE = 'Docente'
GRUPO_ESTUDIANTE = 'Estudiante'


def pertenece_a(user, *grupos):
    return (user.is_authenticated and
            user.groups.filter(name__in=grupos).exists())


class IsDocenteOrAdministrador(BasePermission):
    """
    Solo docentes y administradores pueden acceder
    """
    def has_permission(self, request, view):
        return pertenece_a(request.user, GRUPO_DOCENTE, GRUPO_ADMINISTRADOR)


class IsEstudianteOrAdministrador(BasePermission):
    """
    Solo el estudiante (o un administrador en su nombre) decide sobre su matricula
    """
    def has_permission(self, request, view):
        return pertenece_a(request.user, GRUPO_ESTUDIANTE, GRUPO_ADMINISTRADOR)
