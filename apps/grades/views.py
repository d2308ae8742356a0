#apps/grades/views.py:

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from apps.authentication.permissions import IsDocenteOrAdministrador
from apps.students.serializers import nombres_por_estudiante
from .serializers import (
    CalificacionesSerializer, PromedioCursoRequestSerializer, PromedioGlobalRequestSerializer,
    EstadisticasCursoRequestSerializer, PromedioModuloSerializer, PromedioGlobalSerializer,
    PromedioCursoSerializer, EstadisticasCursoSerializer
)
from .services import CalculadoraPromedios


class CalculosViewSet(viewsets.GenericViewSet):
    """Calculos de promedios sobre las notas ya obtenidas del backend"""
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        """Las estadisticas de todo el curso solo las ven docentes y administradores"""
        if self.action == 'estadisticas_curso':
            permission_classes = [IsAuthenticated, IsDocenteOrAdministrador]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    @action(detail=False, methods=['post'], url_path='promedios-modulos')
    def promedios_modulos(self, request):
        """Promedios ponderados por modulo"""
        serializer = CalificacionesSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        modulos = CalculadoraPromedios.calcular_promedios_modulos(serializer.get_registros())
        return Response({
            'modulos': PromedioModuloSerializer(modulos, many=True).data,
            'total_modulos': len(modulos),
            'con_incidencias': sum(1 for m in modulos if m.tiene_incidencias)
        })

    @action(detail=False, methods=['post'], url_path='promedio-global')
    def promedio_global(self, request):
        serializer = PromedioGlobalRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        promedio = CalculadoraPromedios.calcular_promedio_global(
            serializer.get_modulos(),
            serializer.validated_data['ponderacion_por_modulo']
        )
        return Response(PromedioGlobalSerializer(promedio).data)

    @action(detail=False, methods=['post'], url_path='promedio-curso')
    def promedio_curso(self, request):
        """Promedios por modulo y promedio global de un curso"""
        serializer = PromedioCursoRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        promedio = CalculadoraPromedios.calcular_promedio_curso(
            serializer.validated_data['id_curso'],
            serializer.get_registros(),
            serializer.validated_data.get('ponderacion_por_modulo')
        )
        return Response(PromedioCursoSerializer(promedio).data)

    @action(detail=False, methods=['post'], url_path='estadisticas-curso')
    def estadisticas_curso(self, request):
        """Aprobados, reprobados y promedio general de un curso"""
        serializer = EstadisticasCursoRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        estadisticas = CalculadoraPromedios.calcular_estadisticas_curso(
            serializer.validated_data['id_curso'],
            serializer.get_registros(),
            nombres=nombres_por_estudiante(serializer.validated_data.get('estudiantes'))
        )
        return Response(EstadisticasCursoSerializer(estadisticas).data)
