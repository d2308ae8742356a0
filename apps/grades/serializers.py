#apps/grades/serializers.py:

from rest_framework import serializers

from apps.students.serializers import EstudiantePayloadSerializer
from .dto import MODULO_SIN_ASIGNAR, PromedioModulo, RegistroNota

NOTA_MAXIMA_DEFECTO = 10.0
PONDERACION_DEFECTO = 1.0


class RegistroNotaSerializer(serializers.Serializer):
    """Nota de una tarea tal como la envia /api/calificaciones/curso/:id/completo"""
    id_tarea = serializers.IntegerField()
    id_modulo = serializers.IntegerField(required=False, allow_null=True)
    id_estudiante = serializers.IntegerField(required=False, allow_null=True)
    nota = serializers.FloatField(required=False, allow_null=True)
    nota_maxima = serializers.FloatField(required=False, allow_null=True)
    ponderacion = serializers.FloatField(required=False, allow_null=True)
    modulo_nombre = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    modulo_orden = serializers.IntegerField(required=False, allow_null=True)
    promedios_publicados = serializers.BooleanField(required=False, default=False)

    def to_registro(self, data):
        nota_maxima = data.get('nota_maxima')
        return RegistroNota(
            id_tarea=data['id_tarea'],
            id_modulo=data.get('id_modulo') or MODULO_SIN_ASIGNAR,
            id_estudiante=data.get('id_estudiante'),
            nota=data.get('nota'),
            nota_maxima=NOTA_MAXIMA_DEFECTO if nota_maxima is None else nota_maxima,
            # Ponderacion vacia o cero cuenta como 1
            ponderacion=data.get('ponderacion') or PONDERACION_DEFECTO,
            nombre_modulo=data.get('modulo_nombre') or '',
            orden_modulo=data.get('modulo_orden') or 0,
            promedios_publicados=bool(data.get('promedios_publicados')),
        )


class CalificacionesSerializer(serializers.Serializer):
    calificaciones = RegistroNotaSerializer(many=True)

    def get_registros(self):
        hijo = self.fields['calificaciones'].child
        return [hijo.to_registro(item) for item in self.validated_data['calificaciones']]


def validar_ponderacion_positiva(valor):
    if valor is not None and valor <= 0:
        raise serializers.ValidationError('La ponderación por módulo debe ser mayor a 0.')
    return valor


class PromedioCursoRequestSerializer(CalificacionesSerializer):
    id_curso = serializers.IntegerField()
    ponderacion_por_modulo = serializers.FloatField(
        required=False, allow_null=True, validators=[validar_ponderacion_positiva]
    )


class EstadisticasCursoRequestSerializer(CalificacionesSerializer):
    id_curso = serializers.IntegerField()
    estudiantes = EstudiantePayloadSerializer(many=True, required=False)


class PromedioModuloSerializer(serializers.Serializer):
    id_modulo = serializers.IntegerField()
    nombre = serializers.CharField(allow_blank=True)
    orden = serializers.IntegerField()
    promedio_ponderado = serializers.FloatField()
    total_tareas = serializers.IntegerField()
    tareas_calificadas = serializers.IntegerField()
    publicado = serializers.BooleanField()
    tareas_invalidas = serializers.ListField(child=serializers.IntegerField(), required=False)
    tiene_incidencias = serializers.BooleanField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # El calculo usa la suma completa; solo la salida se redondea
        data['promedio_ponderado'] = round(data['promedio_ponderado'], 4)
        return data


class PromedioGlobalRequestSerializer(serializers.Serializer):
    modulos = PromedioModuloSerializer(many=True)
    ponderacion_por_modulo = serializers.FloatField(validators=[validar_ponderacion_positiva])

    def get_modulos(self):
        return [
            PromedioModulo(
                id_modulo=m['id_modulo'],
                nombre=m['nombre'],
                orden=m['orden'],
                promedio_ponderado=m['promedio_ponderado'],
                total_tareas=m['total_tareas'],
                tareas_calificadas=m['tareas_calificadas'],
                publicado=m['publicado'],
                tareas_invalidas=tuple(m.get('tareas_invalidas') or ()),
            )
            for m in self.validated_data['modulos']
        ]


class PromedioGlobalSerializer(serializers.Serializer):
    """Nunca expone el valor numerico de un promedio que no es visible"""
    valor = serializers.SerializerMethodField()
    visible = serializers.BooleanField()
    estado = serializers.SerializerMethodField()
    etiqueta = serializers.CharField(allow_null=True)

    ESTADO_OCULTO = 'OCULTO'

    def get_valor(self, obj):
        return obj.valor if obj.visible else None

    def get_estado(self, obj):
        return obj.estado if obj.visible else self.ESTADO_OCULTO


class PromedioCursoSerializer(serializers.Serializer):
    id_curso = serializers.IntegerField()
    promedio_global = PromedioGlobalSerializer()
    modulos = PromedioModuloSerializer(many=True)


class PromedioEstudianteSerializer(serializers.Serializer):
    id_estudiante = serializers.IntegerField(allow_null=True)
    nombre_completo = serializers.CharField(allow_blank=True)
    promedio = PromedioCursoSerializer()


class EstadisticasCursoSerializer(serializers.Serializer):
    """Resumen de rendimiento de un curso completo"""
    id_curso = serializers.IntegerField()
    total_estudiantes = serializers.IntegerField()
    aprobados = serializers.IntegerField()
    reprobados = serializers.IntegerField()
    ocultos = serializers.IntegerField()
    porcentaje_aprobacion = serializers.FloatField()
    promedio_global_curso = serializers.FloatField()
    estudiantes = PromedioEstudianteSerializer(many=True)
