#apps/students/serializers.py:

from rest_framework import serializers


class EstudiantePayloadSerializer(serializers.Serializer):
    """
    Normaliza los datos de estudiante que llegan del backend.
    Algunos endpoints envian 'nombres'/'apellidos' y otros 'nombre'/'apellido';
    aqui se dejan siempre como 'nombre', 'apellido' y 'nombre_completo'.
    """
    id_estudiante = serializers.IntegerField()
    nombre = serializers.CharField(required=False, allow_blank=True, default='')
    apellido = serializers.CharField(required=False, allow_blank=True, default='')

    ALIAS = {
        'nombres': 'nombre',
        'apellidos': 'apellido',
    }

    def to_internal_value(self, data):
        if hasattr(data, 'items'):
            data = dict(data)
            for alias, campo in self.ALIAS.items():
                if alias in data and not data.get(campo):
                    data[campo] = data.pop(alias)
        return super().to_internal_value(data)

    def validate(self, attrs):
        attrs['nombre'] = (attrs.get('nombre') or '').strip()
        attrs['apellido'] = (attrs.get('apellido') or '').strip()
        attrs['nombre_completo'] = f"{attrs['nombre']} {attrs['apellido']}".strip()
        return attrs


def nombres_por_estudiante(estudiantes):
    """Mapa id_estudiante -> nombre completo a partir de datos ya validados"""
    return {e['id_estudiante']: e['nombre_completo'] for e in estudiantes or []}
