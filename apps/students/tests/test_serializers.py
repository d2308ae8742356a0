from django.test import SimpleTestCase

from apps.students.serializers import EstudiantePayloadSerializer, nombres_por_estudiante


class EstudiantePayloadSerializerTests(SimpleTestCase):
    def validar(self, data):
        serializer = EstudiantePayloadSerializer(data=data)
        self.assertTrue(serializer.is_valid(), serializer.errors)
        return serializer.validated_data

    def test_campos_en_singular(self):
        data = self.validar({'id_estudiante': 1, 'nombre': 'Ana', 'apellido': 'Pérez'})
        self.assertEqual(data['nombre_completo'], 'Ana Pérez')

    def test_campos_en_plural(self):
        data = self.validar({'id_estudiante': 2, 'nombres': ' María José ', 'apellidos': 'Vera Loor'})
        self.assertEqual(data['nombre'], 'María José')
        self.assertEqual(data['apellido'], 'Vera Loor')
        self.assertEqual(data['nombre_completo'], 'María José Vera Loor')

    def test_singular_tiene_prioridad(self):
        data = self.validar({'id_estudiante': 3, 'nombre': 'Luis', 'nombres': 'Luis Alberto'})
        self.assertEqual(data['nombre'], 'Luis')
        self.assertEqual(data['nombre_completo'], 'Luis')

    def test_sin_nombres(self):
        data = self.validar({'id_estudiante': 4})
        self.assertEqual(data['nombre_completo'], '')

    def test_requiere_id(self):
        self.assertFalse(EstudiantePayloadSerializer(data={'nombre': 'Ana'}).is_valid())

    def test_mapa_de_nombres(self):
        serializer = EstudiantePayloadSerializer(
            data=[{'id_estudiante': 1, 'nombres': 'Ana', 'apellidos': 'Pérez'}], many=True
        )
        self.assertTrue(serializer.is_valid())
        self.assertEqual(nombres_por_estudiante(serializer.validated_data), {1: 'Ana Pérez'})
        self.assertEqual(nombres_por_estudiante(None), {})
