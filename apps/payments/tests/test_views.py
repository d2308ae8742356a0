from django.contrib.auth.models import Group, User
from django.test import TestCase
from rest_framework.test import APIClient

CUOTA_MENSUAL = {
    'id_pago': 31,
    'id_matricula': 4,
    'numero_cuota': 10,
    'monto': '90.00',
    'fecha_vencimiento': '2026-11-05',
    'modalidad_pago': 'mensual',
    'meses_duracion': 12,
}

CUOTA_CLASES = {
    'id_pago': 32,
    'numero_cuota': 1,
    'monto': '12.50',
    'modalidad_pago': 'clases',
    'precio_por_clase': '12.50',
}


class CuotasApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username='estudiante', password='x')
        self.user.groups.add(Group.objects.create(name='Estudiante'))
        self.client.force_authenticate(self.user)

    def validar(self, monto, cuota, **extra):
        payload = {'monto_pagar': monto, 'cuota': cuota}
        payload.update(extra)
        return self.client.post('/api/payments/cuotas/validar-monto/', payload, format='json')

    def test_monto_aceptado(self):
        res = self.validar('180', CUOTA_MENSUAL)
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data['aceptado'])
        self.assertEqual(res.data['tipo'], 'ACEPTADO')
        self.assertEqual(res.data['monto_formateado'], '$180.00')

    def test_monto_sobre_el_maximo(self):
        res = self.validar('360', CUOTA_MENSUAL)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['tipo'], 'RECHAZADO_MAXIMO')
        self.assertEqual(res.data['monto_maximo'], 270)

    def test_monto_no_numerico_es_rechazo_estructurado(self):
        res = self.validar('doce', CUOTA_MENSUAL)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['tipo'], 'RECHAZADO_MINIMO')
        self.assertIsNone(res.data['monto'])
        self.assertIsNone(res.data['monto_formateado'])

    def test_monto_nulo_booleano_o_ausente_es_rechazo_estructurado(self):
        for monto in (None, True, {'valor': 90}):
            res = self.validar(monto, CUOTA_MENSUAL)
            self.assertEqual(res.status_code, 200, monto)
            self.assertEqual(res.data['tipo'], 'RECHAZADO_MINIMO')
            self.assertIsNone(res.data['monto'])

        res = self.client.post('/api/payments/cuotas/validar-monto/', {'cuota': CUOTA_MENSUAL}, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['tipo'], 'RECHAZADO_MINIMO')

    def test_monto_numerico_json(self):
        self.assertEqual(self.validar(180, CUOTA_MENSUAL).data['tipo'], 'ACEPTADO')

    def test_por_clases(self):
        self.assertEqual(self.validar('25.00', CUOTA_CLASES).data['tipo'], 'ACEPTADO')
        res = self.validar('25.01', CUOTA_CLASES)
        self.assertEqual(res.data['tipo'], 'RECHAZADO_NO_MULTIPLO')
        self.assertEqual(res.data['montos_sugeridos'], [25.0, 37.5])

    def test_modalidad_explicita_tiene_prioridad(self):
        cuota = dict(CUOTA_CLASES, monto='90.00', precio_por_clase=None)
        res = self.validar('100', cuota, modalidad_pago='mensual')
        self.assertEqual(res.data['tipo'], 'RECHAZADO_NO_MULTIPLO')
        self.assertEqual(res.data['montos_sugeridos'], [90.0, 180.0])

    def test_cuota_invalida(self):
        res = self.validar('90', {'id_pago': 1, 'monto': '90'})
        self.assertEqual(res.status_code, 400)
        self.assertIn('cuota', res.data)

    def test_limites(self):
        res = self.client.post('/api/payments/cuotas/limites/', CUOTA_MENSUAL, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {'paso': 90.0, 'minimo': 90.0, 'maximo': 270.0})

    def test_resumen_con_promocion_rechazada(self):
        cuotas = [
            {'id_pago': i, 'numero_cuota': i, 'monto': '0' if i <= 2 else '90', 'estado': 'pendiente'}
            for i in range(1, 5)
        ]
        payload = {
            'cuotas': cuotas,
            'matricula': {
                'id_matricula': 4,
                'meses_gratis': 2,
                'decision_estudiante': 'rechazar',
                'fecha_inicio_cobro': '2020-01-01',
            },
        }
        res = self.client.post('/api/payments/cuotas/resumen/', payload, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['cuotas_visibles'], [1, 2])
        self.assertEqual(res.data['resumen']['total_cuotas'], 2)
        self.assertEqual(res.data['resumen']['monto_pendiente'], 0)
        self.assertTrue(res.data['promocion_terminada'])

    def test_resumen_sin_matricula(self):
        payload = {'cuotas': [{'id_pago': 1, 'numero_cuota': 1, 'monto': '90', 'estado': 'verificado'}]}
        res = self.client.post('/api/payments/cuotas/resumen/', payload, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['resumen']['monto_pagado'], 90)
        self.assertFalse(res.data['promocion_terminada'])


class PromocionesApiTests(TestCase):
    url = '/api/payments/promociones/decision/'

    def setUp(self):
        self.client = APIClient()
        self.estudiante = User.objects.create_user(username='estudiante', password='x')
        self.estudiante.groups.add(Group.objects.create(name='Estudiante'))
        self.docente = User.objects.create_user(username='docente', password='x')
        self.docente.groups.add(Group.objects.create(name='Docente'))

    def test_decision_pendiente(self):
        self.client.force_authenticate(self.estudiante)
        payload = {'matricula': {'id_matricula': 4, 'meses_gratis': 2}, 'decision': 'continuar'}
        res = self.client.post(self.url, payload, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data['id_matricula'], 4)
        self.assertEqual(res.data['decision'], 'continuar')
        self.assertIsNotNone(res.data['fecha_decision'])

    def test_decision_ya_tomada(self):
        self.client.force_authenticate(self.estudiante)
        payload = {
            'matricula': {'id_matricula': 4, 'decision_estudiante': 'continuar'},
            'decision': 'rechazar',
        }
        res = self.client.post(self.url, payload, format='json')
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data['codigo'], 'DECISION_YA_TOMADA')

    def test_decision_desconocida(self):
        self.client.force_authenticate(self.estudiante)
        payload = {'matricula': {'id_matricula': 4}, 'decision': 'tal vez'}
        res = self.client.post(self.url, payload, format='json')
        self.assertEqual(res.status_code, 400)
        self.assertIn('decision', res.data)

    def test_docente_no_decide(self):
        self.client.force_authenticate(self.docente)
        payload = {'matricula': {'id_matricula': 4}, 'decision': 'continuar'}
        res = self.client.post(self.url, payload, format='json')
        self.assertEqual(res.status_code, 403)
