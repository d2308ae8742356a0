#apps/payments/serializers.py:

from rest_framework import serializers

from .dto import (
    Cuota, PeriodoPromocional, MODALIDADES_CHOICES, ESTADOS_CUOTA_CHOICES,
    DECISIONES_CHOICES, DECISION_PENDIENTE,
)


class CuotaSerializer(serializers.Serializer):
    """Cuota tal como la envia /api/pagos-mensuales/cuotas/:id"""
    id_pago = serializers.IntegerField()
    id_matricula = serializers.IntegerField(required=False, allow_null=True)
    numero_cuota = serializers.IntegerField(min_value=1)
    monto = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    fecha_vencimiento = serializers.DateField(required=False, allow_null=True)
    modalidad_pago = serializers.ChoiceField(choices=MODALIDADES_CHOICES, required=False, allow_null=True)
    precio_por_clase = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    meses_duracion = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    estado = serializers.ChoiceField(choices=ESTADOS_CUOTA_CHOICES, required=False, default='pendiente')

    def to_cuota(self, data):
        precio = data.get('precio_por_clase')
        return Cuota(
            id_pago=data['id_pago'],
            id_matricula=data.get('id_matricula'),
            numero_cuota=data['numero_cuota'],
            monto=float(data['monto']),
            fecha_vencimiento=data.get('fecha_vencimiento'),
            modalidad_pago=data.get('modalidad_pago'),
            precio_por_clase=float(precio) if precio is not None else None,
            meses_duracion=data.get('meses_duracion'),
            estado=data.get('estado') or 'pendiente',
        )


class ValidarMontoSerializer(serializers.Serializer):
    # Se acepta cualquier valor JSON; uno no numerico es un rechazo, no un error 400
    monto_pagar = serializers.JSONField(required=False, allow_null=True)
    cuota = CuotaSerializer()
    modalidad_pago = serializers.ChoiceField(choices=MODALIDADES_CHOICES, required=False, allow_null=True)

    def get_cuota(self):
        return self.fields['cuota'].to_cuota(self.validated_data['cuota'])

    def get_modalidad(self):
        """La modalidad explicita tiene prioridad sobre la de la cuota"""
        return self.validated_data.get('modalidad_pago') or self.validated_data['cuota'].get('modalidad_pago')


class CuotasSerializer(serializers.Serializer):
    cuotas = CuotaSerializer(many=True)

    def get_cuotas(self):
        hijo = self.fields['cuotas'].child
        return [hijo.to_cuota(item) for item in self.validated_data['cuotas']]


class PeriodoPromocionalSerializer(serializers.Serializer):
    id_matricula = serializers.IntegerField()
    meses_gratis = serializers.IntegerField(required=False, default=0, min_value=0)
    fecha_inicio_cobro = serializers.DateField(required=False, allow_null=True)
    decision_estudiante = serializers.ChoiceField(
        choices=[(DECISION_PENDIENTE, 'Pendiente')] + DECISIONES_CHOICES,
        required=False,
        default=DECISION_PENDIENTE
    )
    fecha_decision = serializers.DateTimeField(required=False, allow_null=True)

    def to_periodo(self, data):
        return PeriodoPromocional(
            id_matricula=data['id_matricula'],
            meses_gratis=data.get('meses_gratis') or 0,
            fecha_inicio_cobro=data.get('fecha_inicio_cobro'),
            decision_estudiante=data.get('decision_estudiante') or DECISION_PENDIENTE,
            fecha_decision=data.get('fecha_decision'),
        )


class DecisionPromocionSerializer(serializers.Serializer):
    matricula = PeriodoPromocionalSerializer()
    decision = serializers.ChoiceField(choices=DECISIONES_CHOICES)

    def get_periodo(self):
        return self.fields['matricula'].to_periodo(self.validated_data['matricula'])


class ResumenCuotasRequestSerializer(CuotasSerializer):
    matricula = PeriodoPromocionalSerializer(required=False)

    def get_periodo(self):
        datos = self.validated_data.get('matricula')
        return self.fields['matricula'].to_periodo(datos) if datos else None


class ResultadoValidacionSerializer(serializers.Serializer):
    tipo = serializers.CharField()
    aceptado = serializers.BooleanField()
    mensaje = serializers.CharField()
    monto = serializers.FloatField(allow_null=True)
    montos_sugeridos = serializers.ListField(child=serializers.FloatField())
    monto_maximo = serializers.FloatField(allow_null=True)


class LimitesMontoSerializer(serializers.Serializer):
    paso = serializers.FloatField()
    minimo = serializers.FloatField()
    maximo = serializers.FloatField(allow_null=True)


class RegistroDecisionSerializer(serializers.Serializer):
    id_matricula = serializers.IntegerField()
    decision = serializers.CharField()
    fecha_decision = serializers.DateTimeField()


class ResumenPagosSerializer(serializers.Serializer):
    total_cuotas = serializers.IntegerField()
    cuotas_pagadas = serializers.IntegerField()
    cuotas_pendientes = serializers.IntegerField()
    cuotas_vencidas = serializers.IntegerField()
    cuotas_verificadas = serializers.IntegerField()
    monto_total = serializers.FloatField()
    monto_pagado = serializers.FloatField()
    monto_pendiente = serializers.FloatField()
