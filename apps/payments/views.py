#apps/payments/views.py:

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from apps.authentication.permissions import IsEstudianteOrAdministrador
from .exceptions import DecisionInvalidaError, DecisionYaTomadaError
from .serializers import (
    ValidarMontoSerializer, CuotaSerializer, ResumenCuotasRequestSerializer,
    DecisionPromocionSerializer, ResultadoValidacionSerializer, LimitesMontoSerializer,
    ResumenPagosSerializer, RegistroDecisionSerializer
)
from .services import (
    ValidadorMontoCuota, decidir_continuacion_promocional, resumir_cuotas,
    cuotas_visibles, promocion_terminada, formatear_monto
)


class CuotasViewSet(viewsets.GenericViewSet):
    """Validaciones previas al envio del pago de una cuota"""
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['post'], url_path='validar-monto')
    def validar_monto(self, request):
        """Valida el monto propuesto segun la modalidad de pago del curso"""
        serializer = ValidarMontoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        resultado = ValidadorMontoCuota.validar_monto(
            serializer.validated_data.get('monto_pagar'),
            serializer.get_modalidad(),
            serializer.get_cuota()
        )
        data = ResultadoValidacionSerializer(resultado).data
        data['monto_formateado'] = formatear_monto(resultado.monto) if resultado.monto is not None else None
        return Response(data)

    @action(detail=False, methods=['post'])
    def limites(self, request):
        """Paso, minimo y maximo del monto para una cuota"""
        serializer = CuotaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        limites = ValidadorMontoCuota.limites_monto(serializer.to_cuota(serializer.validated_data))
        return Response(LimitesMontoSerializer(limites).data)

    @action(detail=False, methods=['post'])
    def resumen(self, request):
        """Resumen de cuotas de una matricula"""
        serializer = ResumenCuotasRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        periodo = serializer.get_periodo()
        visibles = cuotas_visibles(serializer.get_cuotas(), periodo)
        return Response({
            'resumen': ResumenPagosSerializer(resumir_cuotas(visibles)).data,
            'cuotas_visibles': [c.numero_cuota for c in visibles],
            'promocion_terminada': promocion_terminada(periodo)
        })


class PromocionesViewSet(viewsets.GenericViewSet):
    """Decision del estudiante sobre su curso promocional"""
    permission_classes = [IsAuthenticated, IsEstudianteOrAdministrador]

    @action(detail=False, methods=['post'])
    def decision(self, request):
        serializer = DecisionPromocionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            registro = decidir_continuacion_promocional(
                serializer.get_periodo(),
                serializer.validated_data['decision']
            )
        except DecisionYaTomadaError as e:
            return Response(
                {'error': str(e), 'codigo': e.codigo},
                status=status.HTTP_409_CONFLICT
            )
        except DecisionInvalidaError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RegistroDecisionSerializer(registro).data)
