import logging
import math
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.utils import timezone

from .dto import (
    ACEPTADO, RECHAZADO_MINIMO, RECHAZADO_NO_MULTIPLO, RECHAZADO_MAXIMO,
    MODALIDAD_MENSUAL, MODALIDAD_CLASES, DECISION_CONTINUAR, DECISION_RECHAZAR,
    LimitesMonto, RegistroDecision, ResultadoValidacion, ResumenPagos,
)
from .exceptions import DecisionInvalidaError, DecisionYaTomadaError

logger = logging.getLogger(__name__)

MONTO_BASE_MENSUAL = 90
DURACION_MESES_DEFECTO = 12
TOLERANCIA_MULTIPLO = 1e-4
PASO_LIBRE = 0.01


def monto_base_mensual():
    return float(getattr(settings, 'PAGOS_MONTO_BASE_MENSUAL', MONTO_BASE_MENSUAL))


def duracion_meses_defecto():
    return int(getattr(settings, 'PAGOS_DURACION_MESES_DEFECTO', DURACION_MESES_DEFECTO))


def tolerancia_multiplo():
    return float(getattr(settings, 'PAGOS_TOLERANCIA_MULTIPLO', TOLERANCIA_MULTIPLO))


def formatear_monto(monto):
    try:
        valor = float(monto or 0)
    except (TypeError, ValueError):
        valor = 0.0
    return f"${valor:.2f}"


def convertir_monto(valor):
    """Convierte el monto ingresado (numero o texto decimal) a float; None si no es valido"""
    if valor is None or isinstance(valor, bool):
        return None
    try:
        monto = float(Decimal(str(valor).strip()))
    except (InvalidOperation, ValueError):
        return None
    if not math.isfinite(monto):
        return None
    return monto


def es_multiplo_de(valor, base, tolerancia=None):
    """Compara la razon valor/base con su entero mas cercano, nunca con igualdad exacta"""
    if not base:
        return False
    tolerancia = tolerancia_multiplo() if tolerancia is None else tolerancia
    razon = valor / base
    return abs(razon - round(razon)) < tolerancia


def _plural(cantidad, singular, plural):
    return singular if cantidad == 1 else plural


class ValidadorMontoCuota:
    """Valida el monto que un estudiante propone pagar para una cuota"""

    @staticmethod
    def meses_restantes(cuota):
        duracion = cuota.meses_duracion or duracion_meses_defecto()
        return max(duracion - cuota.numero_cuota + 1, 0)

    @staticmethod
    def base_por_clase(cuota):
        return float(cuota.precio_por_clase or cuota.monto or 0)

    @staticmethod
    def sugerencias(monto, base, maximo=None):
        razon = monto / base
        unidades = math.floor(razon)
        inferior = round(unidades * base, 2)
        superior = round((unidades + 1) * base, 2)
        sugeridos = [m for m in (inferior, superior) if m >= base]
        if maximo is not None:
            sugeridos = [m for m in sugeridos if m <= maximo]
        return unidades, tuple(sugeridos)

    @staticmethod
    def validar_monto(monto_propuesto, modalidad, cuota):
        monto = convertir_monto(monto_propuesto)
        if monto is None or monto <= 0:
            return ResultadoValidacion(
                tipo=RECHAZADO_MINIMO,
                mensaje='El monto a pagar debe ser mayor a 0',
                monto=monto,
            )

        monto_cuota = float(cuota.monto or 0)
        if monto_cuota > 0 and monto < monto_cuota:
            return ResultadoValidacion(
                tipo=RECHAZADO_MINIMO,
                mensaje=f"El monto mínimo a pagar es {formatear_monto(monto_cuota)}",
                monto=monto,
            )

        if modalidad == MODALIDAD_MENSUAL:
            resultado = ValidadorMontoCuota._validar_mensual(monto, cuota)
        elif modalidad == MODALIDAD_CLASES:
            resultado = ValidadorMontoCuota._validar_por_clases(monto, cuota)
        else:
            resultado = None

        if resultado is not None:
            logger.debug("Cuota %s: monto %s rechazado (%s)", cuota.id_pago, monto, resultado.tipo)
            return resultado

        return ResultadoValidacion(tipo=ACEPTADO, mensaje='Monto válido', monto=monto)

    @staticmethod
    def _validar_mensual(monto, cuota):
        base = monto_base_mensual()
        restantes = ValidadorMontoCuota.meses_restantes(cuota)
        maximo = round(base * restantes, 2)

        if monto < base:
            return ResultadoValidacion(
                tipo=RECHAZADO_MINIMO,
                mensaje=f"El monto mínimo para cursos mensuales es {formatear_monto(base)} (1 mes)",
                monto=monto,
            )

        if not es_multiplo_de(monto, base):
            meses, sugeridos = ValidadorMontoCuota.sugerencias(monto, base, maximo)
            if not sugeridos:
                # Ningun multiplo cabe bajo el techo de la cuota
                return ValidadorMontoCuota._rechazo_maximo(monto, maximo, restantes, cuota)
            opciones = ' o '.join(
                f"{formatear_monto(m)} ({int(round(m / base))} {_plural(int(round(m / base)), 'mes', 'meses')})"
                for m in sugeridos
            )
            return ResultadoValidacion(
                tipo=RECHAZADO_NO_MULTIPLO,
                mensaje=(
                    f"Para cursos mensuales solo se permiten múltiplos de {formatear_monto(base)}. "
                    f"Puedes pagar: {opciones}"
                ),
                monto=monto,
                montos_sugeridos=sugeridos,
                monto_maximo=maximo,
            )

        if monto > maximo:
            return ValidadorMontoCuota._rechazo_maximo(monto, maximo, restantes, cuota)

        return None

    @staticmethod
    def _rechazo_maximo(monto, maximo, restantes, cuota):
        duracion = cuota.meses_duracion or duracion_meses_defecto()
        return ResultadoValidacion(
            tipo=RECHAZADO_MAXIMO,
            mensaje=(
                f"El monto máximo para este curso es {formatear_monto(maximo)} "
                f"({restantes} {_plural(restantes, 'mes restante', 'meses restantes')}). "
                f"Estás en la cuota {cuota.numero_cuota} de {duracion}."
            ),
            monto=monto,
            monto_maximo=maximo,
        )

    @staticmethod
    def _validar_por_clases(monto, cuota):
        base = ValidadorMontoCuota.base_por_clase(cuota)
        if base <= 0:
            # Sin precio por clase no hay regla que aplicar
            return None

        if monto < base:
            return ResultadoValidacion(
                tipo=RECHAZADO_MINIMO,
                mensaje=f"El monto mínimo para este curso es {formatear_monto(base)} (1 clase)",
                monto=monto,
            )

        if not es_multiplo_de(monto, base):
            _, sugeridos = ValidadorMontoCuota.sugerencias(monto, base)
            ejemplos = ', '.join(formatear_monto(base * n) for n in (1, 2, 3))
            return ResultadoValidacion(
                tipo=RECHAZADO_NO_MULTIPLO,
                mensaje=(
                    f"Para este curso solo se permiten múltiplos de {formatear_monto(base)}. "
                    f"Ejemplos válidos: {ejemplos}..."
                ),
                monto=monto,
                montos_sugeridos=sugeridos,
            )

        return None

    @staticmethod
    def limites_monto(cuota):
        """Paso, minimo y maximo para el campo de monto del formulario de pago"""
        if cuota.modalidad_pago == MODALIDAD_MENSUAL:
            base = monto_base_mensual()
            return LimitesMonto(
                paso=base,
                minimo=base,
                maximo=round(base * ValidadorMontoCuota.meses_restantes(cuota), 2),
            )

        if cuota.modalidad_pago == MODALIDAD_CLASES:
            base = ValidadorMontoCuota.base_por_clase(cuota)
            if base > 0:
                return LimitesMonto(paso=round(base, 2), minimo=round(base, 2))

        return LimitesMonto(paso=PASO_LIBRE, minimo=PASO_LIBRE)


def decidir_continuacion_promocional(periodo, decision, ahora=None):
    """
    Prepara la decision del estudiante sobre su curso promocional.
    Solo se puede decidir una vez; el backend es quien la persiste.
    """
    if decision not in (DECISION_CONTINUAR, DECISION_RECHAZAR):
        raise DecisionInvalidaError(f"Decisión no válida: {decision!r}")

    if periodo.decision_tomada:
        raise DecisionYaTomadaError(periodo.id_matricula, periodo.decision_estudiante)

    registro = RegistroDecision(
        id_matricula=periodo.id_matricula,
        decision=decision,
        fecha_decision=ahora or timezone.now(),
    )
    logger.info("Matricula %s: decision promocional '%s'", periodo.id_matricula, decision)
    return registro


def promocion_terminada(periodo, hoy=None):
    """El periodo gratuito termina cuando llega la fecha de inicio de cobro"""
    if not periodo or not periodo.fecha_inicio_cobro:
        return False
    hoy = hoy or timezone.localdate()
    return periodo.fecha_inicio_cobro <= hoy


def cuotas_visibles(cuotas, periodo=None):
    """Si el estudiante rechazo continuar, solo quedan las cuotas del periodo gratuito"""
    cuotas = sorted(cuotas or [], key=lambda c: c.numero_cuota)
    if periodo and periodo.decision_estudiante == DECISION_RECHAZAR and periodo.meses_gratis:
        return [c for c in cuotas if c.numero_cuota <= periodo.meses_gratis]
    return cuotas


def resumir_cuotas(cuotas):
    cuotas = list(cuotas or [])
    pagadas = [c for c in cuotas if c.estado in ('pagado', 'verificado')]
    pendientes = [c for c in cuotas if c.estado in ('pendiente', 'rechazado')]
    vencidas = [c for c in cuotas if c.estado == 'vencido']

    return ResumenPagos(
        total_cuotas=len(cuotas),
        cuotas_pagadas=len(pagadas),
        cuotas_pendientes=len(pendientes),
        cuotas_vencidas=len(vencidas),
        cuotas_verificadas=sum(1 for c in cuotas if c.estado == 'verificado'),
        monto_total=round(sum(float(c.monto or 0) for c in cuotas), 2),
        monto_pagado=round(sum(float(c.monto or 0) for c in pagadas), 2),
        monto_pendiente=round(sum(float(c.monto or 0) for c in pendientes + vencidas), 2),
    )
