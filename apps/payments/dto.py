#apps/payments/dto.py:

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

MODALIDAD_MENSUAL = 'mensual'
MODALIDAD_CLASES = 'clases'
MODALIDADES_CHOICES = [
    (MODALIDAD_MENSUAL, 'Mensual'),
    (MODALIDAD_CLASES, 'Por clases'),
]

ESTADOS_CUOTA_CHOICES = [
    ('pendiente', 'Pendiente'),
    ('pagado', 'Pagado'),
    ('verificado', 'Verificado'),
    ('vencido', 'Vencido'),
    ('rechazado', 'Rechazado'),
]

DECISION_PENDIENTE = 'pendiente'
DECISION_CONTINUAR = 'continuar'
DECISION_RECHAZAR = 'rechazar'
DECISIONES_CHOICES = [
    (DECISION_CONTINUAR, 'Continuar'),
    (DECISION_RECHAZAR, 'Rechazar'),
]

ACEPTADO = 'ACEPTADO'
RECHAZADO_MINIMO = 'RECHAZADO_MINIMO'
RECHAZADO_NO_MULTIPLO = 'RECHAZADO_NO_MULTIPLO'
RECHAZADO_MAXIMO = 'RECHAZADO_MAXIMO'


@dataclass(frozen=True)
class Cuota:
    id_pago: int
    numero_cuota: int
    monto: float
    id_matricula: Optional[int] = None
    fecha_vencimiento: Optional[date] = None
    modalidad_pago: Optional[str] = None
    precio_por_clase: Optional[float] = None
    meses_duracion: Optional[int] = None
    estado: str = 'pendiente'


@dataclass(frozen=True)
class PeriodoPromocional:
    id_matricula: int
    meses_gratis: int = 0
    fecha_inicio_cobro: Optional[date] = None
    decision_estudiante: str = DECISION_PENDIENTE
    fecha_decision: Optional[datetime] = None

    @property
    def decision_tomada(self):
        return self.decision_estudiante != DECISION_PENDIENTE


@dataclass(frozen=True)
class ResultadoValidacion:
    tipo: str
    mensaje: str = ''
    monto: Optional[float] = None
    montos_sugeridos: Tuple[float, ...] = ()
    monto_maximo: Optional[float] = None

    @property
    def aceptado(self):
        return self.tipo == ACEPTADO


@dataclass(frozen=True)
class RegistroDecision:
    """Solicitud que se envia al backend; este servicio no la persiste"""
    id_matricula: int
    decision: str
    fecha_decision: datetime


@dataclass(frozen=True)
class LimitesMonto:
    paso: float
    minimo: float
    maximo: Optional[float] = None


@dataclass(frozen=True)
class ResumenPagos:
    total_cuotas: int
    cuotas_pagadas: int
    cuotas_pendientes: int
    cuotas_vencidas: int
    cuotas_verificadas: int
    monto_total: float
    monto_pagado: float
    monto_pendiente: float
