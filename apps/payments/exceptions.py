"""Excepciones del modulo de pagos"""


class PagoError(Exception):
    """Excepcion base para errores de pagos"""


class DecisionInvalidaError(PagoError):
    """Se lanza cuando la decision sobre una promocion no es 'continuar' ni 'rechazar'"""


class EstadoInvalidoError(PagoError):
    """Se lanza cuando la operacion no es posible en el estado actual de la entidad"""


class DecisionYaTomadaError(EstadoInvalidoError):
    """Se lanza al intentar decidir de nuevo sobre una matricula promocional"""

    codigo = 'DECISION_YA_TOMADA'

    def __init__(self, id_matricula, decision_actual):
        self.id_matricula = id_matricula
        self.decision_actual = decision_actual
        super().__init__(
            f"La matricula {id_matricula} ya tiene la decision '{decision_actual}'"
        )
