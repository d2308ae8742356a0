#apps/grades/dto.py:

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Clave sintetica para tareas sin modulo asignado
MODULO_SIN_ASIGNAR = 0


@dataclass(frozen=True)
class RegistroNota:
    """Nota de una tarea tal como llega del backend (solo lectura)"""
    id_tarea: int
    nota_maxima: float
    id_modulo: int = MODULO_SIN_ASIGNAR
    id_estudiante: Optional[int] = None
    nota: Optional[float] = None
    ponderacion: float = 1.0
    nombre_modulo: str = ''
    orden_modulo: int = 0
    promedios_publicados: bool = False

    @property
    def calificada(self):
        return self.nota is not None


@dataclass(frozen=True)
class PromedioModulo:
    id_modulo: int
    nombre: str
    orden: int
    promedio_ponderado: float
    total_tareas: int
    tareas_calificadas: int
    publicado: bool
    tareas_invalidas: Tuple[int, ...] = ()

    @property
    def tiene_incidencias(self):
        return bool(self.tareas_invalidas)


@dataclass(frozen=True)
class PromedioGlobal:
    valor: float
    visible: bool
    estado: Optional[str] = None
    etiqueta: Optional[str] = None


@dataclass(frozen=True)
class PromedioCurso:
    id_curso: int
    promedio_global: PromedioGlobal
    modulos: List[PromedioModulo] = field(default_factory=list)


@dataclass(frozen=True)
class PromedioEstudiante:
    id_estudiante: Optional[int]
    promedio: PromedioCurso
    nombre_completo: str = ''


@dataclass(frozen=True)
class EstadisticasCurso:
    id_curso: int
    total_estudiantes: int
    aprobados: int
    reprobados: int
    ocultos: int
    porcentaje_aprobacion: float
    promedio_global_curso: float
    estudiantes: List[PromedioEstudiante] = field(default_factory=list)
