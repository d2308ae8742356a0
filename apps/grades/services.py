import logging
import math
from collections import OrderedDict

from .dto import (
    MODULO_SIN_ASIGNAR, EstadisticasCurso, PromedioCurso, PromedioEstudiante,
    PromedioGlobal, PromedioModulo,
)

logger = logging.getLogger(__name__)

# Nota minima de aprobacion sobre 10, igual para todo el sistema
NOTA_APROBACION = 7.0
ESCALA_MAXIMA = 10.0

ESTADO_APROBADO = 'APROBADO'
ESTADO_REPROBADO = 'REPROBADO'

ETIQUETAS_NOTA = [
    (9.0, 'Excelente'),
    (8.0, 'Muy Bueno'),
    (NOTA_APROBACION, 'Aprobado'),
    (5.0, 'Regular'),
]
ETIQUETA_MINIMA = 'Insuficiente'


def estado_aprobacion(valor):
    return ESTADO_APROBADO if valor >= NOTA_APROBACION else ESTADO_REPROBADO


def etiqueta_nota(valor):
    for minimo, etiqueta in ETIQUETAS_NOTA:
        if valor >= minimo:
            return etiqueta
    return ETIQUETA_MINIMA


class CalculadoraPromedios:
    """Servicio para calcular promedios por modulo y promedio global del curso"""

    @staticmethod
    def aporte_registro(registro):
        """
        Aporte de una tarea al modulo: (nota / nota_maxima) * ponderacion.
        Devuelve (aporte, valido). Una nota maxima no positiva es un error
        de datos y aporta 0.
        """
        nota_maxima = registro.nota_maxima
        if nota_maxima is None or not math.isfinite(nota_maxima) or nota_maxima <= 0:
            return 0.0, False

        nota = registro.nota if registro.nota is not None else 0.0
        if not math.isfinite(nota):
            return 0.0, False

        return (nota / nota_maxima) * registro.ponderacion, True

    @staticmethod
    def calcular_promedios_modulos(registros):
        """Agrupa las notas por modulo y acumula sus aportes ponderados"""
        grupos = OrderedDict()
        for registro in registros or []:
            id_modulo = registro.id_modulo if registro.id_modulo is not None else MODULO_SIN_ASIGNAR
            grupos.setdefault(id_modulo, []).append(registro)

        modulos = []
        for id_modulo, registros_modulo in grupos.items():
            primero = registros_modulo[0]
            acumulado = 0.0
            invalidas = []

            for registro in registros_modulo:
                aporte, valido = CalculadoraPromedios.aporte_registro(registro)
                if not valido:
                    invalidas.append(registro.id_tarea)
                    continue
                acumulado += aporte

            if invalidas:
                logger.warning(
                    "Modulo %s: tareas con nota maxima invalida %s, aportan 0",
                    id_modulo, invalidas
                )

            modulos.append(PromedioModulo(
                id_modulo=id_modulo,
                nombre=primero.nombre_modulo,
                orden=primero.orden_modulo,
                promedio_ponderado=acumulado,
                total_tareas=len(registros_modulo),
                tareas_calificadas=sum(1 for r in registros_modulo if r.calificada),
                publicado=all(r.promedios_publicados for r in registros_modulo),
                tareas_invalidas=tuple(invalidas),
            ))

        return sorted(modulos, key=lambda m: (m.orden, m.id_modulo))

    @staticmethod
    def calcular_promedio_global(modulos, ponderacion_por_modulo):
        """
        Suma los promedios ponderados de los modulos llevandolos a escala 0-10.

        Si cada modulo aporta hasta ``ponderacion_por_modulo`` puntos y ese
        valor es 10 / N, la suma ya esta sobre 10. El promedio solo es visible
        cuando todos los modulos tienen sus promedios publicados; si no lo es,
        no se informa estado ni etiqueta. Estado y etiqueta se calculan sobre
        el valor sin redondear.
        """
        modulos = list(modulos or [])
        visible = all(m.publicado for m in modulos)

        if not modulos:
            valor = 0.0
        elif not ponderacion_por_modulo or ponderacion_por_modulo <= 0:
            # Sin escala no hay nota que informar
            logger.warning("Ponderacion por modulo no positiva: %s", ponderacion_por_modulo)
            return PromedioGlobal(valor=0.0, visible=False)
        else:
            suma = sum(m.promedio_ponderado for m in modulos)
            valor = suma * (ESCALA_MAXIMA / (len(modulos) * ponderacion_por_modulo))

        if not visible:
            return PromedioGlobal(valor=round(valor, 2), visible=False)

        return PromedioGlobal(
            valor=round(valor, 2),
            visible=True,
            estado=estado_aprobacion(valor),
            etiqueta=etiqueta_nota(valor),
        )

    @staticmethod
    def calcular_promedio_curso(id_curso, registros, ponderacion_por_modulo=None):
        modulos = CalculadoraPromedios.calcular_promedios_modulos(registros)
        if ponderacion_por_modulo is None:
            ponderacion_por_modulo = ESCALA_MAXIMA / len(modulos) if modulos else 0

        return PromedioCurso(
            id_curso=id_curso,
            promedio_global=CalculadoraPromedios.calcular_promedio_global(
                modulos, ponderacion_por_modulo
            ),
            modulos=modulos,
        )

    @staticmethod
    def calcular_estadisticas_curso(id_curso, registros, nombres=None):
        """Resumen de aprobados y reprobados de un curso a partir de las notas de todos sus estudiantes"""
        nombres = nombres or {}
        por_estudiante = OrderedDict()
        for registro in registros or []:
            por_estudiante.setdefault(registro.id_estudiante, []).append(registro)

        estudiantes = []
        for id_estudiante in sorted(por_estudiante, key=lambda k: (k is None, k or 0)):
            promedio = CalculadoraPromedios.calcular_promedio_curso(
                id_curso, por_estudiante[id_estudiante]
            )
            estudiantes.append(PromedioEstudiante(
                id_estudiante=id_estudiante,
                promedio=promedio,
                nombre_completo=nombres.get(id_estudiante, ''),
            ))

        visibles = [e.promedio.promedio_global for e in estudiantes if e.promedio.promedio_global.visible]
        aprobados = sum(1 for p in visibles if p.estado == ESTADO_APROBADO)

        return EstadisticasCurso(
            id_curso=id_curso,
            total_estudiantes=len(estudiantes),
            aprobados=aprobados,
            reprobados=len(visibles) - aprobados,
            ocultos=len(estudiantes) - len(visibles),
            porcentaje_aprobacion=round(aprobados * 100 / len(visibles), 2) if visibles else 0.0,
            promedio_global_curso=round(sum(p.valor for p in visibles) / len(visibles), 2) if visibles else 0.0,
            estudiantes=estudiantes,
        )
