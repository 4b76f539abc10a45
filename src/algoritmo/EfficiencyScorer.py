"""
Efficiency Scorer
=================

Puntaje compuesto y calificación de eficiencia a partir de las métricas de
una ejecución de ordenamiento.

- score(): costo = tiempo(ms) + comparaciones*0.1 + (swaps + moves)*0.1
  (menor es mejor; se usa para elegir el algoritmo más eficiente)
- rate(): eficiencia = 1000 / costo, clasificada en
  Excellent (>50), Good (>20), Fair (>10) o Poor

La ponderación favorece el tiempo y descuenta las operaciones por un factor
de 10. Es una heurística, no una métrica de complejidad.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Optional


OPERATION_WEIGHT = 0.1

# (umbral, etiqueta) de mayor a menor; se usa el primero que se supere
RATING_THRESHOLDS = (
    (50, 'Excellent'),
    (20, 'Good'),
    (10, 'Fair'),
)
LOWEST_RATING = 'Poor'


def total_operations(metrics) -> int:
    return metrics.comparisons + metrics.swaps + metrics.moves


def score(metrics) -> float:
    """Costo compuesto de una ejecución (menor es mejor)."""
    return (metrics.execution_time
            + metrics.comparisons * OPERATION_WEIGHT
            + (metrics.swaps + metrics.moves) * OPERATION_WEIGHT)


def rate(metrics) -> str:
    """
    Calificación de eficiencia: 'Excellent', 'Good', 'Fair' o 'Poor'.

    Usa el mismo denominador que score() pero invertido: 1000 / costo.
    Un costo de 0 (entrada vacía medida en 0 ms) se considera eficiencia
    infinita.
    """
    cost = score(metrics)
    efficiency = 1000 / cost if cost > 0 else math.inf

    for threshold, label in RATING_THRESHOLDS:
        if efficiency > threshold:
            return label
    return LOWEST_RATING


def most_efficient(results: Dict[str, Any]) -> Optional[str]:
    """
    Identificador del algoritmo con el menor score() estricto.

    Ante empates se conserva el primero en orden de iteración. Un
    diccionario vacío devuelve None.
    """
    best_algorithm = None
    best_score = math.inf

    for algorithm, result in results.items():
        current = score(result.metrics)
        if current < best_score:
            best_score = current
            best_algorithm = algorithm

    return best_algorithm
