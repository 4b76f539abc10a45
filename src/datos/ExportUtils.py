"""
Export Utils - Exportación de Resultados a CSV y JSON
======================================================

Serializa los resultados de un análisis (identificador -> SortResult) para
descargarlos desde la interfaz.

Archivos Generados:
-------------------
1. sorting-analysis.csv: una fila por algoritmo con tiempo, comparaciones,
   swaps, moves, operaciones totales, eficiencia y datos ordenados
   (separados por ';')
2. sorting-analysis.json: timestamp, datos originales, resultados completos
   y un resumen (algoritmos ejecutados, el más eficiente, tamaño de entrada)
"""

import csv
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from algoritmo.EfficiencyScorer import most_efficient, rate, total_operations


CSV_FILENAME = 'sorting-analysis.csv'
JSON_FILENAME = 'sorting-analysis.json'

CSV_COLUMNS = ['Algorithm', 'Execution Time (ms)', 'Comparisons', 'Swaps', 'Moves',
               'Total Operations', 'Efficiency', 'Sorted Data']


class ExportError(RuntimeError):
    """No hay nada que exportar."""


def _ensure_results(results: Dict[str, Any]):
    if not results:
        raise ExportError('No results to export')


def results_to_dataframe(results: Dict[str, Any]) -> pd.DataFrame:
    """
    Tabla resumen con una fila por algoritmo.

    Returns:
        pd.DataFrame: Columnas CSV_COLUMNS, en el orden de `results`.
    """
    rows = []
    for algorithm, result in results.items():
        metrics = result.metrics
        rows.append({
            'Algorithm': algorithm,
            'Execution Time (ms)': metrics.execution_time,
            'Comparisons': metrics.comparisons,
            'Swaps': metrics.swaps,
            'Moves': metrics.moves,
            'Total Operations': total_operations(metrics),
            'Efficiency': rate(metrics),
            'Sorted Data': ';'.join(str(value) for value in result.sorted),
        })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_to_csv(results: Dict[str, Any]) -> str:
    """
    CSV con los campos de texto entre comillas y el tiempo con 4 decimales.

    Raises:
        ExportError: Si no hay resultados.
    """
    _ensure_results(results)
    df = results_to_dataframe(results)
    return df.to_csv(index=False, quoting=csv.QUOTE_NONNUMERIC,
                     float_format='%.4f', lineterminator='\n')


def _iso_timestamp(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_export_payload(results: Dict[str, Any], original_data: List[Any],
                         timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    _ensure_results(results)
    return {
        'timestamp': _iso_timestamp(timestamp),
        'originalData': list(original_data),
        'results': {
            algorithm: {
                'sorted': list(result.sorted),
                'metrics': result.metrics.to_dict(),
            }
            for algorithm, result in results.items()
        },
        'summary': {
            'totalAlgorithms': len(results),
            'mostEfficient': most_efficient(results),
            'dataCount': len(original_data),
        },
    }


def export_to_json(results: Dict[str, Any], original_data: List[Any],
                   timestamp: Optional[datetime] = None) -> str:
    """
    JSON indentado con timestamp, datos originales, resultados y resumen.

    Raises:
        ExportError: Si no hay resultados.
    """
    payload = build_export_payload(results, original_data, timestamp)
    return json.dumps(payload, indent=2, ensure_ascii=False)
