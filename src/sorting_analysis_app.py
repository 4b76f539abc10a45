"""
Sorting Analysis System - Backend de la Interfaz
================================================

Backend de la interfaz web del analizador de algoritmos de ordenamiento.
Mantiene los datos validados y los resultados del último análisis, y
prepara todo lo que la interfaz necesita mostrar.

Características:
- Validación de entrada manual o desde archivo de texto
- Generación de datos de ejemplo (tamaños o nombres de archivo)
- Análisis síncrono o en hilo de fondo con estado consultable
- Tabla de métricas, datos para gráficos y vista previa de lo ordenado
- Exportación CSV / JSON
- Log con timestamps para la UI

Todos los métodos públicos devuelven diccionarios con 'success' y
'message', listos para serializarse como JSON.

Autor: 2025
"""

import os
import threading
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from algoritmo.EfficiencyScorer import most_efficient, rate
from algoritmo.SortingAnalyzer import ALGORITHM_NAMES, SortingAnalyzer
from datos.DataUtils import (DATA_TYPES, InputValidationError, generate_sample_data,
                             parse_file_content, validate_input)
from datos.ExportUtils import (CSV_FILENAME, JSON_FILENAME, ExportError, export_to_csv,
                               export_to_json)

# ===== CONFIGURACIÓN =====
ROOT_DIR = Path(__file__).parent
INTERFACE_FILE = Path(os.environ.get('SORTING_INTERFACE_FILE', ROOT_DIR / 'interface.html'))
SAMPLE_SIZE = 15
PREVIEW_COUNT = 10
MAX_LOG_LINES = 1000
STATUS_LOG_TAIL = 50


class SortingAnalysisAPI:
    """
    API Backend para la interfaz web.
    Expone los métodos Python que consume el frontend (vía FastAPI).
    """

    def __init__(self):
        self.analyzer = SortingAnalyzer()
        self.status = {
            'phase': 'idle',
            'progress': 0,
            'message': 'Listo para comenzar',
            'substatus': '',
            'results': {}
        }

        # Datos del proceso
        self.current_data: List[Any] = []
        self.data_type: Optional[str] = None
        self.current_results: Dict[str, Any] = {}
        self.analysis_thread: Optional[threading.Thread] = None
        # Buffer simple de logs para UI
        self.log_buffer: list[str] = []
        self.max_log_lines = MAX_LOG_LINES

    def update_status(self, phase, progress, message, substatus=''):
        """Actualizar estado consultado por el frontend."""
        self.status = {
            'phase': phase,
            'progress': progress,
            'message': message,
            'substatus': substatus,
            'results': self.status.get('results', {})
        }

    def log(self, message: str):
        """Añade un mensaje al log de la UI."""
        ts = time.strftime('%H:%M:%S')
        line = f"[{ts}] {message}"
        self.log_buffer.append(line)
        if len(self.log_buffer) > self.max_log_lines:
            self.log_buffer = self.log_buffer[-self.max_log_lines:]

    def get_status(self):
        """Obtener estado actual (incluye las últimas líneas del log)."""
        return {**self.status, 'logs': self.log_buffer[-STATUS_LOG_TAIL:]}

    # ===================== ENTRADA DE DATOS =====================

    def validate_input(self, raw: Optional[str], data_type: str):
        """
        Validar la entrada manual y guardarla como datos actuales.

        Args:
            raw: Texto separado por comas
            data_type: 'integer' o 'text'

        Returns:
            dict: {'success', 'message', 'count'}; si falla, los datos
                actuales quedan vacíos.
        """
        try:
            values = validate_input(raw, data_type)
        except InputValidationError as e:
            self.current_data = []
            self.log(f"❌ Entrada rechazada: {e}")
            return {'success': False, 'message': str(e)}

        self.current_data = values
        self.data_type = data_type
        self.log(f"✅ {len(values)} valores validados ({data_type})")
        return {
            'success': True,
            'message': f'Validated {len(values)} items successfully!',
            'count': len(values)
        }

    def load_file_content(self, content, data_type: str):
        """Validar el contenido de un archivo de texto subido."""
        try:
            text = parse_file_content(content)
        except UnicodeDecodeError as e:
            self.current_data = []
            return {'success': False, 'message': f'Error reading file: {e}'}

        result = self.validate_input(text, data_type)
        if result['success']:
            result['message'] = f"Loaded {result['count']} items from file successfully!"
        return result

    def generate_sample_data(self, data_type: str, size: int = SAMPLE_SIZE, seed: Optional[int] = None):
        """Generar datos de ejemplo para el campo de entrada (no se validan aquí)."""
        if data_type not in DATA_TYPES:
            return {'success': False, 'message': f'Unknown data type "{data_type}"'}
        if size < 1:
            return {'success': False, 'message': 'Sample size must be at least 1'}

        sample = generate_sample_data(data_type, size, seed=seed)
        self.log(f"🎲 Datos de ejemplo generados: {size} ({data_type})")
        return {
            'success': True,
            'data': sample,
            'message': 'Sample data generated! Click "Validate Input" to continue.'
        }

    # ===================== ANÁLISIS =====================

    def _check_ready(self, algorithms: Optional[Iterable[str]]):
        if not self.current_data:
            return {'success': False, 'level': 'warning', 'message': 'Please validate input data first'}
        if not algorithms:
            return {'success': False, 'level': 'warning', 'message': 'Please select at least one algorithm'}
        return None

    def _execute(self, algorithms: Iterable[str]):
        results = self.analyzer.run_all_algorithms(self.current_data, algorithms)
        self.current_results = results
        best = most_efficient(results)
        payload = self.build_results_payload()
        self.status['results'] = payload
        self.log(f"🏆 Más eficiente: {ALGORITHM_NAMES[best]}" if best else "⚠️ Sin resultados")
        return payload

    def run_analysis(self, algorithms: Optional[List[str]]):
        """
        Ejecutar los algoritmos seleccionados sobre los datos validados.

        Returns:
            dict: {'success', 'message', 'results'} donde 'results' es
                build_results_payload().
        """
        not_ready = self._check_ready(algorithms)
        if not_ready:
            return not_ready

        try:
            payload = self._execute(algorithms)
        except ValueError as e:
            self.log(f"❌ Error en análisis: {e}")
            return {'success': False, 'message': f'Error during analysis: {e}'}

        return {'success': True, 'message': 'Analysis completed successfully!', 'results': payload}

    def start_analysis(self, algorithms: Optional[List[str]]):
        """
        Iniciar análisis en un hilo de fondo; el progreso se consulta con get_status().
        """
        not_ready = self._check_ready(algorithms)
        if not_ready:
            return not_ready

        thread = threading.Thread(
            target=self._analysis_worker,
            args=(list(algorithms),)
        )
        thread.daemon = True
        self.analysis_thread = thread
        thread.start()
        return {'success': True, 'message': 'Análisis iniciado'}

    def _analysis_worker(self, algorithms):
        """Worker thread para análisis."""
        try:
            self.update_status('analysis', 10, '📊 Iniciando análisis...',
                               f'{len(self.current_data)} elementos')

            self.update_status('analysis', 30, '🔢 Ejecutando algoritmos...',
                               ', '.join(algorithms))
            self._execute(algorithms)

            self.update_status('analysis', 100, '✅ Análisis completado', '')
        except Exception as e:
            self.log(f"❌ Error en análisis: {e}")
            self.update_status('error', 0, f'❌ Error: {str(e)}', '')

    # ===================== PRESENTACIÓN =====================

    def build_metrics_table(self):
        """Filas de la tabla de métricas, marcando el algoritmo más eficiente."""
        best = most_efficient(self.current_results)
        rows = []
        for algorithm, result in self.current_results.items():
            metrics = result.metrics
            rows.append({
                'algorithm': algorithm,
                'name': ALGORITHM_NAMES[algorithm],
                'execution_time': round(metrics.execution_time, 4),
                'comparisons': metrics.comparisons,
                'operations': metrics.swaps + metrics.moves,
                'efficiency': rate(metrics),
                'most_efficient': algorithm == best,
            })
        return rows

    def build_chart_data(self):
        """Series de los tres gráficos de barras (tiempo, comparaciones, swaps/moves)."""
        results = self.current_results.values()
        return {
            'labels': [ALGORITHM_NAMES[a] for a in self.current_results],
            'execution_time': [r.metrics.execution_time for r in results],
            'comparisons': [r.metrics.comparisons for r in results],
            'swaps_moves': [r.metrics.swaps + r.metrics.moves for r in results],
        }

    def build_sorted_preview(self, limit: int = PREVIEW_COUNT):
        """Primeros `limit` elementos ordenados de cada algoritmo y cuántos faltan."""
        best = most_efficient(self.current_results)
        preview = []
        for algorithm, result in self.current_results.items():
            shown = result.sorted[:limit]
            preview.append({
                'algorithm': algorithm,
                'name': ALGORITHM_NAMES[algorithm],
                'items': shown,
                'remaining': len(result.sorted) - len(shown),
                'total': len(result.sorted),
                'most_efficient': algorithm == best,
            })
        return preview

    def build_results_payload(self):
        return {
            'most_efficient': most_efficient(self.current_results),
            'table': self.build_metrics_table(),
            'charts': self.build_chart_data(),
            'sorted_preview': self.build_sorted_preview(),
        }

    # ===================== EXPORTACIÓN =====================

    def export_csv(self):
        try:
            content = export_to_csv(self.current_results)
        except ExportError as e:
            return {'success': False, 'level': 'warning', 'message': str(e)}
        self.log(f"💾 Resultados exportados: {CSV_FILENAME}")
        return {'success': True, 'filename': CSV_FILENAME, 'content': content,
                'message': 'Results exported as CSV'}

    def export_json(self):
        try:
            content = export_to_json(self.current_results, self.current_data)
        except ExportError as e:
            return {'success': False, 'level': 'warning', 'message': str(e)}
        self.log(f"💾 Resultados exportados: {JSON_FILENAME}")
        return {'success': True, 'filename': JSON_FILENAME, 'content': content,
                'message': 'Results exported as JSON'}

    def reset(self):
        """Limpiar datos, resultados y estado."""
        self.current_data = []
        self.data_type = None
        self.current_results = {}
        self.status = {
            'phase': 'idle',
            'progress': 0,
            'message': 'Listo para comenzar',
            'substatus': '',
            'results': {}
        }
        self.log("🔄 Aplicación reiniciada")
        return {'success': True, 'message': 'Application reset successfully'}
