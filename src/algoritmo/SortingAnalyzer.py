"""
Sorting Analyzer - Ordenamiento Instrumentado para Archivos
============================================================

Este módulo ejecuta 4 algoritmos clásicos de ordenamiento sobre datos
proporcionados por el usuario (tamaños de archivo o nombres de archivo) y
mide el costo de cada uno: tiempo, comparaciones, intercambios (swaps) y
movimientos (moves).

Algoritmos Implementados:
-------------------------
1. BubbleSort - O(n²) - Pasadas de pares adyacentes
2. SelectionSort - O(n²) - Selección del mínimo
3. InsertionSort - O(n²) - Desplazamiento de la llave
4. MergeSort - O(n log n) - Divide y conquista, estable

Métricas:
---------
- comparisons: cada evaluación de la relación de orden (+1 siempre, incluso
  si los elementos son iguales)
- swaps: intercambios in-place (Bubble y Selection)
- moves: asignaciones de un elemento en una posición (Insertion y Merge)
- execution_time: tiempo en milisegundos medido con time.perf_counter()

Cada ejecución crea su propio objeto Metrics, por lo que varias ejecuciones
(incluso desde hilos distintos) no comparten contadores.

Uso Típico:
-----------
>>> analyzer = SortingAnalyzer()
>>> results = analyzer.run_all_algorithms([5, 3, 1], ['bubble', 'merge'])
>>> results['bubble'].sorted
[1, 3, 5]
>>> results['bubble'].metrics.swaps
3

Fecha: 2025
"""

import time
import unicodedata
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Sequence, Union

from algoritmo.EfficiencyScorer import most_efficient, rate


Value = Union[int, str]


class Algorithm(str, Enum):
    """
    Identificadores cerrados de los algoritmos disponibles.

    El valor de cada miembro es el identificador usado por la interfaz web y
    por las exportaciones ('bubble', 'selection', 'insertion', 'merge').
    Un identificador desconocido lanza ValueError al construir el miembro:

    >>> Algorithm('merge') is Algorithm.MERGE
    True
    >>> Algorithm('quick')
    Traceback (most recent call last):
    ...
    ValueError: 'quick' is not a valid Algorithm
    """
    BUBBLE = 'bubble'
    SELECTION = 'selection'
    INSERTION = 'insertion'
    MERGE = 'merge'

    @property
    def display_name(self) -> str:
        return ALGORITHM_NAMES[self.value]


ALGORITHM_NAMES = {
    'bubble': 'Bubble Sort',
    'selection': 'Selection Sort',
    'insertion': 'Insertion Sort',
    'merge': 'Merge Sort',
}


class Metrics:
    """
    Contadores de costo de UNA ejecución de un algoritmo.

    Attributes:
        comparisons (int): Número de comparaciones realizadas.
        swaps (int): Número de intercambios in-place.
        moves (int): Número de asignaciones de elementos.
        start_time (float): Muestra del reloj monotónico antes de ordenar (ms).
        end_time (float): Muestra del reloj monotónico después de ordenar (ms).
        execution_time (float): end_time - start_time en ms (nunca negativo).
    """

    __slots__ = ('comparisons', 'swaps', 'moves', 'start_time', 'end_time', 'execution_time')

    def __init__(self, comparisons: int = 0, swaps: int = 0, moves: int = 0,
                 start_time: float = 0.0, end_time: float = 0.0, execution_time: float = 0.0):
        self.comparisons = comparisons
        self.swaps = swaps
        self.moves = moves
        self.start_time = start_time
        self.end_time = end_time
        self.execution_time = execution_time

    @property
    def total_operations(self) -> int:
        return self.comparisons + self.swaps + self.moves

    def to_dict(self) -> Dict[str, Any]:
        """Representación con las claves usadas por la interfaz y la exportación JSON."""
        return {
            'comparisons': self.comparisons,
            'swaps': self.swaps,
            'moves': self.moves,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'executionTime': self.execution_time,
        }

    def __eq__(self, other):
        if not isinstance(other, Metrics):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Metrics(comparisons={self.comparisons}, swaps={self.swaps}, "
                f"moves={self.moves}, execution_time={self.execution_time:.4f})")


class SortResult(NamedTuple):
    """Resultado inmutable de una ejecución: copia ordenada + métricas propias."""
    sorted: List[Value]
    metrics: Metrics


# ==================== COMPARACIÓN ====================

# Orden de la collation raíz (CLDR) para los signos ASCII
_SYMBOL_ORDER = " \t\n\r_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_SYMBOL_WEIGHT = {ch: i for i, ch in enumerate(_SYMBOL_ORDER)}

# Acentos combinantes en orden de peso secundario (agudo < grave < breve < ...)
_ACCENT_ORDER = '\u0301\u0300\u0306\u0302\u030c\u030a\u0308\u030b\u0303\u0307\u0327\u0328\u0304'
_ACCENT_WEIGHT = {ch: i for i, ch in enumerate(_ACCENT_ORDER)}

# Grupos primarios: signos < dígitos < letras
_SYMBOLS, _DIGITS, _LETTERS = 0, 1, 2


def _primary_weight(ch: str):
    if ch in _SYMBOL_WEIGHT:
        return (_SYMBOLS, _SYMBOL_WEIGHT[ch])
    digit = unicodedata.decimal(ch, None)
    if digit is not None:
        return (_DIGITS, digit)
    if ch.isalpha():
        return (_LETTERS, ord(ch))
    return (_SYMBOLS, len(_SYMBOL_ORDER) + ord(ch))


def _accent_weight(ch: str) -> int:
    return 1 + _ACCENT_WEIGHT.get(ch, len(_ACCENT_ORDER) + ord(ch))


def _collation_key(text: str):
    """
    Clave de ordenamiento para texto al estilo de localeCompare (collation raíz).

    Orden por niveles:
    1. Caracteres base sin acentos y sin distinguir mayúsculas; los signos
       (espacio, '_', '-', '.', '~', ...) van antes que los dígitos y los
       dígitos antes que las letras ("data_1" < "data1" < "dataA")
    2. Acentos, comparados de izquierda a derecha ("resume" < "résume" < "rèsume")
    3. Mayúsculas/minúsculas, minúsculas primero ("a" < "A")
    """
    folded = unicodedata.normalize('NFKD', unicodedata.normalize('NFKD', text).casefold())

    primary = tuple(_primary_weight(ch) for ch in folded if not unicodedata.combining(ch))
    secondary = tuple(_accent_weight(ch) if unicodedata.combining(ch) else 0 for ch in folded)
    tertiary = unicodedata.normalize('NFD', text).swapcase()

    return (primary, secondary, tertiary)


def compare(a: Value, b: Value, metrics: Metrics) -> int:
    """
    Compara dos valores y cuenta la comparación.

    Returns:
        int: negativo si a < b, 0 si son equivalentes, positivo si a > b.
            Para texto usa la collation de _collation_key(); para enteros
            la diferencia con signo a - b.
    """
    metrics.comparisons += 1
    if isinstance(a, str) and isinstance(b, str):
        key_a, key_b = _collation_key(a), _collation_key(b)
        return (key_a > key_b) - (key_a < key_b)
    return a - b


def _swap(arr: List[Value], i: int, j: int, metrics: Metrics):
    metrics.swaps += 1
    arr[i], arr[j] = arr[j], arr[i]


# ==================== ALGORITMOS ====================
# Cada función ordena `arr` in-place y acumula su costo en `metrics`.

def bubble_sort(arr: List[Value], metrics: Metrics):
    """
    BubbleSort - Pasadas de pares adyacentes.

    En cada pasada compara cada par adyacente una vez e intercambia los que
    están desordenados. Cada pasada excluye la cola ya asentada.

    Complexity:
        - Comparaciones: n(n-1)/2 siempre
        - Intercambios: número de inversiones del arreglo
    """
    n = len(arr)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if compare(arr[j], arr[j + 1], metrics) > 0:
                _swap(arr, j, j + 1, metrics)


def selection_sort(arr: List[Value], metrics: Metrics):
    """
    SelectionSort - Selección del mínimo del sufijo no ordenado.

    Complexity:
        - Comparaciones: n(n-1)/2 siempre
        - Intercambios: a lo sumo n-1 (cero cuando el mínimo ya está en su lugar)
    """
    n = len(arr)
    for i in range(n - 1):
        min_idx = i

        for j in range(i + 1, n):
            if compare(arr[j], arr[min_idx], metrics) < 0:
                min_idx = j

        if min_idx != i:
            _swap(arr, i, min_idx, metrics)


def insertion_sort(arr: List[Value], metrics: Metrics):
    """
    InsertionSort - Desplaza la llave a la izquierda de los mayores.

    Cada desplazamiento cuenta un move y colocar la llave en su posición
    final cuenta un move adicional (k desplazamientos -> k + 1 moves).
    """
    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1

        # Desplazar todos los predecesores estrictamente mayores
        while j >= 0 and compare(arr[j], key, metrics) > 0:
            arr[j + 1] = arr[j]
            metrics.moves += 1
            j -= 1

        arr[j + 1] = key
        metrics.moves += 1


def merge_sort(arr: List[Value], metrics: Metrics):
    """
    MergeSort - Divide y conquista estable.

    Divide recursivamente en el punto medio floor((left + right) / 2) y mezcla
    las mitades. Ante elementos iguales toma primero el de la mitad izquierda
    (comparación <= 0). Cada elemento escrito en la mezcla cuenta un move.

    Complexity:
        - Tiempo: O(n log n) en todos los casos
        - Espacio: O(n) por las copias temporales de cada mitad
    """
    _merge_sort_recursive(arr, 0, len(arr) - 1, metrics)


def _merge_sort_recursive(arr, left, right, metrics):
    if left < right:
        mid = (left + right) // 2
        _merge_sort_recursive(arr, left, mid, metrics)
        _merge_sort_recursive(arr, mid + 1, right, metrics)
        _merge(arr, left, mid, right, metrics)


def _merge(arr, left, mid, right, metrics):
    left_part = arr[left:mid + 1]
    right_part = arr[mid + 1:right + 1]

    i = j = 0
    k = left

    # ===== PASO 1: MEZCLAR MIENTRAS AMBAS MITADES TENGAN ELEMENTOS =====
    while i < len(left_part) and j < len(right_part):
        if compare(left_part[i], right_part[j], metrics) <= 0:
            arr[k] = left_part[i]
            i += 1
        else:
            arr[k] = right_part[j]
            j += 1
        k += 1
        metrics.moves += 1

    # ===== PASO 2: COPIAR LO QUE QUEDE DE CADA MITAD =====
    while i < len(left_part):
        arr[k] = left_part[i]
        i += 1
        k += 1
        metrics.moves += 1

    while j < len(right_part):
        arr[k] = right_part[j]
        j += 1
        k += 1
        metrics.moves += 1


SORT_FUNCTIONS: Dict[Algorithm, Callable[[List[Value], Metrics], None]] = {
    Algorithm.BUBBLE: bubble_sort,
    Algorithm.SELECTION: selection_sort,
    Algorithm.INSERTION: insertion_sort,
    Algorithm.MERGE: merge_sort,
}


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


def measure(sort_function: Callable[[List[Value], Metrics], None], data: Sequence[Value]) -> SortResult:
    """
    Ejecuta un algoritmo sobre una copia de `data` midiendo tiempo y operaciones.

    Crea un Metrics nuevo para esta ejecución, toma el reloj justo antes y
    justo después del ordenamiento y empaqueta la copia ordenada junto con
    las métricas en un SortResult. La secuencia original nunca se modifica.

    Args:
        sort_function: Función que ordena una lista in-place acumulando
            costos en el Metrics recibido (bubble_sort, merge_sort, ...).
        data: Secuencia de valores a ordenar.

    Returns:
        SortResult: (lista ordenada, métricas de esta ejecución)
    """
    metrics = Metrics()
    array = list(data)

    metrics.start_time = _now_ms()
    sort_function(array, metrics)
    metrics.end_time = _now_ms()
    metrics.execution_time = max(0.0, metrics.end_time - metrics.start_time)

    return SortResult(sorted=array, metrics=metrics)


class SortingAnalyzer:
    """
    Ejecuta y compara los algoritmos de ordenamiento instrumentados.

    La clase no guarda estado entre ejecuciones: cada llamada a run() crea
    sus propias métricas, así que una misma instancia puede usarse desde
    varios hilos.

    Example:
        >>> analyzer = SortingAnalyzer()
        >>> result = analyzer.run('insertion', ['b', 'a'])
        >>> result.sorted, result.metrics.comparisons, result.metrics.moves
        (['a', 'b'], 1, 2)
    """

    def run(self, algorithm: Union[Algorithm, str], data: Sequence[Value]) -> SortResult:
        """
        Ejecuta un algoritmo sobre `data`.

        Raises:
            ValueError: Si `algorithm` no es uno de los 4 identificadores.
        """
        return measure(SORT_FUNCTIONS[Algorithm(algorithm)], data)

    def run_all_algorithms(self, data: Sequence[Value],
                           selected_algorithms: Iterable[Union[Algorithm, str]]) -> Dict[str, SortResult]:
        """
        Ejecuta los algoritmos seleccionados, uno tras otro, sobre la misma entrada.

        Args:
            data: Valores validados (todos enteros o todos texto).
            selected_algorithms: Identificadores a ejecutar. Una selección
                vacía produce un diccionario vacío; rechazarla es
                responsabilidad de quien llama.

        Returns:
            Dict[str, SortResult]: identificador -> resultado, en el orden
                bubble, selection, insertion, merge.

        Raises:
            ValueError: Si algún identificador es desconocido.
        """
        selected = {Algorithm(a) for a in selected_algorithms}
        results = {}

        for algorithm in Algorithm:
            if algorithm not in selected:
                continue
            print(f"⏳ Ejecutando {algorithm.display_name}...")
            result = self.run(algorithm, data)
            results[algorithm.value] = result
            print(f"✅ {algorithm.display_name} completado en {result.metrics.execution_time:.3f}ms")

        return results

    def get_algorithm_names(self) -> Dict[str, str]:
        return dict(ALGORITHM_NAMES)

    def calculate_efficiency(self, metrics: Metrics) -> str:
        return rate(metrics)

    def find_most_efficient(self, results: Dict[str, SortResult]):
        return most_efficient(results)
