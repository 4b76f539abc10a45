"""
Data Utils - Validación de Entrada y Datos de Ejemplo
======================================================

Convierte el texto que escribe (o sube) el usuario en la lista de valores que
reciben los algoritmos de ordenamiento, y genera datos sintéticos para
demostraciones.

Tipos de Datos Soportados:
--------------------------
- 'integer': tamaños de archivo (ej: "1024, 2048, 512")
- 'text': nombres de archivo (ej: "document.pdf, image.jpg")

Reglas de Validación:
---------------------
1. Entrada vacía o solo espacios -> error
2. Se separa por coma, se recortan espacios y se descartan tokens vacíos
3. En modo 'integer' cada token se interpreta como entero; el PRIMER token
   inválido rechaza todo el lote (no hay aceptación parcial)
"""

import re
from typing import List, Optional, Union

import numpy as np


DATA_TYPES = ('integer', 'text')

SAMPLE_EXTENSIONS = ['.pdf', '.doc', '.txt', '.jpg', '.png', '.mp4', '.mp3', '.zip', '.exe', '.csv']
SAMPLE_PREFIXES = ['document', 'image', 'video', 'audio', 'archive', 'program', 'data',
                   'report', 'presentation', 'spreadsheet']

# Como parseInt: signo opcional, prefijo 0x para hexadecimal, si no dígitos
# decimales ASCII; el resto del token se ignora ("12kb" -> 12)
_HEX_PREFIX = re.compile(r'^[+-]?0[xX]')
_LEADING_HEX = re.compile(r'^([+-]?)0[xX]([0-9a-fA-F]+)')
_LEADING_INT = re.compile(r'^[+-]?[0-9]+')


class InputValidationError(ValueError):
    """Entrada rechazada; el mensaje está pensado para mostrarse al usuario."""


def parse_integer(token: str) -> int:
    """
    Interpreta el entero al inicio de `token`.

    Example:
        >>> parse_integer("2048")
        2048
        >>> parse_integer("-15")
        -15
        >>> parse_integer("12kb")
        12
        >>> parse_integer("0x1A")
        26
        >>> parse_integer("kb12")
        Traceback (most recent call last):
        ...
        datos.DataUtils.InputValidationError: "kb12" is not a valid integer

    Note:
        Tokens decimales con más dígitos de los que Python permite convertir
        (sys.get_int_max_str_digits) también se rechazan.
    """
    text = token.strip()
    is_hex = _HEX_PREFIX.match(text) is not None
    match = (_LEADING_HEX if is_hex else _LEADING_INT).match(text)
    if not match:
        raise InputValidationError(f'"{token}" is not a valid integer')

    try:
        if is_hex:
            value = int(match.group(2), 16)
            return -value if match.group(1) == '-' else value
        return int(match.group())
    except ValueError as e:
        raise InputValidationError(f'"{token}" is not a valid integer') from e


def split_tokens(raw: str) -> List[str]:
    """Separa por coma, recorta espacios y descarta tokens vacíos."""
    return [item.strip() for item in raw.split(',') if item.strip() != '']


def validate_input(raw: Optional[str], data_type: str) -> List[Union[int, str]]:
    """
    Valida el texto de entrada y devuelve la lista de valores a ordenar.

    Args:
        raw (str): Texto separado por comas.
        data_type (str): 'integer' o 'text'.

    Returns:
        List[int] en modo 'integer', List[str] en modo 'text'.

    Raises:
        InputValidationError: Entrada vacía, sin tokens, con un entero
            inválido, o con un tipo de datos desconocido.

    Example:
        >>> validate_input(" 3, 1 ,, 2 ", "integer")
        [3, 1, 2]
        >>> validate_input("b.txt, a.pdf", "text")
        ['b.txt', 'a.pdf']
    """
    if data_type not in DATA_TYPES:
        raise InputValidationError(f'Unknown data type "{data_type}"')

    if raw is None or raw.strip() == '':
        raise InputValidationError('Input cannot be empty')

    values = split_tokens(raw)
    if not values:
        raise InputValidationError('No valid data found')

    if data_type == 'integer':
        return [parse_integer(value) for value in values]
    return values


def parse_file_content(content: Union[bytes, str]) -> str:
    """Decodifica el contenido de un archivo de texto subido (UTF-8, con o sin BOM)."""
    if isinstance(content, str):
        return content
    return content.decode('utf-8-sig')


def generate_sample_data(data_type: str, size: int = 10, seed: Optional[int] = None) -> str:
    """
    Genera datos de ejemplo separados por ", ".

    - 'integer': enteros uniformes en [100, 10099]
    - 'text': nombres "{prefijo}_{1..100}{extensión}" de vocabularios fijos

    Args:
        data_type (str): 'integer' o 'text'.
        size (int): Cantidad de elementos.
        seed (int, optional): Semilla para resultados reproducibles.
    """
    rng = np.random.default_rng(seed)

    if data_type == 'integer':
        sizes = rng.integers(100, 10100, size=size)
        return ', '.join(str(int(value)) for value in sizes)

    file_names = []
    for _ in range(size):
        prefix = SAMPLE_PREFIXES[rng.integers(len(SAMPLE_PREFIXES))]
        extension = SAMPLE_EXTENSIONS[rng.integers(len(SAMPLE_EXTENSIONS))]
        number = int(rng.integers(1, 101))
        file_names.append(f"{prefix}_{number}{extension}")

    return ', '.join(file_names)
