"""
Вспомогательные функции
"""
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, digits: int) -> float:
    """
    Округляет число до digits знаков, половину - вверх

    Округляется точное двоичное значение value * 10**digits, поэтому
    0.125 -> 0.13, а 1.005 (в памяти 1.00499...) -> 1.0.
    """
    scale = 10 ** digits
    scaled = Decimal(value * scale).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return float(scaled) / scale


def parse_bool(value) -> bool:
    """Разбирает булево значение из query-параметра"""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
