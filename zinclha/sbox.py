import numpy as np

from zinclha.bitops import rotl8
from zinclha.logger import logger
from zinclha.profile import CANONICAL, VariantProfile

TABLE_SIZE = 256


def _shuffle_table(data: bytes, profile: VariantProfile) -> list:
    """Два нисходящих прохода перемешивания таблицы, зависящие от входа"""
    n = len(data)
    table = list(range(TABLE_SIZE))
    seed = (data[0] + data[-1]) & 0xFF

    # Первый проход: тяжёлое обновление seed
    for i in range(TABLE_SIZE - 1, 0, -1):
        seed = (
            ((seed + data[i % n]) & 0xFF)
            ^ table[i]
            ^ table[(i + 7) % TABLE_SIZE]
            ^ rotl8(seed, i % 5)
        )
        j = (seed ^ i) % TABLE_SIZE
        # XOR до обмена: биекция не гарантируется
        table[i] ^= data[i % n]
        table[j] ^= data[(i + 1) % n]
        table[i], table[j] = table[j], table[i]

    # Второй проход: лёгкое обновление seed
    for i in range(TABLE_SIZE - 1, 0, -1):
        probe = table[(i * profile.seed_stride) % TABLE_SIZE]
        if profile.seed_additive:
            seed = (seed + probe) & 0xFF
        else:
            seed ^= probe
        j = (seed ^ i) % TABLE_SIZE
        table[i] ^= data[(i + profile.seed_offset) % n]
        table[j] ^= data[(i + ((i * 11) ^ i)) % n]
        table[i], table[j] = table[j], table[i]

    return table


def expand_seed(data: bytes, profile: VariantProfile = CANONICAL) -> np.ndarray:
    """
    Генерация S-box (256 байт) из входных данных
    Args:
        data: непустые входные байты
        profile: вариант алгоритма
    Returns:
        Новый массив numpy.uint8
    """
    data = bytes(data)
    if not data:
        raise ValueError("S-box нельзя построить из пустого ввода")
    table = np.array(_shuffle_table(data, profile), dtype=np.uint8)
    logger.log(f"S-box построен: {distinct_count(table)} различных значений", is_debug=True)
    return table


def distinct_count(table: np.ndarray) -> int:
    return int(np.unique(table).size)


def is_bijection(table: np.ndarray) -> bool:
    """Проверка, что таблица является перестановкой 0..255"""
    return len(table) == TABLE_SIZE and distinct_count(table) == TABLE_SIZE
