import numpy as np
from numba import njit

from zinclha.bitops import rotl8
from zinclha.profile import CANONICAL, VariantProfile


@njit
def round_kernel(state, block, table, data, mix_offset, reverse_cross_mix):
    """
    Один раунд перемешивания аккумулятора (на месте).
    Все массивы - int64 со значениями 0..255. Порядок обхода в каждом
    проходе фиксирован: записи на месте читаются следующими итерациями.
    """
    size = state.shape[0]
    n = data.shape[0]
    m = min(n, size)

    # Подстановка и диффузия
    for i in range(size):
        state[i] ^= rotl8(state[size - 1 - i], 7)
        state[i] = (state[i] * 0x9E + state[(i + mix_offset) % 8]) & 0xFF
        state[i] ^= rotl8(block[(i + 4) % m], 3)

        idx = ((i % m) ^ (m * state[i % m])) % 64
        state[i] = rotl8(state[i], (block[idx] + table[idx]) % 8)
        state[i] ^= rotl8(state[(i + 7) % size], 3)
        state[i] = table[state[i]]

    # Перекрёстное смешивание
    if reverse_cross_mix:
        for i in range(size - 1, -1, -1):
            state[i] ^= state[(i + 3) % size]
    else:
        for i in range(size):
            state[i] ^= state[(i + 3) % size]

    # Соль из входных байтов
    salt = rotl8((data[0] + data[n - 1] * table[(n - 1) % 256]) & 0xFF, 3)
    for i in range(size):
        salt ^= (salt * data[(i + n - 1) % n]) & 0xFF
        state[i] ^= rotl8(salt, i % 8)

    # Замыкающее смешивание
    for i in range(size):
        state[i] ^= state[(i + 3) % size]
        mixed = ((state[i] + state[(i + 5) % size]) * state[(i + 3) % size]) & 0xFF
        state[i] = rotl8(mixed, 5)

        idx = ((i % m) ^ (m * state[(i + 3) % m])) % 64
        state[i] = rotl8(state[i], block[idx] % 8 + 1)
        state[i] ^= rotl8(state[(i + 4) % size], 4)


@njit
def finalize_kernel(state, block, table, final_rotation):
    """Финальный проход: аккумулятор смешивается с блоком. final_rotation < 0 - сдвиг из таблицы"""
    for i in range(state.shape[0]):
        b = block[i]
        state[i] ^= b
        if final_rotation < 0:
            bits = table[state[i]]
        else:
            bits = final_rotation
        state[i] = rotl8(state[i], bits)
        state[i] = (((state[i] + b) * 3) & 0xFF) ^ b


def to_work(values) -> np.ndarray:
    """Рабочая копия буфера (int64) для ядер numba"""
    if isinstance(values, (bytes, bytearray, memoryview)):
        return np.frombuffer(bytes(values), dtype=np.uint8).astype(np.int64)
    return np.array(values, dtype=np.int64)


def final_rotation_arg(profile: VariantProfile) -> int:
    return -1 if profile.final_rotation is None else profile.final_rotation


def apply_round(state, block, table, data: bytes, profile: VariantProfile = CANONICAL) -> np.ndarray:
    """
    Применение одного раунда без изменения аргументов
    Args:
        state: аккумулятор (64 байта)
        block: блок (64 байта)
        table: S-box (256 байт)
        data: нормализованный ввод
        profile: вариант алгоритма
    Returns:
        Новый аккумулятор numpy.uint8
    """
    work = to_work(state)
    round_kernel(work, to_work(block), to_work(table), to_work(data),
                 profile.mix_offset, profile.reverse_cross_mix)
    return work.astype(np.uint8)


def finalize(state, block, table, profile: VariantProfile = CANONICAL) -> np.ndarray:
    work = to_work(state)
    finalize_kernel(work, to_work(block), to_work(table), final_rotation_arg(profile))
    return work.astype(np.uint8)
