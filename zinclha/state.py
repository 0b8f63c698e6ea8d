import numpy as np

from zinclha.profile import CANONICAL, VariantProfile

STATE_SIZE = 64
BASE_ROUNDS = 10_000
ROUND_SPREAD = 1000


def normalize_input(data: bytes) -> bytes:
    """Пустой ввод заменяется одним нулевым байтом"""
    return bytes(data) or b"\x00"


def init_state(data: bytes, profile: VariantProfile = CANONICAL) -> np.ndarray:
    """
    Начальный аккумулятор: константа профиля, в байты 0 и 1 подмешана длина ввода.
    Учитываются только младшие 16 бит длины.
    """
    state = np.full(STATE_SIZE, profile.state_constant, dtype=np.uint8)
    length = len(data)
    state[0] ^= length & 0xFF
    state[1] ^= (length >> 8) & 0xFF
    return state


def build_block(data: bytes, state: np.ndarray, profile: VariantProfile = CANONICAL) -> np.ndarray:
    fill = int(state[0]) if profile.fill_from_state else 0
    block = np.full(STATE_SIZE, fill, dtype=np.uint8)
    length = min(len(data), STATE_SIZE)
    block[:length] = np.frombuffer(bytes(data[:length]), dtype=np.uint8)
    block.flags.writeable = False
    return block


def round_count(data: bytes) -> int:
    # Сумма первого и последнего байта складывается по модулю 256
    extra = ((data[0] + data[-1]) & 0xFF) % 255
    return BASE_ROUNDS + extra % ROUND_SPREAD
