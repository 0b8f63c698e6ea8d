from numba import njit


@njit
def rotl8(value, bits):
    """Циклический сдвиг байта влево; величина сдвига берётся по модулю 8"""
    bits &= 7
    return ((value << bits) | (value >> (8 - bits))) & 0xFF
