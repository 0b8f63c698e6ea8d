import time
from dataclasses import dataclass
from typing import Dict, List

import numpy as np
from tqdm import tqdm

from zinclha.logger import logger
from zinclha.profile import CANONICAL, VariantProfile
from zinclha.rounds import final_rotation_arg, finalize_kernel, round_kernel, to_work
from zinclha.sbox import expand_seed
from zinclha.state import build_block, init_state, normalize_input, round_count

DIGEST_SIZE = 64

# Таблица профилирования этапов; заполняется только при включённом профилировании
stage_timings: Dict[str, List[float]] = {}
_profiling = False


def set_profiling(enabled: bool):
    global _profiling
    _profiling = enabled


def reset_timings():
    stage_timings.clear()


def timed(f):
    """Декоратор для замера времени выполнения этапов"""

    def wrapper(*args, **kwargs):
        if not _profiling:
            return f(*args, **kwargs)

        start = time.perf_counter()
        result = f(*args, **kwargs)
        elapsed = time.perf_counter() - start

        stage_timings.setdefault(f.__name__, []).append(elapsed)
        return result

    return wrapper


@dataclass
class HashContext:
    """Буферы одного вызова конвейера; не разделяются между вызовами"""
    data: bytes
    profile: VariantProfile
    table: np.ndarray
    block: np.ndarray
    state: np.ndarray
    rounds: int


@timed
def prepare(data: bytes, profile: VariantProfile = CANONICAL) -> HashContext:
    """Нормализация ввода, построение аккумулятора, блока, S-box и числа раундов"""
    data = normalize_input(data)
    state = init_state(data, profile)
    block = build_block(data, state, profile)
    table = expand_seed(data, profile)
    return HashContext(
        data=data,
        profile=profile,
        table=table,
        block=block,
        state=state,
        rounds=round_count(data),
    )


@timed
def run_rounds(ctx: HashContext, show_progress: bool = False) -> np.ndarray:
    """Последовательное применение раундов; раунд N+1 зависит от результата раунда N"""
    state = to_work(ctx.state)
    block = to_work(ctx.block)
    table = to_work(ctx.table)
    data = to_work(ctx.data)
    mix_offset = ctx.profile.mix_offset
    reverse_cross_mix = ctx.profile.reverse_cross_mix

    progress_bar = None
    if show_progress:
        progress_bar = tqdm(
            total=ctx.rounds,
            unit="rnd",
            desc="Раунды",
            ncols=75
        )

    try:
        for _ in range(ctx.rounds):
            round_kernel(state, block, table, data, mix_offset, reverse_cross_mix)
            if progress_bar:
                progress_bar.update(1)
    finally:
        if progress_bar:
            progress_bar.close()

    ctx.state = state.astype(np.uint8)
    return ctx.state


@timed
def finish(ctx: HashContext) -> bytes:
    state = to_work(ctx.state)
    finalize_kernel(state, to_work(ctx.block), to_work(ctx.table), final_rotation_arg(ctx.profile))
    ctx.state = state.astype(np.uint8)
    return ctx.state.tobytes()


def zinc_digest(data: bytes, profile: VariantProfile = CANONICAL, show_progress: bool = False) -> bytes:
    """
    Вычисление 64-байтного дайджеста Zinc-LHA
    Args:
        data: входные байты (пустой ввод допустим)
        profile: вариант алгоритма
        show_progress: показывать прогресс-бар по раундам
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Ожидались байты, получено: {type(data).__name__}")

    try:
        ctx = prepare(data, profile)
        logger.log(
            f"Профиль {profile.name}: {len(ctx.data)} байт, {ctx.rounds} раундов",
            is_debug=True
        )
        run_rounds(ctx, show_progress)
        digest = finish(ctx)
    except Exception as e:
        logger.error(f"Ошибка хеширования: {str(e)}")
        raise

    logger.log("Хеширование завершено", is_debug=True)
    return digest


def zinc_hash(data: bytes, profile: VariantProfile = CANONICAL, show_progress: bool = False) -> str:
    """Дайджест в виде 128 шестнадцатеричных символов в нижнем регистре"""
    return zinc_digest(data, profile, show_progress).hex()


def print_timings(file=None):
    """Вывод статистики по времени выполнения этапов"""
    print("\n=== Этапы хеширования ===", file=file)
    total = 0
    for func, times in stage_timings.items():
        func_time = sum(times)
        print(f"{func:25}: {func_time:.4f}s (вызовов: {len(times)})", file=file)
        total += func_time
    print(f"Итого: {total:.4f}s", file=file)
