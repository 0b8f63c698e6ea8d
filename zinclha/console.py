import sys
from typing import BinaryIO, Optional, TextIO

from zinclha.logger import logger

PROMPT = "Input: "
RESULT_PREFIX = "Zinc-LHA Hash: "

# Пробельные символы Unicode (White_Space); str.isspace дополнительно
# считает пробелами разделители \x1c-\x1f, их не обрезаем
WHITESPACE = "".join(
    ch for ch in map(chr, range(0x3001))
    if ch.isspace() and ch not in "\x1c\x1d\x1e\x1f"
)


class InputReadError(Exception):
    """Сбой чтения или преждевременный конец потока ввода"""
    pass


def trim_line(text: str) -> str:
    return text.strip(WHITESPACE)


def read_input_line(stream: Optional[BinaryIO] = None, out: Optional[TextIO] = None) -> bytes:
    """
    Выводит приглашение и читает ровно одну строку
    Args:
        stream: двоичный поток ввода (по умолчанию sys.stdin.buffer)
        out: поток для приглашения (по умолчанию sys.stdout)
    Returns:
        Байты строки (UTF-8) без окружающих пробельных символов
    Raises:
        InputReadError: если строку прочитать или декодировать не удалось
    """
    stream = sys.stdin.buffer if stream is None else stream
    out = sys.stdout if out is None else out

    out.write(PROMPT)
    out.flush()

    try:
        raw = stream.readline()
        # Кодировка локали не используется: строка всегда UTF-8
        text = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Ошибка чтения ввода: {str(e)}") from e

    if not raw:
        raise InputReadError("Ошибка чтения ввода: поток завершился до получения строки")

    data = trim_line(text).encode("utf-8")
    logger.log(f"Прочитано {len(data)} байт", is_debug=True)
    return data


def write_result(hex_digest: str, out: Optional[TextIO] = None):
    out = sys.stdout if out is None else out
    out.write(f"{RESULT_PREFIX}{hex_digest}\n")
    out.flush()
