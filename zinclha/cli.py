import argparse
import sys

from zinclha.console import InputReadError, read_input_line, write_result
from zinclha.hasher import zinc_hash
from zinclha.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Хеш-функция Zinc-LHA: читает строку из stdin и выводит 512-битный дайджест",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Подробный вывод в stderr (включает отладочные сообщения)"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Настройка логгера
    logger.set_verbose(args.verbose)

    try:
        data = read_input_line()
    except InputReadError as e:
        logger.error(str(e))
        return 1

    write_result(zinc_hash(data))
    return 0
