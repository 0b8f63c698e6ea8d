import sys
import time
from typing import Optional


class SimpleLogger:
    def __init__(self):
        self.verbose = False
        self.log_file: Optional[str] = None  # Файл журнала, по умолчанию отключён

    def log(self, message: str, is_debug: bool = False):
        msg = f"[{'DEBUG' if is_debug else 'INFO'}] {message}"
        # stdout занят приглашением и результатом хеширования
        if self.verbose or not is_debug:
            print(msg, file=sys.stderr)
        self._write(msg)

    def set_verbose(self, enabled: bool):
        self.verbose = enabled

    def set_log_file(self, path: Optional[str]):
        self.log_file = path

    def error(self, message: str):
        """Вывод ошибок (всегда виден)"""
        msg = f"[ERROR] {message}"
        print(msg, file=sys.stderr)
        self._write(msg)

    def _write(self, msg: str):
        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"{time.ctime()} - {msg}\n")


# Глобальный экземпляр логгера
logger = SimpleLogger()
