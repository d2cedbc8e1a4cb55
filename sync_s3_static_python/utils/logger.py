import logging
import sys
from typing import Any

import colorama


class SyncLogger(logging.Logger):
    def __init__(self, name: str, level: int = logging.INFO,
                 verbose: bool = True) -> None:
        self.__verbose = verbose
        super().__init__(name, level)

    @property
    def verbose(self) -> bool:
        return self.__verbose

    def set_verbose(self, verbose: bool) -> None:
        self.__verbose = verbose

    def notice(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.__verbose:
            return
        color_msg = f"{colorama.Fore.GREEN}{colorama.Style.BRIGHT}" \
                    f"{msg}{colorama.Style.RESET_ALL}{colorama.Fore.RESET}"
        super().info(f"{color_msg}", *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.__verbose:
            return
        color_msg = f"{colorama.Fore.GREEN}" \
                    f"{msg}{colorama.Fore.RESET}"
        super().info(f"{color_msg}", *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.__verbose:
            return
        color_msg = f"{colorama.Fore.YELLOW}" \
                    f"{msg}{colorama.Fore.RESET}"
        super().warning(f"{color_msg}", *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        # Failures are always reported, even when quiet
        color_msg = f"{colorama.Fore.RED}" \
                    f"{msg}{colorama.Fore.RESET}"
        super().error(f"{color_msg}", *args, **kwargs)


def set_debug(enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def setup_logger() -> logging.Logger:
    log_format = '%(levelname)-8s | %(asctime)s | %(message)s'
    logging.setLoggerClass(SyncLogger)
    logging.basicConfig(format=log_format, datefmt="%H:%M:%S %d/%m/%Y",
                        level=logging.INFO, stream=sys.stdout)
    sync_logger = logging.getLogger("sync-s3-static")
    logging.setLoggerClass(logging.Logger)
    return sync_logger


logger = setup_logger()
