"""프로젝트 로거 모듈.

모든 모듈 로거는 `tottrot` 패키지 로거의 자식이며 레벨을 직접 갖지 않는다.
레벨과 핸들러는 패키지 로거 한 곳에서 정해지므로 `LOG_LEVEL`과
`configure_logging()`이 모든 모듈에 그대로 적용된다.
"""

import logging
import sys

from tottrot.core.config import get_settings

PACKAGE_LOGGER_NAME = "tottrot"
LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _ensure_package_logger() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if package_logger.handlers:
        return

    package_logger.setLevel((get_settings().LOG_LEVEL or "INFO").upper())
    package_logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """패키지 로거 아래의 모듈 로거를 반환합니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).

    Returns:
        레벨을 패키지 로거에서 상속받는 로거 인스턴스.
    """
    _ensure_package_logger()
    return logging.getLogger(name)
