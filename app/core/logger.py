"""표준화된 로거 모듈.

프로젝트 전체에서 일관된 로거 이름 규칙을 제공합니다.
핸들러와 포맷은 `app.core.logging_config.configure_logging()`이 루트에 한 번만
구성하므로, 여기서는 모듈별 로거만 돌려줍니다.
"""

import logging


def get_logger(name: str) -> logging.Logger:
    """모듈 로거를 반환합니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).

    Returns:
        루트 핸들러로 전파되는 로거 인스턴스.
    """
    return logging.getLogger(name)
