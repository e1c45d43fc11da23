# city_explorer/core/logging.py
# -----------------------------------------------------------------------------
# Loguru 기반 로깅 설정
# - 파일 회전/보존/백트레이스 + 콘솔(stderr) 출력
# - 서버 기동 시 한 번 호출
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger


def setup_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    path = Path(log_dir)
    path.mkdir(exist_ok=True, parents=True)

    logger.remove()  # 기본 핸들러 제거
    logger.add(sys.stderr, level=level)
    logger.add(
        path / "app.log",
        rotation="10 MB",
        retention="10 files",
        enqueue=True,  # 멀티프로세스 안전
        backtrace=True,
        diagnose=False,
        level=level,
    )
