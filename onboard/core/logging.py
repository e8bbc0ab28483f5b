# onboard/core/logging.py

"""
애플리케이션 로깅 초기화 모듈입니다.

각 모듈은 `logger = logging.getLogger(__name__)`로 로거를 만들고,
애플리케이션 시작 시(lifespan) `configure_logging()`을 한 번 호출하여
루트 로거의 핸들러와 포맷을 설정합니다.
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Any, Dict, Optional

_LOGGING_CONFIGURED = False

# 로그 레코드에 extra=로 전달되면 JSON 출력에 포함되는 필드 목록
STRUCTURED_FIELDS = ("approval_id", "company_id", "event", "data_type", "username")

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """
    한 줄에 하나의 JSON 객체를 출력하는 포매터입니다.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    루트 로거를 한 번만 설정합니다. 이후 호출은 무시됩니다.
    인자를 생략하면 settings.LOG_LEVEL / settings.LOG_JSON 값을 사용합니다.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    from onboard.core.config import settings

    level = level or settings.LOG_LEVEL
    json_output = settings.LOG_JSON if json_output is None else json_output

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(handler)

    # SQL 출력은 DEBUG_MODE일 때 엔진의 echo 설정으로만 제어합니다.
    logging.getLogger("sqlalchemy.engine").propagate = settings.DEBUG_MODE

    _LOGGING_CONFIGURED = True
