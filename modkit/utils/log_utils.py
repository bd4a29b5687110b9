"""
로깅 유틸리티 모듈

기능:
- 콘솔/파일 로깅 설정
- JSON 형식 구조화 로깅
- 일별 로그 로테이션
"""

import logging
import logging.handlers
import json
from datetime import datetime
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DEFAULT_DATEFMT = '%Y-%m-%d %H:%M:%S'


# 컨테이너 로그 레코드가 싣는 구조화 필드 (JSON 최상위 키로 출력)
CONTAINER_FIELDS = ('module_type', 'phase', 'container_state')

# LogRecord 기본 속성 (추가 필드 판별용)
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.INFO, '', 0, '', (), None))) | {'message', 'asctime'}


class JSONFormatter(logging.Formatter):
    """JSON 형식 로그 포맷터

    컨테이너 필드(module_type, phase, container_state)는 최상위 키로,
    그 외 extra 로 전달된 값은 'extra' 아래에 기록합니다.
    """

    def __init__(self, include_extras: bool = True, ensure_ascii: bool = False):
        """초기화

        Args:
            include_extras: 컨테이너 필드 외 추가 필드 포함 여부
            ensure_ascii: ASCII만 출력 여부 (한글은 False)
        """
        super().__init__()
        self.include_extras = include_extras
        self.ensure_ascii = ensure_ascii

    def format(self, record: logging.LogRecord) -> str:
        """로그 레코드를 JSON 문자열로 변환"""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for key in CONTAINER_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.include_extras:
            extras = {
                k: v for k, v in vars(record).items()
                if k not in _RECORD_ATTRS and k not in CONTAINER_FIELDS and not k.startswith('_')
            }
            if extras:
                log_data['extra'] = extras

        return json.dumps(log_data, ensure_ascii=self.ensure_ascii, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    json_format: bool = False,
    backup_count: int = 7,
) -> logging.Logger:
    """로깅 설정

    Args:
        level: 로깅 레벨
        log_file: 로그 파일 경로 (콘솔만 사용 시 None)
        json_format: 파일/콘솔 모두 JSON 형식 사용 여부
        backup_count: 일별 로테이션 백업 파일 수

    Returns:
        설정된 루트 로거
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 기존 핸들러 제거
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 일별 로테이션 파일 핸들러
    if log_file:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when='midnight',
            interval=1,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """로거 인스턴스 생성

    Args:
        name: 로거 이름 (보통 __name__ 사용)

    Returns:
        로거 인스턴스
    """
    return logging.getLogger(name)
