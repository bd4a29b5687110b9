"""
모듈 발견 및 호스트 예외 클래스 정의
"""

from typing import Optional


class ModuleScanError(Exception):
    """모듈 스캔 중 임포트 실패"""

    def __init__(self, message: str, module_name: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message)
        self.module_name = module_name
        self.original_error = original_error
        self.message = message

    def __str__(self) -> str:
        if self.module_name:
            return f"Module '{self.module_name}': {self.message}"
        return self.message


class HostStateError(Exception):
    """호스트 상태에 맞지 않는 작업 요청"""
