"""
모듈 발견 및 호스트 애플리케이션 패키지
"""

from modkit.plugins.scanner import ModuleScanner
from modkit.plugins.host import HostApplication
from modkit.plugins.exceptions import ModuleScanError, HostStateError

__all__ = [
    'ModuleScanner',
    'HostApplication',
    'ModuleScanError',
    'HostStateError'
]
