"""
모듈 스캐너 구현

이 모듈은 패키지를 순회하며 @module 클래스를 발견하는 기능을 제공합니다.
발견 순서(모듈 이름 순, 모듈 내 정의 순)가 곧 등록 순서가 됩니다.
"""

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Dict, Iterable, List, Set, Type

from modkit.di.markers import is_module
from modkit.plugins.exceptions import ModuleScanError


class ModuleScanner:
    """모듈 스캐너 구현"""

    def __init__(self, strict: bool = False):
        """
        모듈 스캐너 초기화

        Args:
            strict: True이면 임포트 실패 시 ModuleScanError 발생
        """
        self._strict = strict
        self._logger = logging.getLogger(self.__class__.__name__)
        self._failures: Dict[str, Exception] = {}
        self._scanned_modules: Set[str] = set()

    @property
    def failures(self) -> Dict[str, Exception]:
        """임포트에 실패한 모듈 이름 -> 예외"""
        return dict(self._failures)

    def scan(self, packages: Iterable[str]) -> List[Type]:
        """
        패키지 목록에서 모듈 클래스 발견

        Args:
            packages: 패키지(또는 단일 모듈) 이름 목록

        Returns:
            발견된 모듈 클래스 목록 (중복 없음)
        """
        discovered: List[Type] = []
        seen: Set[Type] = set()

        for package_name in packages:
            for module in self._iter_modules(package_name):
                for cls in self._scan_module(module):
                    if cls not in seen:
                        seen.add(cls)
                        discovered.append(cls)

        self._logger.info(f"Discovered {len(discovered)} modules")
        return discovered

    def _iter_modules(self, package_name: str) -> Iterable[ModuleType]:
        """패키지와 하위 모듈 순회"""
        package = self._import(package_name)
        if package is None:
            return

        yield package

        package_path = getattr(package, '__path__', None)
        if package_path is None:
            return

        names = sorted(
            info.name for info in pkgutil.walk_packages(
                package_path, prefix=f"{package.__name__}.", onerror=self._on_walk_error
            )
        )
        for name in names:
            module = self._import(name)
            if module is not None:
                yield module

    def _scan_module(self, module: ModuleType) -> List[Type]:
        """모듈에 정의된 @module 클래스 (정의 순서)"""
        if module.__name__ in self._scanned_modules:
            return []
        self._scanned_modules.add(module.__name__)

        found = []
        for obj in list(vars(module).values()):
            if not isinstance(obj, type):
                continue
            # 다른 모듈에서 임포트된 클래스는 제외
            if obj.__module__ != module.__name__:
                continue
            if is_module(obj):
                self._logger.debug(f"Found module class: {obj.__module__}.{obj.__qualname__}")
                found.append(obj)
        return found

    def _import(self, name: str):
        try:
            return importlib.import_module(name)
        except Exception as e:
            self._failures[name] = e
            if self._strict:
                raise ModuleScanError("Failed to import", name, e) from e
            self._logger.warning(f"Failed to import {name}: {e}")
            return None

    def _on_walk_error(self, name: str):
        # walk_packages는 하위 패키지 임포트 실패 시 이름만 전달
        self._failures.setdefault(name, ImportError(f"Could not import package {name}"))
        if self._strict:
            raise ModuleScanError("Failed to import package", name)
        self._logger.warning(f"Failed to import package {name}")

    def clear(self):
        """스캔 결과 초기화"""
        self._failures.clear()
        self._scanned_modules.clear()
