"""
모듈 레지스트리 모듈

이 모듈은 등록된 모듈 싱글톤과 등록 순서를 보관하는 레지스트리를 제공합니다.
레지스트리의 삽입 순서가 곧 등록 순서이며, 종료 순서는 그 역순입니다.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Type
import threading
from dataclasses import dataclass, field


@dataclass
class ModuleDescriptor:
    """모듈 설명자"""
    module_type: Type
    instance: Any
    post_construct: List[Callable[[], Any]] = field(default_factory=list)
    pre_destroy: List[Callable[[], Any]] = field(default_factory=list)

    def __str__(self) -> str:
        return f"ModuleDescriptor(type={self.module_type.__qualname__})"


class ModuleRegistry:
    """모듈 레지스트리 클래스

    변경은 잠금으로 보호되고, 조회는 잠금 없이 수행됩니다.
    """

    def __init__(self):
        self._v_modules: Dict[Type, ModuleDescriptor] = {}
        self._v_lock = threading.RLock()

    def add(self, descriptor: ModuleDescriptor) -> ModuleDescriptor:
        """설명자 추가 (이미 있으면 기존 설명자 유지)"""
        with self._v_lock:
            _v_existing = self._v_modules.get(descriptor.module_type)
            if _v_existing is not None:
                return _v_existing
            self._v_modules[descriptor.module_type] = descriptor
            return descriptor

    def remove(self, module_type: Type) -> bool:
        """설명자 제거"""
        with self._v_lock:
            return self._v_modules.pop(module_type, None) is not None

    def get(self, module_type: Type) -> Optional[ModuleDescriptor]:
        """설명자 조회"""
        return self._v_modules.get(module_type)

    def get_instance(self, module_type: Type) -> Optional[Any]:
        """인스턴스 조회"""
        _v_descriptor = self._v_modules.get(module_type)
        return _v_descriptor.instance if _v_descriptor is not None else None

    def is_registered(self, module_type: Type) -> bool:
        return module_type in self._v_modules

    def snapshot(self) -> List[ModuleDescriptor]:
        """등록 순서대로 설명자 목록 반환"""
        with self._v_lock:
            return list(self._v_modules.values())

    def registration_order(self) -> List[Type]:
        """등록 순서대로 모듈 타입 목록 반환"""
        with self._v_lock:
            return list(self._v_modules.keys())

    def clear(self):
        """레지스트리 정리"""
        with self._v_lock:
            self._v_modules.clear()

    def __contains__(self, module_type: Type) -> bool:
        return self.is_registered(module_type)

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._v_modules)

    def __str__(self) -> str:
        return f"ModuleRegistry(modules={len(self._v_modules)})"

    def __repr__(self) -> str:
        return self.__str__()
