"""
필드 주입기 모듈

이 모듈은 생성된 인스턴스의 Inject 필드를 채우는 FieldInjector를 제공합니다.

필드 선언 방법:
    @module
    class Service:
        repository: Annotated[Repository, Inject]
"""

import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from .exceptions import ModuleConfigurationError, ModuleConstructionError, UnresolvableDependencyError
from .hints import declares_injection, evaluate_annotation, get_module_globals, get_own_annotations, is_inject_hint
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

UNRESOLVABLE = object()


@dataclass(frozen=True)
class InjectionPoint:
    """주입 필드 정보"""
    name: str
    dependency_type: Any


class FieldInjector:
    """필드 주입기 클래스

    resolve 콜백은 타입을 받아 인스턴스 또는 UNRESOLVABLE 을 반환해야 합니다.
    """

    def __init__(self, resolve: Callable[[Any], Any]):
        self._v_resolve = resolve
        self._v_injection_points: Dict[Type, List[InjectionPoint]] = {}

    def get_injection_points(self, cls: Type) -> List[InjectionPoint]:
        """클래스의 주입 필드 목록 (기반 클래스 필드 포함, 선언 순서)

        어노테이션은 하나씩 평가됩니다. 평가할 수 없는 어노테이션은 Inject 필드일 때만 오류입니다.

        Raises:
            UnresolvableDependencyError: 평가할 수 없는 Inject 필드
        """
        _v_cached = self._v_injection_points.get(cls)
        if _v_cached is not None:
            return _v_cached

        _v_points: Dict[str, InjectionPoint] = {}
        for base in reversed(cls.__mro__):
            if base is object:
                continue

            _v_globalns = get_module_globals(base)
            _v_localns = dict(vars(base))
            try:
                _v_annotations = get_own_annotations(base)
            except NameError as e:
                raise ModuleConfigurationError(
                    f"Could not read annotations of {base.__qualname__}: {e}", cls
                ) from e

            for name, annotation in _v_annotations.items():
                try:
                    _v_hint = evaluate_annotation(annotation, _v_globalns, _v_localns, include_extras=True)
                except Exception as e:
                    if declares_injection(annotation, _v_globalns, _v_localns):
                        raise UnresolvableDependencyError(cls, annotation, f"field '{name}'") from e
                    logger.debug(f"Skipped unevaluable annotation of {cls.__qualname__}.{name}: {e}")
                    _v_points.pop(name, None)
                    continue

                if is_inject_hint(_v_hint):
                    _v_points[name] = InjectionPoint(name, typing.get_args(_v_hint)[0])
                else:
                    # 하위 클래스가 Inject 없이 재선언한 필드
                    _v_points.pop(name, None)

        _v_result = list(_v_points.values())
        self._v_injection_points[cls] = _v_result
        return _v_result

    def inject(self, instance: Any) -> Any:
        """인스턴스의 모든 Inject 필드 설정"""
        _v_cls = type(instance)

        for point in self.get_injection_points(_v_cls):
            _v_dependency = self._v_resolve(point.dependency_type)
            if _v_dependency is UNRESOLVABLE:
                raise UnresolvableDependencyError(
                    _v_cls, point.dependency_type, f"field '{point.name}'"
                )

            try:
                setattr(instance, point.name, _v_dependency)
            except Exception as e:
                raise ModuleConstructionError(
                    _v_cls, f"could not assign field '{point.name}'", e
                ) from e

            logger.debug(f"Injected {point.name} into {_v_cls.__qualname__}")

        return instance

    def clear_cache(self):
        self._v_injection_points.clear()
