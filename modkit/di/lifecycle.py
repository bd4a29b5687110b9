"""
모듈 생명주기 관리 모듈

이 모듈은 @post_construct / @pre_destroy 메서드를 찾고 검증하는 LifecycleScanner와
콜백 호출 함수들을 제공합니다.
"""

import inspect
import threading
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple, Type

from .exceptions import InvalidLifecycleMethodError, LifecycleInvocationError, type_name
from .markers import is_post_construct, is_pre_destroy
from ..utils.log_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LifecycleMethods:
    """클래스에 선언된 생명주기 메서드 목록"""
    post_construct: Tuple[Callable[..., Any], ...] = ()
    pre_destroy: Tuple[Callable[..., Any], ...] = ()

    def bind(self, instance: Any) -> Tuple[List[Callable[[], Any]], List[Callable[[], Any]]]:
        """인스턴스에 바인딩된 콜백 목록 반환"""
        return (
            [types.MethodType(func, instance) for func in self.post_construct],
            [types.MethodType(func, instance) for func in self.pre_destroy],
        )


class LifecycleScanner:
    """생명주기 메서드 스캐너

    클래스에 직접 선언된 메서드만 선언 순서대로 수집합니다. 결과는 클래스별로 캐시됩니다.
    """

    def __init__(self):
        self._v_cache: Dict[Type, LifecycleMethods] = {}
        self._v_lock = threading.Lock()

    def scan(self, cls: Type) -> LifecycleMethods:
        """생명주기 메서드 스캔"""
        _v_cached = self._v_cache.get(cls)
        if _v_cached is not None:
            return _v_cached

        _v_post_construct = []
        _v_pre_destroy = []

        for name, member in vars(cls).items():
            _v_is_post = is_post_construct(member)
            _v_is_pre = is_pre_destroy(member)
            if not (_v_is_post or _v_is_pre):
                continue

            self._validate(cls, name, member)
            if _v_is_post:
                _v_post_construct.append(member)
            if _v_is_pre:
                _v_pre_destroy.append(member)

        _v_methods = LifecycleMethods(tuple(_v_post_construct), tuple(_v_pre_destroy))
        with self._v_lock:
            self._v_cache[cls] = _v_methods
        return _v_methods

    def clear(self):
        """캐시 정리"""
        with self._v_lock:
            self._v_cache.clear()

    def _validate(self, cls: Type, name: str, member: Any):
        """생명주기 메서드 형태 검증 (self 외 파라미터 불가)"""
        if isinstance(member, (staticmethod, classmethod)):
            raise InvalidLifecycleMethodError(cls, name, "must be an instance method")
        if not inspect.isfunction(member):
            raise InvalidLifecycleMethodError(cls, name, "must be a plain function")

        _v_parameters = list(inspect.signature(member).parameters.values())
        if len(_v_parameters) != 1 or _v_parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD
        ):
            raise InvalidLifecycleMethodError(cls, name, "must have no parameters")


def invoke_post_construct(module_type: Type, callbacks: List[Callable[[], Any]]):
    """@post_construct 콜백 호출 (실패 시 예외 전파)"""
    for callback in callbacks:
        logger.debug(f"Invoking @post_construct {module_type.__qualname__}.{callback.__name__}")
        try:
            callback()
        except Exception as e:
            raise LifecycleInvocationError(module_type, callback.__name__, e) from e


def invoke_pre_destroy(module_type: Type, callbacks: List[Callable[[], Any]]) -> int:
    """@pre_destroy 콜백 호출 (실패는 기록 후 계속 진행)

    Returns:
        실패한 콜백 수
    """
    _v_failures = 0
    for callback in callbacks:
        logger.debug(f"Invoking @pre_destroy {module_type.__qualname__}.{callback.__name__}")
        try:
            callback()
        except Exception:
            _v_failures += 1
            logger.exception(
                f"Failed to invoke @pre_destroy method: "
                f"{module_type.__qualname__}.{callback.__name__}",
                extra={'module_type': type_name(module_type), 'phase': 'pre_destroy'}
            )
    return _v_failures
