"""
타입 힌트 평가 모듈

이 모듈은 생성자 파라미터와 클래스 필드의 어노테이션을 하나씩 평가하는 함수들을 제공합니다.
평가할 수 없는 어노테이션(TYPE_CHECKING 전용 임포트 등)이 있어도 다른 어노테이션의 평가는
영향을 받지 않습니다.
"""

import builtins
import inspect
import sys
import typing
from typing import Any, Dict, Mapping, Optional, Type

from .markers import is_inject_metadata


def evaluate_annotation(annotation: Any,
                        globalns: Dict[str, Any],
                        localns: Optional[Dict[str, Any]] = None,
                        include_extras: bool = False) -> Any:
    """단일 어노테이션 평가 (문자열 전방 참조 포함)

    Raises:
        NameError, TypeError 등: 어노테이션을 평가할 수 없는 경우
    """
    if annotation is inspect.Parameter.empty:
        return annotation

    def _v_holder():
        pass

    _v_holder.__annotations__ = {'value': annotation}
    return typing.get_type_hints(_v_holder, globalns, localns, include_extras=include_extras)['value']


def get_module_globals(obj: Any) -> Dict[str, Any]:
    """클래스 또는 함수가 정의된 모듈의 전역 이름공간"""
    _v_target = getattr(obj, '__func__', obj)
    if inspect.isfunction(_v_target):
        return inspect.unwrap(_v_target).__globals__
    _v_module = sys.modules.get(getattr(obj, '__module__', None) or '')
    return vars(_v_module) if _v_module is not None else {}


def get_own_annotations(cls: Type) -> Dict[str, Any]:
    """클래스에 직접 선언된 어노테이션 (평가 전 원본, 선언 순서)"""
    return dict(inspect.get_annotations(cls))


def is_inject_hint(hint: Any) -> bool:
    """평가된 힌트가 Annotated[T, Inject] 인지 확인"""
    if typing.get_origin(hint) is not typing.Annotated:
        return False
    return any(is_inject_metadata(m) for m in hint.__metadata__)


class _PlaceholderMeta(type):
    """평가할 수 없는 이름을 대신하는 자리표시 타입"""

    def __getattr__(cls, name):
        if name.startswith('_'):
            raise AttributeError(name)
        return _PlaceholderMeta(name, (), {})

    def __getitem__(cls, item):
        return cls


class _LenientNamespace(dict):
    """없는 이름을 자리표시 타입으로 채우는 이름공간"""

    def __init__(self, globalns: Mapping[str, Any], localns: Optional[Mapping[str, Any]] = None):
        super().__init__(localns or {})
        self._v_globalns = globalns

    def __missing__(self, key):
        if key in self._v_globalns:
            return self._v_globalns[key]
        if hasattr(builtins, key):
            return getattr(builtins, key)
        return _PlaceholderMeta(key, (), {})


def declares_injection(annotation: Any,
                       globalns: Mapping[str, Any],
                       localns: Optional[Mapping[str, Any]] = None) -> bool:
    """평가에 실패한 어노테이션이 Inject 필드 선언인지 확인

    정의되지 않은 이름은 자리표시 타입으로 대체하여 어노테이션의 형태만 확인합니다.
    """
    _v_value = annotation
    if isinstance(annotation, str):
        try:
            _v_value = eval(annotation, {}, _LenientNamespace(globalns, localns))
        except Exception:
            return False
    return is_inject_hint(_v_value)
