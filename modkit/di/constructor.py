"""
생성자 선택 모듈

이 모듈은 모듈 클래스를 인스턴스화할 때 사용할 생성자를 고르는 ConstructorSelector를 제공합니다.

선택 우선순위:
    0. register_factory()로 등록된 팩토리
    1. Inject 마커가 붙은 생성자 (__init__ 또는 classmethod, 선언 순서상 첫 번째)
    2. self 외 파라미터가 없는 __init__
    3. 그 외 __init__ (파라미터는 주입 생성자처럼 해결)
    4. 추상 클래스는 생성 불가 -> ModuleConstructionError
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from .exceptions import ModuleConstructionError
from .hints import evaluate_annotation, get_module_globals
from .markers import is_injection_constructor
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class ConstructorParameter:
    """생성자 파라미터 정보"""
    name: str
    annotation: Any
    kind: Any
    has_default: bool

    @property
    def is_annotated(self) -> bool:
        return self.annotation is not inspect.Parameter.empty


class Constructor:
    """선택된 생성자"""

    FACTORY = 'factory'
    INJECT = 'inject'
    NO_ARGS = 'no-args'
    FIRST_DECLARED = 'first-declared'

    def __init__(self,
                 owner: Type,
                 target: Callable[..., Any],
                 parameters: List[ConstructorParameter],
                 kind: str,
                 name: str = '__init__'):
        self.owner = owner
        self.target = target
        self.parameters = parameters
        self.kind = kind
        self.name = name

    def invoke(self, arguments: Dict[str, Any]) -> Any:
        """해결된 인자로 생성자 호출

        기본값을 사용하는 위치 전용 파라미터 뒤에는 위치 인자를 전달할 수 없습니다.

        Raises:
            ModuleConstructionError: 기본값을 사용한 위치 전용 파라미터 뒤의 위치 전용 파라미터가 해결된 경우
        """
        _v_args = []
        _v_kwargs = {}
        _v_skipped_positional = None
        for param in self.parameters:
            if param.kind == inspect.Parameter.POSITIONAL_ONLY:
                if param.name not in arguments:
                    if _v_skipped_positional is None:
                        _v_skipped_positional = param.name
                    continue
                if _v_skipped_positional is not None:
                    raise ModuleConstructionError(
                        self.owner,
                        f"positional-only parameter '{param.name}' was resolved but "
                        f"'{_v_skipped_positional}' before it falls back to its default"
                    )
                _v_args.append(arguments[param.name])
            elif param.name in arguments:
                _v_kwargs[param.name] = arguments[param.name]
        return self.target(*_v_args, **_v_kwargs)

    def __repr__(self) -> str:
        return (f"Constructor(owner={self.owner.__qualname__}, name={self.name}, "
                f"kind={self.kind}, parameters={[p.name for p in self.parameters]})")


class ConstructorSelector:
    """생성자 선택기 클래스"""

    def __init__(self, factories: Optional[Dict[Type, Callable[..., Any]]] = None):
        self._v_factories = factories if factories is not None else {}

    def has_factory(self, module_type: Type) -> bool:
        return module_type in self._v_factories

    def select(self, module_type: Type) -> Constructor:
        """사용할 생성자 반환"""
        if module_type in self._v_factories:
            _v_factory = self._v_factories[module_type]
            if isinstance(_v_factory, type):
                _v_parameters = self._get_parameters(module_type, _v_factory.__init__, skip_first=True)
            else:
                _v_parameters = self._get_parameters(module_type, _v_factory, skip_first=False)
            return Constructor(module_type, _v_factory, _v_parameters, Constructor.FACTORY,
                               getattr(_v_factory, '__name__', repr(_v_factory)))

        if inspect.isabstract(module_type):
            raise ModuleConstructionError(module_type, "no usable constructor (abstract class)")

        _v_candidates = self._find_injection_constructors(module_type)
        if _v_candidates:
            if len(_v_candidates) > 1:
                logger.warning(
                    f"{module_type.__qualname__} declares {len(_v_candidates)} Inject constructors "
                    f"({', '.join(name for name, _, _ in _v_candidates)}), using '{_v_candidates[0][0]}'"
                )
            _v_name, _v_target, _v_parameters = _v_candidates[0]
            return Constructor(module_type, _v_target, _v_parameters, Constructor.INJECT, _v_name)

        _v_parameters = self._get_parameters(module_type, module_type.__init__, skip_first=True)
        _v_kind = Constructor.FIRST_DECLARED if _v_parameters else Constructor.NO_ARGS
        return Constructor(module_type, module_type, _v_parameters, _v_kind)

    def _find_injection_constructors(self, module_type: Type) -> List[Tuple[str, Callable, List[ConstructorParameter]]]:
        """Inject 마커가 붙은 생성자 후보 목록 (선언 순서)"""
        _v_candidates = []

        for name, member in vars(module_type).items():
            if not is_injection_constructor(member):
                continue
            if name == '__init__':
                _v_candidates.append(
                    (name, module_type, self._get_parameters(module_type, member, skip_first=True))
                )
            elif isinstance(member, classmethod):
                _v_candidates.append(
                    (name, getattr(module_type, name),
                     self._get_parameters(module_type, member.__func__, skip_first=True))
                )
            elif isinstance(member, staticmethod):
                _v_candidates.append(
                    (name, getattr(module_type, name),
                     self._get_parameters(module_type, member.__func__, skip_first=False))
                )

        # 상속된 __init__ 에 붙은 마커
        if '__init__' not in vars(module_type) and is_injection_constructor(module_type.__init__):
            _v_candidates.append(
                ('__init__', module_type,
                 self._get_parameters(module_type, module_type.__init__, skip_first=True))
            )

        return _v_candidates

    def _get_parameters(self, module_type: Type, func: Callable, skip_first: bool) -> List[ConstructorParameter]:
        """생성자 파라미터 분석"""
        try:
            _v_signature = inspect.signature(func)
        except (TypeError, ValueError) as e:
            raise ModuleConstructionError(module_type, "could not inspect constructor signature", e) from e

        _v_globalns = get_module_globals(func)
        _v_parameters = []

        for index, param in enumerate(_v_signature.parameters.values()):
            if skip_first and index == 0:
                continue
            if param.kind in _SKIPPED_KINDS:
                continue

            _v_annotation = param.annotation
            try:
                _v_annotation = evaluate_annotation(param.annotation, _v_globalns)
            except Exception as e:
                # 평가할 수 없는 어노테이션은 원본 그대로 두어 해결 불가로 처리
                logger.debug(
                    f"Could not evaluate annotation of parameter '{param.name}' "
                    f"of {module_type.__qualname__}: {e}"
                )

            _v_parameters.append(ConstructorParameter(
                name=param.name,
                annotation=_v_annotation,
                kind=param.kind,
                has_default=param.default is not inspect.Parameter.empty
            ))

        return _v_parameters
