"""
모듈 해결기 모듈

이 모듈은 요청된 타입의 싱글톤을 반환하고, 없으면 재귀적으로 생성/등록하는 Resolver를 구현합니다.
"""

import inspect
from typing import Any, Callable, Dict, List, Optional, Set, Type

from .constructor import Constructor, ConstructorSelector
from .exceptions import (
    CircularDependencyError,
    ModuleContainerError,
    ModuleConstructionError,
    UnresolvableDependencyError
)
from .injector import UNRESOLVABLE, FieldInjector
from .lifecycle import LifecycleScanner, invoke_post_construct
from .markers import is_module
from .registry import ModuleDescriptor, ModuleRegistry
from ..utils.log_utils import get_logger

logger = get_logger(__name__)


class ConstructionContext:
    """생성 중인 타입 추적 (top-level register_module 호출 단위)"""

    def __init__(self):
        self._v_stack: List[Type] = []
        self._v_members: Set[Type] = set()

    def enter(self, module_type: Type):
        """생성 시작 표시 (이미 생성 중이면 순환 의존성)"""
        if module_type in self._v_members:
            _v_start = self._v_stack.index(module_type)
            raise CircularDependencyError(self._v_stack[_v_start:] + [module_type])
        self._v_stack.append(module_type)
        self._v_members.add(module_type)

    def exit(self, module_type: Type):
        """생성 종료 표시"""
        if module_type in self._v_members:
            self._v_members.discard(module_type)
            self._v_stack.remove(module_type)

    def is_constructing(self, module_type: Type) -> bool:
        return module_type in self._v_members

    @property
    def chain(self) -> List[Type]:
        return list(self._v_stack)

    def __len__(self) -> int:
        return len(self._v_stack)


class Resolver:
    """모듈 해결기 클래스"""

    def __init__(self,
                 registry: ModuleRegistry,
                 selector: ConstructorSelector,
                 scanner: LifecycleScanner,
                 host: Any = None,
                 host_types: Optional[Set[Type]] = None):
        self._v_registry = registry
        self._v_selector = selector
        self._v_scanner = scanner
        self._v_host = host
        self._v_host_types = set(host_types or ())
        self._v_context: Optional[ConstructionContext] = None
        self._v_injector = FieldInjector(self._resolve_dependency)

    @property
    def injector(self) -> FieldInjector:
        return self._v_injector

    def is_host_type(self, module_type: Type) -> bool:
        return self._v_host is not None and module_type in self._v_host_types

    def is_injectable(self, module_type: Type) -> bool:
        """컨테이너가 생성할 수 있는 타입인지 확인"""
        return is_module(module_type) or self._v_selector.has_factory(module_type)

    def resolve(self, module_type: Type) -> Any:
        """타입 해결

        Returns:
            싱글톤 인스턴스, 해결할 수 없는 타입이면 UNRESOLVABLE
        """
        # 1. 호스트 타입
        if self.is_host_type(module_type):
            return self._v_host

        # 2. 이미 등록된 모듈
        _v_descriptor = self._v_registry.get(module_type)
        if _v_descriptor is not None:
            return _v_descriptor.instance

        # 3. 모듈이 아닌 타입
        if not self.is_injectable(module_type):
            return UNRESOLVABLE

        # 4. 생성 및 등록
        _v_is_root = self._v_context is None
        if _v_is_root:
            self._v_context = ConstructionContext()
        try:
            return self._construct(module_type)
        finally:
            if _v_is_root:
                self._v_context = None

    def _construct(self, module_type: Type) -> Any:
        """모듈 생성, 주입, 생명주기 호출, 등록"""
        _v_context = self._v_context
        _v_context.enter(module_type)
        logger.debug(f"Constructing module: {module_type.__qualname__}")

        try:
            try:
                _v_constructor = self._v_selector.select(module_type)
                _v_arguments = self._resolve_arguments(module_type, _v_constructor)
                _v_instance = self._instantiate(module_type, _v_constructor, _v_arguments)
                self._v_injector.inject(_v_instance)
            finally:
                _v_context.exit(module_type)

            _v_methods = self._v_scanner.scan(type(_v_instance))
            _v_post_construct, _v_pre_destroy = _v_methods.bind(_v_instance)
            invoke_post_construct(module_type, _v_post_construct)

        except ModuleContainerError:
            raise
        except Exception as e:
            raise ModuleConstructionError(module_type, "unexpected error during construction", e) from e

        self._v_registry.add(ModuleDescriptor(
            module_type=module_type,
            instance=_v_instance,
            post_construct=_v_post_construct,
            pre_destroy=_v_pre_destroy
        ))
        logger.debug(f"Module constructed: {module_type.__qualname__} via {_v_constructor.kind} constructor")
        return _v_instance

    def _resolve_arguments(self, module_type: Type, constructor: Constructor) -> Dict[str, Any]:
        """생성자 파라미터 해결"""
        _v_arguments = {}

        for param in constructor.parameters:
            if param.is_annotated:
                _v_value = self._resolve_dependency(param.annotation)
            else:
                _v_value = UNRESOLVABLE

            if _v_value is UNRESOLVABLE:
                if param.has_default:
                    continue
                _v_dependency = param.annotation if param.is_annotated else '<unannotated>'
                raise UnresolvableDependencyError(
                    module_type, _v_dependency, f"constructor parameter '{param.name}'"
                )

            _v_arguments[param.name] = _v_value

        return _v_arguments

    def _instantiate(self, module_type: Type, constructor: Constructor, arguments: Dict[str, Any]) -> Any:
        """생성자 호출"""
        try:
            _v_instance = constructor.invoke(arguments)
        except ModuleContainerError:
            raise
        except Exception as e:
            raise ModuleConstructionError(
                module_type, f"constructor '{constructor.name}' raised", e
            ) from e

        if _v_instance is None:
            raise ModuleConstructionError(module_type, f"constructor '{constructor.name}' returned None")
        return _v_instance

    def _resolve_dependency(self, dependency_type: Any) -> Any:
        """의존성 해결 (클래스가 아닌 어노테이션은 해결 불가)"""
        if not inspect.isclass(dependency_type):
            return UNRESOLVABLE
        return self.resolve(dependency_type)

    def inject_host(self, module_type: Type) -> ModuleDescriptor:
        """호스트 객체 등록

        호스트는 이미 존재하므로 필드 주입 전에 레지스트리에 먼저 등록되며,
        실패 시 등록이 취소됩니다.
        """
        _v_descriptor = self._v_registry.add(ModuleDescriptor(module_type=module_type, instance=self._v_host))

        _v_is_root = self._v_context is None
        if _v_is_root:
            self._v_context = ConstructionContext()
        try:
            self._v_injector.inject(self._v_host)
            _v_methods = self._v_scanner.scan(module_type)
            _v_post_construct, _v_pre_destroy = _v_methods.bind(self._v_host)
            _v_descriptor.post_construct.extend(_v_post_construct)
            _v_descriptor.pre_destroy.extend(_v_pre_destroy)
            invoke_post_construct(module_type, _v_post_construct)
        except ModuleContainerError:
            self._v_registry.remove(module_type)
            raise
        except Exception as e:
            self._v_registry.remove(module_type)
            raise ModuleConstructionError(module_type, "unexpected error during host injection", e) from e
        finally:
            if _v_is_root:
                self._v_context = None

        return _v_descriptor
