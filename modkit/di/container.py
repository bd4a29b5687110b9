"""
모듈 컨테이너 모듈

이 모듈은 모듈 레지스트리와 등록 순서를 소유하고 해결기와 생명주기 호출을 조율하는
ModuleContainer를 구현합니다.

상태 전이:
    UNINITIALIZED -> ACTIVE (첫 register_module)
                  -> SHUTTING_DOWN (shutdown 진입)
                  -> TERMINATED (shutdown 종료)
"""

import threading
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from .constructor import ConstructorSelector
from .exceptions import (
    ContainerStateError,
    ModuleConfigurationError,
    ModuleContainerError,
    ModuleNotRegisteredError,
    type_name
)
from .injector import UNRESOLVABLE
from .lifecycle import LifecycleScanner, invoke_pre_destroy
from .registry import ModuleDescriptor, ModuleRegistry
from .resolver import Resolver
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class ContainerState(Enum):
    """컨테이너 상태"""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class ModuleContainer:
    """모듈 컨테이너 클래스"""

    def __init__(self, host: Any = None, host_type: Optional[Type] = None):
        """
        모듈 컨테이너 초기화

        Args:
            host: 컨테이너 외부에서 이미 생성된 호스트(루트) 객체
            host_type: 호스트로 해결될 고정 타입 (기본값: type(host))
        """
        self._v_host = host
        self._v_host_types = set()
        if host is not None:
            self._v_host_types.add(type(host))
            if host_type is not None:
                self._v_host_types.add(host_type)

        self._v_registry = ModuleRegistry()
        self._v_factories: Dict[Type, Callable[..., Any]] = {}
        self._v_scanner = LifecycleScanner()
        self._v_selector = ConstructorSelector(self._v_factories)
        self._v_resolver = Resolver(
            self._v_registry,
            self._v_selector,
            self._v_scanner,
            host=host,
            host_types=self._v_host_types
        )
        self._v_lock = threading.RLock()
        self._v_state = ContainerState.UNINITIALIZED

    @property
    def state(self) -> ContainerState:
        return self._v_state

    @property
    def host(self) -> Any:
        return self._v_host

    def register_module(self, module_type: Type[T]) -> T:
        """모듈 등록

        이미 등록된 타입이면 기존 인스턴스를 반환합니다 (콜백 재호출 없음).
        호스트 별칭 타입(host_type)은 레지스트리에 추가하지 않고 호스트를 반환합니다.

        Raises:
            ModuleConfigurationError: 모듈로 선언되지 않은 타입, 잘못된 의존성
            ModuleConstructionError: 생성자 또는 필드 주입 실패
            LifecycleInvocationError: @post_construct 콜백 실패
            ContainerStateError: 종료 이후 호출
        """
        if module_type is None:
            raise ModuleConfigurationError("Module type cannot be None")

        with self._v_lock:
            self._ensure_active("register module")

            _v_existing = self._v_registry.get(module_type)
            if _v_existing is not None:
                return _v_existing.instance

            # 호스트 별칭 타입은 등록 없이 호스트로 해결
            if self._v_resolver.is_host_type(module_type) and module_type is not type(self._v_host):
                logger.debug(f"{module_type.__qualname__} resolves to the host, nothing to register")
                return self._v_host

            try:
                if self._v_host is not None and module_type is type(self._v_host):
                    _v_instance = self._v_resolver.inject_host(module_type).instance
                else:
                    _v_instance = self._v_resolver.resolve(module_type)
                    if _v_instance is UNRESOLVABLE:
                        raise ModuleConfigurationError(
                            "Class must be decorated with @module or registered with a factory",
                            module_type
                        )
            except ModuleContainerError as e:
                logger.error(
                    f"Failed to register module {type_name(module_type)}: {e}",
                    extra={'module_type': type_name(module_type), 'phase': 'register'}
                )
                raise

            logger.info(
                f"Registered module: {module_type.__qualname__}",
                extra={'module_type': type_name(module_type), 'phase': 'register'}
            )
            return _v_instance

    def register_all(self, module_types: Iterable[Type]) -> List[Any]:
        """모듈 목록을 순서대로 등록"""
        return [self.register_module(module_type) for module_type in module_types]

    def register_factory(self, module_type: Type[T], factory: Callable[..., T]) -> 'ModuleContainer':
        """팩토리 함수로 모듈 생성 방법 등록

        팩토리의 파라미터는 생성자 파라미터와 같은 방식으로 해결됩니다.
        """
        with self._v_lock:
            if self._v_state in (ContainerState.SHUTTING_DOWN, ContainerState.TERMINATED):
                raise ContainerStateError("register factory", self._v_state)
            if self._v_registry.is_registered(module_type):
                raise ModuleConfigurationError("Module is already registered", module_type)
            self._v_factories[module_type] = factory
            logger.debug(f"Registered factory for {module_type.__qualname__}")
        return self

    def get_module(self, module_type: Type[T]) -> T:
        """등록된 모듈 조회 (생성하지 않음)

        Raises:
            ModuleNotRegisteredError: 등록되지 않은 타입
            ContainerStateError: 종료 이후 호출
        """
        _v_state = self._v_state
        if _v_state in (ContainerState.SHUTTING_DOWN, ContainerState.TERMINATED):
            raise ContainerStateError("get module", _v_state)

        if self._v_host is not None and module_type in self._v_host_types:
            return self._v_host

        _v_instance = self._v_registry.get_instance(module_type)
        if _v_instance is None:
            raise ModuleNotRegisteredError(module_type)
        return _v_instance

    def try_get_module(self, module_type: Type[T]) -> Optional[T]:
        """등록된 모듈 조회 (없으면 None)"""
        try:
            return self.get_module(module_type)
        except ModuleNotRegisteredError:
            return None

    def is_registered(self, module_type: Type) -> bool:
        return self._v_registry.is_registered(module_type)

    def modules(self) -> Dict[Type, Any]:
        """등록된 모든 모듈 (등록 순서)"""
        return {d.module_type: d.instance for d in self._v_registry.snapshot()}

    def find_modules(self, base_type: Type[T]) -> List[T]:
        """지정 타입의 인스턴스인 모듈 목록 (등록 순서)"""
        return [d.instance for d in self._v_registry.snapshot() if isinstance(d.instance, base_type)]

    def registration_order(self) -> List[Type]:
        return self._v_registry.registration_order()

    def get_descriptor(self, module_type: Type) -> Optional[ModuleDescriptor]:
        return self._v_registry.get(module_type)

    def shutdown(self):
        """컨테이너 종료

        등록 역순으로 @pre_destroy 콜백을 호출합니다. 콜백 실패는 기록만 하고 계속 진행합니다.
        """
        with self._v_lock:
            if self._v_state in (ContainerState.SHUTTING_DOWN, ContainerState.TERMINATED):
                logger.debug(f"Shutdown skipped, container is {self._v_state.value}")
                return

            self._v_state = ContainerState.SHUTTING_DOWN
            logger.info("Shutting down module container...", extra={'container_state': self._v_state.value})

            _v_failures = 0
            _v_descriptors = self._v_registry.snapshot()
            for descriptor in reversed(_v_descriptors):
                _v_failures += invoke_pre_destroy(descriptor.module_type, descriptor.pre_destroy)
                logger.debug(
                    f"Module destroyed: {descriptor.module_type.__qualname__}",
                    extra={'module_type': type_name(descriptor.module_type), 'phase': 'pre_destroy'}
                )

            self._v_registry.clear()
            self._v_scanner.clear()
            self._v_resolver.injector.clear_cache()
            self._v_factories.clear()
            self._v_state = ContainerState.TERMINATED

            if _v_failures:
                logger.warning(
                    f"Module container shutdown completed with {_v_failures} failed @pre_destroy callback(s)",
                    extra={'container_state': self._v_state.value}
                )
            else:
                logger.info(
                    f"Module container shutdown completed ({len(_v_descriptors)} modules)",
                    extra={'container_state': self._v_state.value}
                )

    def get_container_stats(self) -> Dict[str, Any]:
        """컨테이너 통계 조회"""
        return {
            'state': self._v_state.value,
            'registered_modules': len(self._v_registry),
            'factories': len(self._v_factories),
            'registration_order': [type_name(t) for t in self._v_registry.registration_order()],
        }

    def _ensure_active(self, operation: str):
        if self._v_state in (ContainerState.SHUTTING_DOWN, ContainerState.TERMINATED):
            raise ContainerStateError(operation, self._v_state)
        if self._v_state is ContainerState.UNINITIALIZED:
            self._v_state = ContainerState.ACTIVE

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def __str__(self) -> str:
        return f"ModuleContainer(state={self._v_state.value}, modules={len(self._v_registry)})"

    def __repr__(self) -> str:
        return self.__str__()
