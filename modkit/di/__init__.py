"""
의존성 주입 및 모듈 생명주기 컨테이너 모듈

이 모듈은 모듈 컨테이너의 핵심 구성 요소들을 제공합니다.
"""

from .container import ModuleContainer, ContainerState
from .registry import ModuleRegistry, ModuleDescriptor
from .constructor import ConstructorSelector, Constructor
from .injector import FieldInjector, UNRESOLVABLE
from .lifecycle import LifecycleScanner, LifecycleMethods
from .resolver import Resolver, ConstructionContext
from .markers import module, Inject, inject, post_construct, pre_destroy, is_module
from .exceptions import (
    ModuleContainerError,
    ModuleConfigurationError,
    UnresolvableDependencyError,
    CircularDependencyError,
    InvalidLifecycleMethodError,
    ModuleConstructionError,
    LifecycleInvocationError,
    ModuleNotRegisteredError,
    ContainerStateError
)

__all__ = [
    'ModuleContainer',
    'ContainerState',
    'ModuleRegistry',
    'ModuleDescriptor',
    'ConstructorSelector',
    'Constructor',
    'FieldInjector',
    'UNRESOLVABLE',
    'LifecycleScanner',
    'LifecycleMethods',
    'Resolver',
    'ConstructionContext',
    'module',
    'Inject',
    'inject',
    'post_construct',
    'pre_destroy',
    'is_module',
    'ModuleContainerError',
    'ModuleConfigurationError',
    'UnresolvableDependencyError',
    'CircularDependencyError',
    'InvalidLifecycleMethodError',
    'ModuleConstructionError',
    'LifecycleInvocationError',
    'ModuleNotRegisteredError',
    'ContainerStateError'
]
