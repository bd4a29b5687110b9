"""
modkit - dependency-injection and module lifecycle container.
"""

from modkit.di import (
    ModuleContainer,
    ContainerState,
    module,
    Inject,
    inject,
    post_construct,
    pre_destroy,
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
from modkit.plugins import HostApplication, ModuleScanner

__version__ = "1.0.0"

__all__ = [
    'ModuleContainer',
    'ContainerState',
    'module',
    'Inject',
    'inject',
    'post_construct',
    'pre_destroy',
    'HostApplication',
    'ModuleScanner',
    'ModuleContainerError',
    'ModuleConfigurationError',
    'UnresolvableDependencyError',
    'CircularDependencyError',
    'InvalidLifecycleMethodError',
    'ModuleConstructionError',
    'LifecycleInvocationError',
    'ModuleNotRegisteredError',
    'ContainerStateError',
    '__version__'
]
