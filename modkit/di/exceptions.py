"""
모듈 컨테이너 예외 클래스들

이 모듈은 모듈 컨테이너의 등록, 해결, 생명주기 처리 과정에서 발생할 수 있는 예외들을 정의합니다.
"""

from typing import List, Optional


def type_name(module_type) -> str:
    """예외 메시지용 타입 이름"""
    if isinstance(module_type, type):
        return f"{module_type.__module__}.{module_type.__qualname__}"
    return str(module_type)


class ModuleContainerError(Exception):
    """모듈 컨테이너 기본 예외"""

    def __init__(self, message: str, module_type: type = None):
        super().__init__(message)
        self.module_type = module_type
        self.message = message

    def __str__(self):
        if self.module_type is not None:
            return f"[{type_name(self.module_type)}] {self.message}"
        return self.message


class ModuleConfigurationError(ModuleContainerError):
    """모듈 구성 오류 (모듈이 아닌 타입, 잘못된 의존성 선언 등)"""


class UnresolvableDependencyError(ModuleConfigurationError):
    """의존성을 해결할 수 없을 때 발생하는 예외"""

    def __init__(self, module_type: type, dependency_type, target: str):
        self.dependency_type = dependency_type
        self.target = target
        super().__init__(
            f"Could not resolve dependency '{type_name(dependency_type)}' for {target}",
            module_type
        )


class CircularDependencyError(ModuleConfigurationError):
    """순환 의존성이 발견되었을 때 발생하는 예외"""

    def __init__(self, dependency_chain: List[type]):
        self.dependency_chain = list(dependency_chain)
        chain_str = " -> ".join(type_name(t) for t in self.dependency_chain)
        super().__init__(
            f"Circular dependency detected: {chain_str}",
            self.dependency_chain[-1] if self.dependency_chain else None
        )


class InvalidLifecycleMethodError(ModuleConfigurationError):
    """생명주기 메서드 형태가 잘못되었을 때 발생하는 예외"""

    def __init__(self, module_type: type, method_name: str, reason: str):
        self.method_name = method_name
        super().__init__(
            f"Lifecycle method '{method_name}' {reason}",
            module_type
        )


class ModuleConstructionError(ModuleContainerError):
    """생성자 호출 또는 필드 주입 중 발생한 예외"""

    def __init__(self, module_type: type, reason: str, cause: Optional[BaseException] = None):
        self.cause = cause
        message = f"Failed to construct module: {reason}"
        if cause is not None:
            message += f" ({cause.__class__.__name__}: {cause})"
        super().__init__(message, module_type)


class LifecycleInvocationError(ModuleContainerError):
    """@post_construct 콜백이 실패했을 때 발생하는 예외"""

    def __init__(self, module_type: type, method_name: str, cause: BaseException):
        self.method_name = method_name
        self.cause = cause
        super().__init__(
            f"Failed to invoke @post_construct method '{method_name}': "
            f"{cause.__class__.__name__}: {cause}",
            module_type
        )


class ModuleNotRegisteredError(ModuleContainerError):
    """등록되지 않은 모듈을 조회할 때 발생하는 예외"""

    def __init__(self, module_type: type):
        super().__init__(
            "Module not found. Make sure it is registered and decorated with @module",
            module_type
        )


class ContainerStateError(ModuleContainerError):
    """컨테이너 상태에 맞지 않는 작업을 요청했을 때 발생하는 예외"""

    def __init__(self, operation: str, state):
        self.operation = operation
        self.state = state
        super().__init__(
            f"Cannot {operation}: container is {getattr(state, 'value', state)}"
        )
