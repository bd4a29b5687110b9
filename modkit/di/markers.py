"""
모듈 마커 모듈

이 모듈은 컨테이너가 읽는 선언적 마커들(@module, Inject, @post_construct, @pre_destroy)을 제공합니다.

사용 예시:
    @module
    class Repository:
        def __init__(self, settings: Settings):
            self.settings = settings

    @module
    class Service:
        repository: Annotated[Repository, Inject]

        @post_construct
        def start(self):
            ...

        @pre_destroy
        def stop(self):
            ...
"""

from typing import Any, Callable, Type, TypeVar

T = TypeVar('T')

_MODULE_ATTR = '__modkit_module__'
_INJECT_ATTR = '__modkit_inject__'
_POST_CONSTRUCT_ATTR = '__modkit_post_construct__'
_PRE_DESTROY_ATTR = '__modkit_pre_destroy__'


def _unwrap(func: Any) -> Any:
    """classmethod/staticmethod 래퍼를 벗겨 원본 함수 반환"""
    if isinstance(func, (classmethod, staticmethod)):
        return func.__func__
    return func


def module(cls: Type[T] = None):
    """모듈 클래스 데코레이터

    @module 과 @module() 두 형태 모두 지원합니다.
    마커는 해당 클래스에만 적용되며 하위 클래스로 상속되지 않습니다.
    """
    def decorator(target: Type[T]) -> Type[T]:
        if not isinstance(target, type):
            raise TypeError(f"@module can only decorate classes, got {target!r}")
        setattr(target, _MODULE_ATTR, target)
        return target

    if cls is None:
        return decorator
    return decorator(cls)


class _InjectMarker:
    """주입 마커

    생성자(__init__ 또는 classmethod)에 데코레이터로 사용하거나,
    필드 어노테이션의 Annotated 메타데이터로 사용합니다.
    """

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        setattr(_unwrap(func), _INJECT_ATTR, True)
        return func

    def __repr__(self) -> str:
        return 'Inject'


Inject = _InjectMarker()
inject = Inject


def post_construct(func: Callable[..., Any]) -> Callable[..., Any]:
    """생성 및 주입 완료 후 호출될 메서드 마커"""
    setattr(_unwrap(func), _POST_CONSTRUCT_ATTR, True)
    return func


def pre_destroy(func: Callable[..., Any]) -> Callable[..., Any]:
    """컨테이너 종료 시 호출될 메서드 마커"""
    setattr(_unwrap(func), _PRE_DESTROY_ATTR, True)
    return func


def is_module(cls: Any) -> bool:
    """@module 로 선언된 클래스인지 확인"""
    return isinstance(cls, type) and cls.__dict__.get(_MODULE_ATTR) is cls


def is_injection_constructor(func: Any) -> bool:
    """Inject 마커가 붙은 생성자인지 확인"""
    return getattr(_unwrap(func), _INJECT_ATTR, False) is True


def is_post_construct(func: Any) -> bool:
    return getattr(_unwrap(func), _POST_CONSTRUCT_ATTR, False) is True


def is_pre_destroy(func: Any) -> bool:
    return getattr(_unwrap(func), _PRE_DESTROY_ATTR, False) is True


def is_inject_metadata(metadata: Any) -> bool:
    """Annotated 메타데이터가 Inject 마커인지 확인"""
    return metadata is Inject
