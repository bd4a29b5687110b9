"""
HostApplication 클래스 구현

이 모듈은 컨테이너의 호스트(루트) 객체가 상속받는 기본 클래스를 정의합니다.
호스트는 자신의 컨테이너를 만들고, 자기 자신과 핵심 모듈, 발견된 모듈을 순서대로 등록합니다.

사용 예시:
    class MyApp(HostApplication):
        config: Annotated[ConfigModule, Inject]

        def core_modules(self):
            return [ConfigModule]

        def on_enable(self):
            self.logger.info("ready")

    app = MyApp()
    app.enable()
    ...
    app.disable()
"""

import logging
import threading
from typing import List, Optional, Type

from modkit.config import ContainerSettings, load_settings
from modkit.di.container import ModuleContainer
from modkit.di.exceptions import ModuleContainerError
from modkit.plugins.exceptions import HostStateError
from modkit.plugins.scanner import ModuleScanner


class HostApplication:
    """호스트 애플리케이션 기본 클래스"""

    def __init__(self, settings: Optional[ContainerSettings] = None):
        """
        호스트 초기화

        Args:
            settings: 컨테이너 설정 (기본값: 환경 변수에서 로드)
        """
        self._settings = settings
        self._container: Optional[ModuleContainer] = None
        self._enabled = False
        self._lock = threading.RLock()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def settings(self) -> ContainerSettings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @property
    def container(self) -> Optional[ModuleContainer]:
        return self._container

    @property
    def debug(self) -> bool:
        """컨테이너 디버그 로그 여부 (경고와 오류는 항상 기록)"""
        return self.settings.debug

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def load(self) -> None:
        """호스트 로드 단계"""
        self.on_load()

    def enable(self) -> None:
        """
        호스트 활성화

        컨테이너 생성 -> 호스트 등록 -> 핵심 모듈 등록 -> 발견된 모듈 등록 -> on_enable()

        Raises:
            ModuleContainerError: 모듈 등록 실패 (컨테이너는 정리된 뒤 예외 전파)
        """
        with self._lock:
            if self._enabled:
                raise HostStateError(f"{self.__class__.__name__} is already enabled")

            if self.debug:
                logging.getLogger('modkit').setLevel(logging.DEBUG)

            self._container = self.create_container()
            try:
                self._container.register_module(type(self))

                for module_type in self.core_modules():
                    self._container.register_module(module_type)

                for module_type in self.discover_modules():
                    self._container.register_module(module_type)
                    self.logger.info(f"Registered module: {module_type.__name__}")

            except ModuleContainerError as e:
                self.logger.error(f"Failed to initialize {self.__class__.__name__}: {e}")
                self._container.shutdown()
                self._container = None
                raise

            self._enabled = True

        self.on_enable()

    def disable(self) -> None:
        """호스트 비활성화 (컨테이너 종료 후 on_disable())"""
        with self._lock:
            if self._container is not None:
                try:
                    self._container.shutdown()
                except Exception:
                    self.logger.exception("Error during container shutdown")
                self._container = None
            self._enabled = False

        self.on_disable()

    def create_container(self) -> ModuleContainer:
        """호스트용 컨테이너 생성"""
        return ModuleContainer(self, host_type=HostApplication)

    def core_modules(self) -> List[Type]:
        """발견된 모듈보다 먼저 등록할 핵심 모듈 목록"""
        return []

    def scan_packages(self) -> List[str]:
        """모듈을 발견할 패키지 목록 (기본값: 설정, 없으면 호스트 클래스의 패키지)"""
        if self.settings.scan_packages:
            return list(self.settings.scan_packages)

        module_name = self.__class__.__module__
        if module_name == '__main__':
            return []
        package = module_name.rpartition('.')[0]
        return [package or module_name]

    def discover_modules(self) -> List[Type]:
        """등록할 모듈 클래스 발견"""
        packages = self.scan_packages()
        if not packages:
            return []
        scanner = ModuleScanner(strict=self.settings.strict_scan)
        return scanner.scan(packages)

    def get_module(self, module_type: Type):
        """컨테이너에서 모듈 조회"""
        if self._container is None:
            raise HostStateError(f"{self.__class__.__name__} is not enabled")
        return self._container.get_module(module_type)

    def on_load(self) -> None:
        """로드 시 호출 (하위 클래스에서 재정의)"""

    def on_enable(self) -> None:
        """활성화 완료 후 호출 (하위 클래스에서 재정의)"""

    def on_disable(self) -> None:
        """비활성화 후 호출 (하위 클래스에서 재정의)"""
