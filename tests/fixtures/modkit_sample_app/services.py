"""
샘플 서비스 모듈
"""

from typing import Annotated

from modkit.di import Inject, module, pre_destroy

import modkit_sample_app
from modkit_sample_app.storage import Storage


class Formatter:
    """모듈이 아닌 보조 클래스"""


@module
class Repository:
    def __init__(self, storage: Storage):
        self.storage = storage

    @pre_destroy
    def flush(self):
        modkit_sample_app.EVENTS.append('Repository.flush')


@module
class Notifier:
    repository: Annotated[Repository, Inject]

    @pre_destroy
    def stop(self):
        modkit_sample_app.EVENTS.append('Notifier.stop')
