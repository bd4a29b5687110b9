"""
샘플 저장소 모듈
"""

from modkit.di import module, post_construct, pre_destroy

import modkit_sample_app


@module
class Storage:
    def __init__(self):
        self.records = {}

    @post_construct
    def open(self):
        modkit_sample_app.EVENTS.append('Storage.open')

    @pre_destroy
    def close(self):
        modkit_sample_app.EVENTS.append('Storage.close')
