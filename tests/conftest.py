"""
Pytest configuration file.
"""

import os
import sys
import pytest
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 스캐너 테스트용 샘플 패키지 경로
fixtures_dir = Path(__file__).parent / 'fixtures'
sys.path.insert(0, str(fixtures_dir))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """MODKIT_ 환경 변수 제거"""
    for key in list(os.environ):
        if key.startswith('MODKIT_'):
            monkeypatch.delenv(key, raising=False)
    yield
