"""
임포트 실패를 포함한 스캐너 테스트용 패키지
"""
