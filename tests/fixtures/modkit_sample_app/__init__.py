"""
스캐너와 부트스트랩 테스트용 샘플 패키지
"""

# 생명주기 호출 기록
EVENTS = []
