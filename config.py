import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
STATIC_DIR = os.path.join(BASE_DIR, "static")
LOG_FILE = os.path.join(BASE_DIR, "launch.log")

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "0.0.0.0")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))

# 세션 설정
SESSION_TTL = int(os.getenv("SESSION_TTL", "3600"))  # 1시간
SESSION_CLEANUP_INTERVAL = int(os.getenv("SESSION_CLEANUP_INTERVAL", "300"))  # 만료 세션 정리 주기 (초)
SESSION_COOKIE = "profreport_session"

# 설문 제출 API 설정
PUBLIC_API_URL = os.getenv("PUBLIC_API_URL", "https://example.com/api/v1")
DIRECT_SUBMIT_CODE = os.getenv("DIRECT_SUBMIT_CODE", "metamorfoza")
SUBMIT_TIMEOUT = float(os.getenv("SUBMIT_TIMEOUT", "15"))   # 직접 제출 요청 타임아웃 (초)
MOCK_SUBMIT_DELAY = float(os.getenv("MOCK_SUBMIT_DELAY", "1.0"))  # 목업 전송 지연 (초)

# 사이트 설정
SITE_NAME = "ProfReport"
TESTS_INDEX_URL = "/tests"  # 테스트 중단 시 이동할 목록 페이지
