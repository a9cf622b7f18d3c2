"""
api/app.py — FastAPI 앱 팩토리

구성:
  - CORS
  - 쿠키 세션 미들웨어 (세션마다 테스트 마법사 1개)
  - API 라우터 + static 프런트엔드
  - 만료 세션 정리 스레드
"""

import logging
import os
import threading
import time
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from config import (
    SESSION_CLEANUP_INTERVAL,
    SESSION_COOKIE,
    SESSION_TTL,
    SITE_NAME,
    STATIC_DIR,
)
from api.routes import router
import api.session as session
from profreport.services.submission_service import SubmissionGateway

logger = logging.getLogger(__name__)

_cleanup_started = threading.Event()


def _resolve_session_id(request: Request) -> str:
    """쿠키의 세션 ID가 살아 있으면 그대로, 아니면 새 세션 발급."""
    sid = request.cookies.get(SESSION_COOKIE)
    if sid and session.is_alive(sid):
        return sid
    return session.create_session()


def _start_cleanup_thread(interval: int) -> None:
    """프로세스당 한 번만 정리 스레드를 띄운다 (세션 저장소가 모듈 전역이므로)."""
    if _cleanup_started.is_set():
        return
    _cleanup_started.set()

    def _loop():
        while True:
            time.sleep(interval)
            removed = session.cleanup_expired()
            if removed:
                logger.info(f"만료 세션 {removed}개 정리 (진행 중이던 테스트 폐기)")

    threading.Thread(target=_loop, name="session-cleanup", daemon=True).start()


def create_app(gateway: Optional[SubmissionGateway] = None) -> FastAPI:
    """
    Args:
        gateway: 설문 제출 게이트웨이. None이면 config 기본값으로 생성.
                 테스트에서는 목업 전송 함수/httpx transport를 주입한 인스턴스를 넘긴다.
    """
    app = FastAPI(title=SITE_NAME, docs_url=None, redoc_url=None)
    app.state.gateway = gateway or SubmissionGateway()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        request.state.session_id = _resolve_session_id(request)
        response: Response = await call_next(request)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=request.state.session_id,
            httponly=True,
            samesite="lax",
            max_age=SESSION_TTL,
        )
        return response

    app.include_router(router)

    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/")
    async def serve_index():
        index_path = os.path.join(STATIC_DIR, "index.html")
        if os.path.exists(index_path):
            return FileResponse(index_path)
        # 프런트엔드 빌드가 없으면 API 안내만 반환
        return {"name": SITE_NAME, "tests": "/api/tests", "faq": "/api/faq"}

    _start_cleanup_thread(SESSION_CLEANUP_INTERVAL)
    return app
