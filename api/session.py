"""
api/session.py — 멀티유저 인메모리 세션 (쿠키 기반)

브라우저마다 UUID 세션 ID를 발급하고, 세션마다 진행 중인 테스트 마법사
(WizardController) 하나를 보관한다. 새로고침 간 영속화는 하지 않으며
TTL(SESSION_TTL) 동안 접근이 없으면 마법사 상태와 함께 폐기된다.
"""

import threading
import time
import uuid
from typing import Optional

from config import SESSION_TTL
from profreport.services.wizard_service import WizardController

_lock = threading.Lock()
_wizards: dict[str, Optional[WizardController]] = {}
_last_seen: dict[str, float] = {}


def _expired(sid: str, now: float) -> bool:
    return now - _last_seen[sid] > SESSION_TTL


def _drop(sid: str) -> None:
    _wizards.pop(sid, None)
    _last_seen.pop(sid, None)


def create_session() -> str:
    """빈 세션(마법사 없음)을 만들고 세션 ID를 반환."""
    sid = uuid.uuid4().hex
    with _lock:
        _wizards[sid] = None
        _last_seen[sid] = time.time()
    return sid


def is_alive(sid: str) -> bool:
    """유효한 세션이면 True. 만료된 세션은 이 시점에 제거된다."""
    now = time.time()
    with _lock:
        if sid not in _last_seen:
            return False
        if _expired(sid, now):
            _drop(sid)
            return False
        _last_seen[sid] = now  # 접근 시 갱신
        return True


def get_wizard(sid: str) -> Optional[WizardController]:
    with _lock:
        return _wizards.get(sid)


def set_wizard(sid: str, wizard: WizardController) -> None:
    """테스트 화면 마운트: 기존 마법사가 있으면 교체된다."""
    with _lock:
        if sid in _last_seen:
            _wizards[sid] = wizard
            _last_seen[sid] = time.time()


def discard_wizard(sid: str) -> None:
    """테스트 화면 해제: 마법사 상태 폐기 (세션은 유지)."""
    with _lock:
        if sid in _wizards:
            _wizards[sid] = None


def cleanup_expired() -> int:
    """만료된 세션을 정리. 제거된 수 반환."""
    now = time.time()
    with _lock:
        expired = [sid for sid in _last_seen if _expired(sid, now)]
        for sid in expired:
            _drop(sid)
    return len(expired)
