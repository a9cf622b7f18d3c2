"""
services/faq_service.py

FAQ 아코디언 상태. 한 번에 최대 한 개의 항목만 펼쳐진다.
"""

from typing import List, Optional

from pydantic import BaseModel


class FaqItem(BaseModel):
    question: str
    answer: str


class FaqAccordion:
    def __init__(self, items: List[FaqItem]) -> None:
        self.items = list(items)
        self.open_index: Optional[int] = None

    def toggle(self, index: int) -> Optional[int]:
        """항목을 펼치거나, 이미 펼쳐져 있으면 접는다. 변경 후 open_index 반환."""
        if not 0 <= index < len(self.items):
            raise IndexError(f"FAQ 항목 인덱스 범위 초과: {index}")
        self.open_index = None if self.open_index == index else index
        return self.open_index

    def is_open(self, index: int) -> bool:
        return self.open_index == index
