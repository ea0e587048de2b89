from __future__ import annotations
from typing import Protocol


class CoverImagePort(Protocol):
    def process_and_save(self, data: bytes, series_id: int) -> str: ...
    def delete(self, image_path: str) -> None: ...
