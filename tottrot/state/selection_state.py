"""사용자 선택 상태 보관소."""

from __future__ import annotations

from tottrot.schemas.selection import Selection


class SelectionState:
    """현재 Selection을 보관하고 변경 연산을 제공한다.

    내부 값은 불변 `Selection`이며 변경할 때마다 교체된다.
    모든 연산은 선언된 도메인 안에서 실패하지 않는다.
    """

    def __init__(self, selection: Selection | None = None) -> None:
        self._selection = selection or Selection()

    @property
    def selection(self) -> Selection:
        return self._selection

    def snapshot(self) -> Selection:
        return self._selection

    def set_location(self, city: str) -> None:
        self._selection = self._selection.model_copy(update={"location": city})

    def set_duration(self, bucket: str) -> None:
        self._selection = self._selection.model_copy(update={"duration": bucket})

    def toggle_filter(self, tag: str) -> bool:
        """태그가 없으면 추가하고 있으면 제거한다. 토글 후 활성 여부를 반환한다."""
        filters = self._selection.active_filters
        if tag in filters:
            updated = tuple(existing for existing in filters if existing != tag)
        else:
            updated = (*filters, tag)
        self._selection = self._selection.model_copy(update={"active_filters": updated})
        return tag in updated

    def set_mood_query(self, text: str) -> None:
        self._selection = self._selection.model_copy(update={"mood_query": text})

    def clear_mood_query(self) -> None:
        self.set_mood_query("")
