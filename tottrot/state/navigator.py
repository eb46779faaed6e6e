"""화면 전환 유한 상태 기계."""

from __future__ import annotations

from tottrot.core.logger import get_logger
from tottrot.schemas.enums import Screen

logger = get_logger(__name__)

_PICKER_SCREENS = frozenset({Screen.LOCATION, Screen.DURATION, Screen.INTERESTS})


class NavigationError(ValueError):
    """현재 화면에서 허용되지 않는 전환을 요청한 경우."""


class ViewNavigator:
    """이름 있는 화면 사이의 전환을 관리한다.

    - main → location / duration / interests: 사용자 이동
    - location / duration / interests → main: 선택 확정 후 복귀
    - main / results → results: 검색 성공 시에만 (선택 화면에서는 이동하지 않음)
    - results → main: 새 검색
    """

    def __init__(self, screen: Screen = Screen.MAIN) -> None:
        self._screen = screen

    @property
    def screen(self) -> Screen:
        return self._screen

    def open(self, screen: Screen) -> None:
        """메인 화면에서 선택 화면으로 이동한다."""
        if screen not in _PICKER_SCREENS:
            raise NavigationError(f"'{screen}' cannot be opened directly")
        self._require(Screen.MAIN, action=f"open {screen}")
        self._move(screen)

    def return_to_main(self, from_screen: Screen) -> None:
        """선택 화면에서 값을 확정하고 메인으로 돌아간다."""
        self._require(from_screen, action="return to main")
        self._move(Screen.MAIN)

    def show_results(self) -> bool:
        """검색 성공 시 결과 화면으로 이동한다. 선택 화면을 보고 있으면 머무르고 False를 반환한다."""
        if self._screen in _PICKER_SCREENS:
            logger.info("Search succeeded while on %s, staying on picker", self._screen)
            return False
        self._move(Screen.RESULTS)
        return True

    def start_new_search(self) -> None:
        self._require(Screen.RESULTS, action="start a new search")
        self._move(Screen.MAIN)

    def _require(self, expected: Screen, *, action: str) -> None:
        if self._screen != expected:
            raise NavigationError(f"cannot {action} from '{self._screen}' (expected '{expected}')")

    def _move(self, screen: Screen) -> None:
        if screen != self._screen:
            logger.info("Screen transition: %s -> %s", self._screen, screen)
        self._screen = screen
