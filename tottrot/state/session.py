"""최상위 세션 상태 기계.

화면, Selection, 검색 상태, 즐겨찾기를 하나의 값으로 묶고
이름 있는 이벤트로만 전환한다.
"""

from __future__ import annotations

from tottrot.core.config import get_settings
from tottrot.core.logger import get_logger
from tottrot.core.timeout_policy import get_timeout_policy
from tottrot.schemas.enums import ALL_TAGS, DEFAULT_LOCATIONS, Screen, SearchStatus
from tottrot.schemas.selection import Selection, find_duration_bucket
from tottrot.schemas.session import ActivityView, SessionSnapshot
from tottrot.schemas.weather import WeatherSnapshot
from tottrot.services import location_service, weather_service
from tottrot.services.catalog_service import CatalogServiceProtocol
from tottrot.services.favorites_store import FavoritesStore
from tottrot.services.search_orchestrator import SearchOrchestrator, SearchOutcome
from tottrot.state.navigator import ViewNavigator
from tottrot.state.selection_state import SelectionState

logger = get_logger(__name__)


class InvalidSelectionError(ValueError):
    """닫힌 선택지 밖의 값을 선택하려 한 경우."""


class AppSession:
    """사용자 세션 하나의 상태 기계."""

    def __init__(
        self,
        catalog: CatalogServiceProtocol,
        favorites: FavoritesStore,
        *,
        initial_selection: Selection | None = None,
        locations: tuple[str, ...] = DEFAULT_LOCATIONS,
        search_timeout_seconds: float = 15,
    ) -> None:
        self._catalog = catalog
        self._favorites = favorites
        self._locations = tuple(locations)
        self._selection_state = SelectionState(initial_selection)
        self._navigator = ViewNavigator()
        self._orchestrator = SearchOrchestrator(catalog, timeout_seconds=search_timeout_seconds)
        self._weather: WeatherSnapshot | None = None

    @classmethod
    def from_settings(cls, catalog: CatalogServiceProtocol, favorites: FavoritesStore) -> AppSession:
        """설정값으로 세션을 만든다. 구간 목록에 없는 기본 소요 시간은 기본 구간으로 대체한다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        duration = settings.DEFAULT_DURATION
        if find_duration_bucket(duration) is None:
            fallback = Selection().duration
            logger.warning("DEFAULT_DURATION %r is not a known duration bucket, using %s", duration, fallback)
            duration = fallback
        return cls(
            catalog,
            favorites,
            initial_selection=Selection(location=settings.DEFAULT_LOCATION, duration=duration),
            search_timeout_seconds=timeout_policy.search_timeout_seconds,
        )

    @property
    def screen(self) -> Screen:
        return self._navigator.screen

    @property
    def selection(self) -> Selection:
        return self._selection_state.snapshot()

    @property
    def locations(self) -> tuple[str, ...]:
        return self._locations

    @property
    def search_status(self) -> SearchStatus:
        return self._orchestrator.status

    @property
    def weather(self) -> WeatherSnapshot | None:
        return self._weather

    def open_screen(self, screen: Screen) -> None:
        self._navigator.open(screen)

    async def choose_location(self, city: str) -> None:
        """도시를 확정하고 메인으로 돌아간 뒤 날씨를 갱신한다."""
        if city not in self._locations:
            raise InvalidSelectionError(f"unknown location: {city}")
        self._navigator.return_to_main(Screen.LOCATION)
        changed = city != self._selection_state.selection.location
        self._selection_state.set_location(city)
        if changed:
            await self.refresh_weather()

    def choose_duration(self, bucket: str) -> None:
        if find_duration_bucket(bucket) is None:
            raise InvalidSelectionError(f"unknown duration: {bucket}")
        self._navigator.return_to_main(Screen.DURATION)
        self._selection_state.set_duration(bucket)

    def close_interests(self) -> None:
        self._navigator.return_to_main(Screen.INTERESTS)

    def toggle_filter(self, tag: str) -> bool:
        if tag not in ALL_TAGS:
            raise InvalidSelectionError(f"unknown filter tag: {tag}")
        return self._selection_state.toggle_filter(tag)

    def set_mood_query(self, text: str) -> None:
        self._selection_state.set_mood_query(text)

    def clear_mood_query(self) -> None:
        self._selection_state.clear_mood_query()

    async def search(self) -> SearchOutcome:
        """현재 Selection으로 검색하고, 최신 검색이 성공하면 결과 화면으로 이동한다."""
        outcome = await self._orchestrator.search(self._selection_state.snapshot())
        if outcome.is_current and outcome.status == SearchStatus.SUCCESS:
            self._navigator.show_results()
        return outcome

    def new_search(self) -> None:
        """결과 화면에서 메인으로 돌아간다. 무드 검색어만 지우고 나머지 선택은 유지한다."""
        self._navigator.start_new_search()
        self._selection_state.clear_mood_query()
        self._orchestrator.reset()

    def toggle_favorite(self, activity_id: str) -> bool:
        return self._favorites.toggle(activity_id)

    def is_favorite(self, activity_id: str) -> bool:
        return self._favorites.is_favorite(activity_id)

    async def refresh_weather(self) -> WeatherSnapshot | None:
        location = self._selection_state.selection.location
        snapshot = await weather_service.load_weather(self._catalog, location)
        if self._selection_state.selection.location != location:
            return self._weather
        self._weather = snapshot
        return snapshot

    async def load_locations(self) -> tuple[str, ...]:
        """카탈로그에서 도시 목록을 불러온다. 현재 도시가 목록에 없으면 첫 도시로 바꾼다."""
        self._locations = await location_service.load_locations(self._catalog)
        current = self._selection_state.selection.location
        if current not in self._locations:
            logger.info("Current location %s not offered by catalog, switching to %s", current, self._locations[0])
            self._selection_state.set_location(self._locations[0])
        return self._locations

    def snapshot(self) -> SessionSnapshot:
        selection = self._selection_state.snapshot()
        results = [
            ActivityView(**activity.model_dump(), is_favorite=self._favorites.is_favorite(activity.id))
            for activity in self._orchestrator.activities
        ]
        return SessionSnapshot(
            screen=self._navigator.screen,
            selection=selection,
            search_status=self._orchestrator.status,
            error_message=self._orchestrator.error_message,
            results=results,
            filters_enabled=not selection.has_mood_query,
            favorites=sorted(self._favorites.all()),
            weather=self._weather,
            locations=list(self._locations),
        )
