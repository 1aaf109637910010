from abc import abstractmethod

from aeroflow.inventory.domain.value_object import FlightId
from aeroflow.shared.domain import Repository, UserId
from aeroflow.watch.domain.entity import FlightWatch
from aeroflow.watch.domain.value_object import WatchId


class FlightWatchRepository(Repository[FlightWatch, WatchId]):
    """フライトウォッチリポジトリのインターフェース"""

    @abstractmethod
    def save(self, watch: FlightWatch) -> None:
        """ウォッチを保存する（既存なら上書き）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, watch_id: WatchId) -> FlightWatch | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, watch_id: WatchId) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: UserId) -> list[FlightWatch]:
        raise NotImplementedError

    @abstractmethod
    def list_by_flight(self, flight_id: FlightId) -> list[FlightWatch]:
        raise NotImplementedError
