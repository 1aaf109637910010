from abc import abstractmethod
from datetime import date

from aeroflow.inventory.domain.entity import Flight, Seat
from aeroflow.inventory.domain.enum import FlightStatus
from aeroflow.inventory.domain.value_object import FlightId, InventoryChange, SeatId
from aeroflow.shared.domain import Repository


class InventoryRepository(Repository[Flight, FlightId]):
    """フライト・座席在庫リポジトリのインターフェース"""

    @abstractmethod
    def save(self, flight: Flight) -> None:
        """フライトを新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def list_flights(self) -> list[Flight]:
        raise NotImplementedError

    @abstractmethod
    def find_by_route(
        self, origin: str, destination: str, departure_date: date
    ) -> list[Flight]:
        """路線と出発日で検索する"""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, flight: Flight, expected_status: FlightStatus) -> None:
        """運航ステータスを更新する（期待ステータスと異なれば OptimisticLockException）"""
        raise NotImplementedError

    @abstractmethod
    def save_seats(self, seats: list[Seat]) -> None:
        """座席を一括作成する"""
        raise NotImplementedError

    @abstractmethod
    def find_seats(self, flight_id: FlightId, seat_ids: list[SeatId]) -> list[Seat]:
        """指定IDの座席を取得する（存在しないIDは結果に含まれない）"""
        raise NotImplementedError

    @abstractmethod
    def list_seats(self, flight_id: FlightId) -> list[Seat]:
        raise NotImplementedError

    @abstractmethod
    def apply(self, change: InventoryChange) -> None:
        """座席状態と空席カウンタの変更をアトミックに書き込む

        いずれかの座席のバージョンが期待値と異なれば SeatUnavailableException、
        カウンタが範囲外になれば CapacityExceededException。どちらの場合も何も書き込まない。
        """
        raise NotImplementedError
