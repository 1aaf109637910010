from aeroflow.inventory.domain.enum import SeatClass, SeatType
from aeroflow.inventory.domain.value_object.flight_id import FlightId
from aeroflow.inventory.domain.value_object.seat_id import SeatId
from aeroflow.shared.domain import Entity
from aeroflow.shared.domain.exception import SeatUnavailableException


class Seat(Entity[SeatId]):
    """座席エンティティ

    booking_ref は仮押さえ中はセッションのトークン、確定後は予約ID。
    None のときのみ空席。状態を変えるたびに version を進める（楽観ロック用）。
    """

    def __init__(
        self,
        id: SeatId,
        flight_id: FlightId,
        seat_number: str,
        seat_class: SeatClass,
        seat_type: SeatType,
        booking_ref: str | None = None,
        confirmed: bool = False,
        version: int = 0,
    ) -> None:
        super().__init__(id)
        self._flight_id = flight_id
        self._seat_number = seat_number
        self._seat_class = seat_class
        self._seat_type = seat_type
        self._booking_ref = booking_ref
        self._confirmed = confirmed
        self._version = version

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_number(self) -> str:
        return self._seat_number

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def seat_type(self) -> SeatType:
        return self._seat_type

    @property
    def booking_ref(self) -> str | None:
        return self._booking_ref

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_available(self) -> bool:
        return self._booking_ref is None

    def is_held_by(self, reference: str) -> bool:
        return self._booking_ref == reference

    def hold(self, token: str) -> None:
        """座席を仮押さえする"""
        if not self.is_available:
            raise SeatUnavailableException(
                f"Seat {self._seat_number} is already taken",
                seat_ids=(str(self.id),),
            )
        self._booking_ref = token
        self._confirmed = False
        self._version += 1

    def confirm(self, token: str, booking_ref: str) -> None:
        """仮押さえを確定予約に切り替える"""
        if self._confirmed or self._booking_ref != token:
            raise SeatUnavailableException(
                f"Hold on seat {self._seat_number} is no longer valid",
                seat_ids=(str(self.id),),
            )
        self._booking_ref = booking_ref
        self._confirmed = True
        self._version += 1

    def release(self, reference: str) -> bool:
        """reference が押さえている場合のみ解放する"""
        if self._booking_ref != reference:
            return False
        self._booking_ref = None
        self._confirmed = False
        self._version += 1
        return True
