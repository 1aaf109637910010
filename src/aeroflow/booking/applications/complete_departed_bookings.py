from aws_lambda_powertools import Logger

from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.domain.repository import BookingRepository
from aeroflow.shared.domain import IsoDateTime
from aeroflow.shared.domain.exception import OptimisticLockException

logger = Logger(child=True)


class CompleteDepartedBookingsService:
    """出発済みの確定予約を完了にする（EventBridge スケジュールから起動）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def complete(self, now: IsoDateTime) -> list[Booking]:
        completed = []
        for booking in self._repository.list_by_status(BookingStatus.CONFIRMED):
            if not booking.has_departed(now):
                continue
            expected_status = booking.status
            booking.complete()
            try:
                self._repository.update_status(booking, expected_status=expected_status)
            except OptimisticLockException:
                # キャンセルと競合した予約はそのまま
                logger.warning(
                    "Booking changed before completion",
                    extra={"booking_id": str(booking.id)},
                )
                continue
            completed.append(booking)

        logger.info("Departed bookings completed", extra={"count": len(completed)})
        return completed
