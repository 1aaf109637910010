from collections.abc import Callable

from aws_lambda_powertools import Logger

from aeroflow.booking.domain.entity import Booking
from aeroflow.booking.domain.enum import BookingStatus
from aeroflow.booking.domain.factory import BookingFactory
from aeroflow.booking.domain.repository import BookingRepository
from aeroflow.booking.domain.value_object import BookingReference
from aeroflow.inventory.applications.flight_inventory import FlightInventoryService
from aeroflow.payment.domain.factory import PaymentFactory
from aeroflow.payment.domain.repository import PaymentRepository
from aeroflow.payment.domain.value_object import PaymentResult
from aeroflow.reservation.applications.reservation_session import (
    ReservationSessionService,
)
from aeroflow.reservation.domain.value_object import SessionId
from aeroflow.shared.domain import BookingId, IsoDateTime, UserId
from aeroflow.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    InvalidTransitionException,
    OptimisticLockException,
    PaymentFailedException,
    ReferenceCollisionException,
    ResourceNotFoundException,
)

logger = Logger(child=True)

MAX_REFERENCE_ATTEMPTS = 3


class BookingLedgerService:
    """予約台帳ユースケース

    予約セッションの確定（commit）と予約のキャンセル（cancel）を扱う。
    どちらも予約・決済・座席・空席カウンタを 1 トランザクションで書き込む。
    """

    def __init__(
        self,
        repository: BookingRepository,
        payment_repository: PaymentRepository,
        sessions: ReservationSessionService,
        inventory: FlightInventoryService,
        factory: BookingFactory,
        payment_factory: PaymentFactory,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._payment_repository = payment_repository
        self._sessions = sessions
        self._inventory = inventory
        self._factory = factory
        self._payment_factory = payment_factory
        self._clock = clock

    def get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def get_by_reference(self, reference: BookingReference) -> Booking:
        booking = self._repository.find_by_reference(reference)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {reference}")
        return booking

    def list_for_user(self, user_id: UserId) -> list[Booking]:
        return self._repository.list_by_user(user_id)

    def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        """管理画面用の予約一覧（新しい順）"""
        if status is None:
            bookings = self._repository.list_all()
        else:
            bookings = self._repository.list_by_status(status)
        return sorted(bookings, key=lambda b: b.booked_at.value, reverse=True)

    def find_for_session(self, session_id: SessionId) -> Booking | None:
        """セッションが確定済みならその予約を返す"""
        return self._repository.find_by_id(BookingId.from_session_id(str(session_id)))

    def commit(self, session_id: SessionId, payment_result: PaymentResult) -> Booking:
        """予約セッションを確定し、予約を返す

        確定済みのセッションに対する再実行は既存の予約を返す。
        決済が成功していなければ PaymentFailedException（何も書き込まず、
        セッションはそのまま再試行できる）。
        """
        booking_id = BookingId.from_session_id(str(session_id))
        existing = self._repository.find_by_id(booking_id)
        if existing is not None:
            logger.info("Session already committed", extra={"booking_id": str(booking_id)})
            return existing

        session = self._sessions.get_active(session_id)
        session.ensure_ready_for_commit()
        if not payment_result.is_success:
            raise PaymentFailedException(
                payment_result.failure_reason or "Payment was declined"
            )
        if payment_result.amount != session.total_price:
            raise BusinessRuleViolationException(
                f"Payment amount {payment_result.amount} does not match "
                f"session total {session.total_price}"
            )

        flight = self._inventory.get_flight(session.flight_id)
        payment = self._payment_factory.create(booking_id, payment_result)

        for attempt in range(1, MAX_REFERENCE_ATTEMPTS + 1):
            now = self._clock()
            booking = self._factory.create(
                booking_id,
                session,
                flight,
                BookingReference.generate(now.date()),
                now,
            )
            booking.confirm()
            seat_change = self._inventory.prepare_confirmation(
                session.flight_id,
                session.seat_class,
                list(session.seat_ids),
                token=session.hold_token,
                booking_ref=str(booking.reference),
            )
            try:
                self._repository.commit(
                    booking, payment, seat_change, session.id, session.version
                )
            except ReferenceCollisionException:
                logger.warning(
                    "Booking reference collision, regenerating",
                    extra={"attempt": attempt, "reference": str(booking.reference)},
                )
                continue
            except DuplicateResourceException:
                existing = self._repository.find_by_id(booking_id)
                if existing is None:
                    raise
                return existing

            logger.info(
                "Booking committed",
                extra={
                    "booking_id": str(booking.id),
                    "reference": str(booking.reference),
                    "seats": len(booking.seat_ids),
                },
            )
            return booking

        raise DuplicateResourceException("Could not allocate a unique booking reference")

    def cancel(self, booking_id: BookingId) -> Booking:
        """予約をキャンセルし、座席を解放して払い戻す

        キャンセル済みの予約に対しては何もせずそのまま返す。
        出発時刻を過ぎた確定予約はその場で完了にし、InvalidTransitionException。
        """
        booking = self.get(booking_id)
        if booking.status == BookingStatus.CONFIRMED and booking.has_departed(
            self._clock()
        ):
            booking.complete()
            try:
                self._repository.update_status(
                    booking, expected_status=BookingStatus.CONFIRMED
                )
            except OptimisticLockException:
                booking = self.get(booking_id)
                if booking.status == BookingStatus.CANCELLED:
                    return booking
            raise InvalidTransitionException(f"Booking has already departed: {booking_id}")

        expected_status = booking.status
        if not booking.cancel():
            return booking

        payment = self._payment_repository.find_by_booking_id(booking_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found for booking: {booking_id}")
        payment.refund()

        seat_change = self._inventory.prepare_release(
            booking.flight_id,
            booking.seat_class,
            list(booking.seat_ids),
            reference=str(booking.reference),
        )
        try:
            self._repository.cancel(booking, payment, seat_change, expected_status)
        except OptimisticLockException:
            current = self.get(booking_id)
            if current.status == BookingStatus.CANCELLED:
                return current
            raise

        logger.info(
            "Booking cancelled",
            extra={"booking_id": str(booking_id), "seats": len(seat_change.seat_writes)},
        )
        return booking
