from pydantic import BaseModel, Field


class CardRequest(BaseModel):
    """カード情報（検証の詳細は CardDetails で行う）"""

    number: str = Field(..., pattern=r"^[\d ]{16,19}$", examples=["4242 4242 4242 4242"])
    holder_name: str = Field(..., min_length=3)
    expiry: str = Field(..., pattern=r"^\d{2}/\d{2}$", examples=["12/27"])
    cvv: str = Field(..., pattern=r"^\d{3}$")


class CommitBookingRequest(BaseModel):
    """予約確定（決済）リクエスト

    idempotency_key は決済の試行ごとにクライアントが払い出す。
    同じキーでの再送は同じ結果を返し、二重決済しない。
    """

    session_id: str = ""
    idempotency_key: str = Field(..., min_length=8, max_length=128)
    card: CardRequest
