from pydantic import BaseModel, Field


class WatchFlightRequest(BaseModel):
    """フライト監視開始リクエスト"""

    user_id: str = Field(..., min_length=1)
