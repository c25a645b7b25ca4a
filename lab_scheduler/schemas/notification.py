"""Schemas Notificação push / Push notification schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionKeys(BaseModel):
    p256dh: str
    auth: str


class SubscriptionCreate(BaseModel):
    """Formato do PushSubscription.toJSON() do navegador / Browser PushSubscription.toJSON() shape."""
    endpoint: str = Field(..., min_length=1)
    keys: SubscriptionKeys


class SubscriptionDelete(BaseModel):
    endpoint: str = Field(..., min_length=1)


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    endpoint: str


class SendTestRequest(BaseModel):
    user_id: int


class SendAllRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=500)
