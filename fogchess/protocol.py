"""Inbound WebSocket messages."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError

from fogchess.errors import MalformedRequest


class JoinMessage(BaseModel):
    type: Literal["join"]
    player_id: str = Field(alias="playerId")


class MoveMessage(BaseModel):
    type: Literal["move"]
    row: StrictInt
    col: StrictInt


class ResetMessage(BaseModel):
    type: Literal["reset"]


Message = Annotated[
    Union[JoinMessage, MoveMessage, ResetMessage], Field(discriminator="type")
]
_MESSAGE_ADAPTER = TypeAdapter(Message)


def parse_message(text: str | bytes) -> JoinMessage | MoveMessage | ResetMessage:
    try:
        return _MESSAGE_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise MalformedRequest(str(exc)) from exc
