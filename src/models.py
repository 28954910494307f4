"""Shared Pydantic data models for the Telegram integration node."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class Resource(str, Enum):
    CHAT = "chat"
    CALLBACK = "callback"
    MESSAGE = "message"


class ChatOperation(str, Enum):
    GET = "get"
    LEAVE = "leave"
    MEMBER = "member"
    SET_DESCRIPTION = "setDescription"
    SET_TITLE = "setTitle"


class CallbackOperation(str, Enum):
    ANSWER_QUERY = "answerQuery"


class MessageOperation(str, Enum):
    EDIT_MESSAGE_TEXT = "editMessageText"
    SEND_AUDIO = "sendAudio"
    SEND_CHAT_ACTION = "sendChatAction"
    SEND_DOCUMENT = "sendDocument"
    SEND_MESSAGE = "sendMessage"
    SEND_PHOTO = "sendPhoto"
    SEND_STICKER = "sendSticker"
    SEND_VIDEO = "sendVideo"


# --- Request Models ---


class ApiRequest(BaseModel):
    """One outbound Bot API call: endpoint name plus JSON body and query string."""

    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    endpoint: str = Field(min_length=1)
    body: dict[str, Any] = Field(default_factory=dict)
    qs: dict[str, Any] = Field(default_factory=dict)


# --- Execution Models ---


class ExecutionRecord(BaseModel):
    """Input record handed over by the host, with its resolved parameter values.

    ``data`` is the host's item payload (its ``json`` key). It is accepted so
    host items validate as-is, but the node never reads it: parameters carry
    everything a call needs and the output item holds only the API response.
    """

    model_config = ConfigDict(populate_by_name=True)

    parameters: dict[str, Any] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict, alias="json")


class NodeItem(BaseModel):
    """Host output envelope wrapping one response object."""

    model_config = ConfigDict(populate_by_name=True)

    data: dict[str, Any] = Field(alias="json")
