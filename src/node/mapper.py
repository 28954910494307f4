"""Parameter-to-body mapper: turns a record's parameters into one Bot API call.

Each (resource, operation) pair is registered once with the endpoint it
calls and a builder that copies parameters into fixed body keys. Operations
registered with ``additional_fields`` merge the "Additional Fields" bag into
the body; explicitly mapped keys, ``reply_markup`` included, win on collision.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.models import (
    ApiRequest,
    CallbackOperation,
    ChatOperation,
    MessageOperation,
    Resource,
)
from src.node.markup import build_reply_markup
from src.node.parameters import NodeParameters

BodyBuilder = Callable[[NodeParameters], dict[str, Any]]


class UnknownResourceError(Exception):
    def __init__(self, resource: object) -> None:
        self.resource = resource
        super().__init__(f'The resource "{resource}" is not known!')


class UnknownOperationError(Exception):
    def __init__(self, resource: str, operation: object) -> None:
        self.resource = resource
        self.operation = operation
        super().__init__(
            f'The operation "{operation}" is not known for resource "{resource}"!',
        )


@dataclass(frozen=True)
class OperationMapping:
    resource: Resource
    operation: str
    endpoint: str
    build: BodyBuilder
    additional_fields: bool = False
    reply_markup: bool = False


_REGISTRY: dict[tuple[Resource, str], OperationMapping] = {}


def _maps(
    resource: Resource,
    operation: Enum,
    endpoint: str,
    *,
    additional_fields: bool = False,
    reply_markup: bool = False,
) -> Callable[[BodyBuilder], BodyBuilder]:
    def register(build: BodyBuilder) -> BodyBuilder:
        _REGISTRY[(resource, operation.value)] = OperationMapping(
            resource=resource,
            operation=operation.value,
            endpoint=endpoint,
            build=build,
            additional_fields=additional_fields,
            reply_markup=reply_markup,
        )
        return build
    return register


# --- callback ---


@_maps(Resource.CALLBACK, CallbackOperation.ANSWER_QUERY, "answerCallbackQuery",
       additional_fields=True)
def _answer_query(params: NodeParameters) -> dict[str, Any]:
    return {"callback_query_id": params.get("queryId")}


# --- chat ---


@_maps(Resource.CHAT, ChatOperation.GET, "getChat")
@_maps(Resource.CHAT, ChatOperation.LEAVE, "leaveChat")
def _chat(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId")}


@_maps(Resource.CHAT, ChatOperation.MEMBER, "getChatMember")
def _chat_member(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId"), "user_id": params.get("userId")}


@_maps(Resource.CHAT, ChatOperation.SET_DESCRIPTION, "setChatDescription")
def _chat_description(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId"), "description": params.get("description")}


@_maps(Resource.CHAT, ChatOperation.SET_TITLE, "setChatTitle")
def _chat_title(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId"), "title": params.get("title")}


# --- message ---


@_maps(Resource.MESSAGE, MessageOperation.EDIT_MESSAGE_TEXT, "editMessageText",
       additional_fields=True, reply_markup=True)
def _edit_message_text(params: NodeParameters) -> dict[str, Any]:
    body: dict[str, Any]
    if params.get("messageType") == "inlineMessage":
        body = {"inline_message_id": params.get("inlineMessageId")}
    else:
        body = {"chat_id": params.get("chatId"), "message_id": params.get("messageId")}
    body["text"] = params.get("text")
    return body


@_maps(Resource.MESSAGE, MessageOperation.SEND_CHAT_ACTION, "sendChatAction")
def _send_chat_action(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId"), "action": params.get("action")}


@_maps(Resource.MESSAGE, MessageOperation.SEND_MESSAGE, "sendMessage",
       additional_fields=True, reply_markup=True)
def _send_message(params: NodeParameters) -> dict[str, Any]:
    return {"chat_id": params.get("chatId"), "text": params.get("text")}


def _send_file(field: str) -> BodyBuilder:
    def build(params: NodeParameters) -> dict[str, Any]:
        return {"chat_id": params.get("chatId"), field: params.get("file")}
    return build


for _operation, _field in (
    (MessageOperation.SEND_AUDIO, "audio"),
    (MessageOperation.SEND_DOCUMENT, "document"),
    (MessageOperation.SEND_PHOTO, "photo"),
    (MessageOperation.SEND_STICKER, "sticker"),
    (MessageOperation.SEND_VIDEO, "video"),
):
    _maps(Resource.MESSAGE, _operation, _operation.value,
          additional_fields=True, reply_markup=True)(_send_file(_field))


def registered_operations() -> list[OperationMapping]:
    return list(_REGISTRY.values())


def get_mapping(resource: object, operation: object) -> OperationMapping:
    try:
        parsed = Resource(resource)
    except ValueError:
        raise UnknownResourceError(resource) from None
    mapping = _REGISTRY.get((parsed, str(operation)))
    if mapping is None:
        raise UnknownOperationError(parsed.value, operation)
    return mapping


def _merge_additional_fields(body: dict[str, Any], additional: dict[str, Any] | None) -> None:
    for key, value in (additional or {}).items():
        body.setdefault(key, value)


def build_request(parameters: NodeParameters) -> ApiRequest:
    """Map resolved parameters onto the endpoint and body of one API call."""
    mapping = get_mapping(
        parameters.get("resource"),
        parameters.get("operation") if "operation" in parameters else None,
    )

    body = mapping.build(parameters)
    if mapping.reply_markup:
        markup = build_reply_markup(parameters)
        if markup is not None:
            body["reply_markup"] = markup
    if mapping.additional_fields:
        _merge_additional_fields(body, parameters.get("additionalFields"))

    return ApiRequest(endpoint=mapping.endpoint, body=body)
