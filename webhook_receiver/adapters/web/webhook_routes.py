"""Incoming webhook routes — one URL per receiver and configuration id."""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from webhook_receiver.adapters.log import LoggingEventLog
from webhook_receiver.adapters.web.payloads import SALESFORCE_ACK, build_webhook_request
from webhook_receiver.config import CONFIG
from webhook_receiver.domain.errors import UnknownReceiverError, WebhookPayloadError
from webhook_receiver.domain.models import SlackReply
from webhook_receiver.domain.receivers import WebhookReceivers

logger = logging.getLogger(__name__)

DEFAULT_RECEIVER_ID = "default"

webhook_router = APIRouter(prefix="/api/webhooks/incoming", tags=["Webhooks"])

receivers = WebhookReceivers(
    LoggingEventLog(),
    strict_parameters=CONFIG.slack.strict_parameters,
    slack_color=CONFIG.slack.attachment_color,
)


class SlackFieldModel(BaseModel):
    title: str
    value: str
    short: bool = True


class SlackAttachmentModel(BaseModel):
    title: str
    text: str = ""
    fallback: str = ""
    color: Optional[str] = None
    pretext: Optional[str] = None
    fields: List[SlackFieldModel] = []


class SlackReplyModel(BaseModel):
    text: str
    response_type: Optional[str] = None
    attachments: List[SlackAttachmentModel] = []

    @classmethod
    def from_reply(cls, reply: SlackReply) -> "SlackReplyModel":
        return cls(
            text=reply.text,
            response_type=reply.response_type,
            attachments=[
                SlackAttachmentModel(
                    title=a.title,
                    text=a.text,
                    fallback=a.fallback,
                    color=a.color,
                    pretext=a.pretext,
                    fields=[
                        SlackFieldModel(title=f.title, value=f.value, short=f.short)
                        for f in a.fields
                    ],
                )
                for a in reply.attachments
            ],
        )


class WebhookAck(BaseModel):
    status: str = "ok"
    receiver: str
    event: str = ""


def _ensure_enabled(receiver: str) -> str:
    receiver = receiver.lower()
    if receiver not in receivers.names or not CONFIG.is_enabled(receiver):
        raise HTTPException(status_code=404, detail=f"Receiver '{receiver}' is not configured")
    return receiver


async def _receive(receiver: str, receiver_id: str, request: Request):
    receiver = _ensure_enabled(receiver)
    raw = await request.body()
    try:
        webhook = build_webhook_request(receiver, receiver_id, request.headers, raw)
        reply = receivers.handle(webhook)
    except WebhookPayloadError as e:
        logger.warning("Rejected %s webhook '%s': %s", receiver, receiver_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except UnknownReceiverError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if reply is not None:
        return SlackReplyModel.from_reply(reply).model_dump(exclude_none=True)
    if receiver == "salesforce":
        return Response(content=SALESFORCE_ACK, media_type="text/xml")
    return WebhookAck(receiver=receiver, event=webhook.event).model_dump()


def _verify(receiver: str, request: Request):
    receiver = _ensure_enabled(receiver)
    if receiver == "dropbox":
        challenge = request.query_params.get("challenge")
        if not challenge:
            raise HTTPException(status_code=400, detail="Missing 'challenge' query parameter")
        return PlainTextResponse(
            challenge, headers={"X-Content-Type-Options": "nosniff"},
        )
    if receiver == "mailchimp":
        return Response(status_code=200)
    raise HTTPException(status_code=405, detail=f"Receiver '{receiver}' does not accept GET")


@webhook_router.post("/{receiver}")
async def receive_default(receiver: str, request: Request):
    return await _receive(receiver, DEFAULT_RECEIVER_ID, request)


@webhook_router.post("/{receiver}/{receiver_id}")
async def receive(receiver: str, receiver_id: str, request: Request):
    return await _receive(receiver, receiver_id, request)


@webhook_router.get("/{receiver}")
async def verify_default(receiver: str, request: Request):
    return _verify(receiver, request)


@webhook_router.get("/{receiver}/{receiver_id}")
async def verify(receiver: str, receiver_id: str, request: Request):
    return _verify(receiver, request)
