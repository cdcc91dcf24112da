"""Receiver handlers — log what each third-party webhook delivered.

Pure Python, no framework dependencies. Handlers consume a WebhookRequest
whose payload the hosting layer has already parsed, and report through an
EventLogPort.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from webhook_receiver.domain.errors import UnknownReceiverError, WebhookPayloadError
from webhook_receiver.domain.models import SlackReply
from webhook_receiver.domain.slack import (
    CHANNEL_FIELD,
    COMMAND_FIELD,
    DEFAULT_COLOR,
    TEXT_FIELD,
    TRIGGER_FIELD,
    SlackCommandHandler,
    get_subtext,
)
from webhook_receiver.ports.inbound import WebhookRequest
from webhook_receiver.ports.outbound import EventLogPort

# Stripe sends this id when "Send test webhook" is used in the dashboard
STRIPE_TEST_EVENT_ID = "evt_00000000000000"

DYNAMICS_CRM_EVENT_FIELD = "MessageName"
MAILCHIMP_EVENT_FIELD = "type"

# Event ids, grouped per receiver
RECEIVED = 0
AZURE_ALERT_STATUS = 1
DYNAMICS_CRM_MESSAGE = 2
GITHUB_RECEIVED = 3
GITHUB_PUSH = 4
GITHUB_COMMIT = 5
GITHUB_FILE_ADDED = 6
GITHUB_FILE_MODIFIED = 7
GITHUB_FILE_REMOVED = 8
KUDU_RECEIVED = 9
KUDU_DEPLOYMENT = 10
MAILCHIMP_MESSAGE = 11
BITBUCKET_EVENT = 12
DROPBOX_CHANGE = 13
PUSHER_EVENTS = 14
SALESFORCE_MESSAGE = 15
SALESFORCE_NOTIFICATION = 16
SLACK_MESSAGE = 17
STRIPE_EVENT = 18
STRIPE_TEST_EVENT = 19


def _require(data: Any, key: str, receiver: str) -> Any:
    if not isinstance(data, Mapping) or data.get(key) in (None, ""):
        raise WebhookPayloadError(f"{receiver} payload is missing '{key}'.")
    return data[key]


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


class WebhookReceivers:
    """One handler per supported receiver, dispatched by receiver name."""

    def __init__(
        self,
        events: EventLogPort,
        strict_parameters: bool = True,
        slack_color: str = DEFAULT_COLOR,
    ):
        self.events = events
        self.slack_handler = SlackCommandHandler(
            strict_parameters=strict_parameters, color=slack_color,
        )
        self._handlers: Dict[str, Callable[[WebhookRequest], Optional[SlackReply]]] = {
            "azurealert": self.azure_alert,
            "bitbucket": self.bitbucket,
            "dropbox": self.dropbox,
            "dynamicscrm": self.dynamics_crm,
            "github": self.github,
            "kudu": self.kudu,
            "mailchimp": self.mailchimp,
            "pusher": self.pusher,
            "salesforce": self.salesforce,
            "slack": self.slack,
            "stripe": self.stripe,
        }

    @property
    def names(self):
        return tuple(self._handlers)

    def handle(self, request: WebhookRequest) -> Optional[SlackReply]:
        handler = self._handlers.get(request.receiver.lower())
        if handler is None:
            raise UnknownReceiverError(f"No receiver named '{request.receiver}'.")
        return handler(request)

    def _received(self, request: WebhookRequest, event_id: int = RECEIVED) -> None:
        self.events.record(
            event_id,
            "Receiver {receiver} '{receiver_id}' received something.",
            receiver=request.receiver,
            receiver_id=request.id,
        )

    # ── Receivers ────────────────────────────────────────────

    def azure_alert(self, request: WebhookRequest) -> None:
        context = _require(request.data, "context", "Azure alert")
        name = _require(context, "name", "Azure alert context")
        alert_id = _require(context, "id", "Azure alert context")
        self._received(request)
        self.events.record(
            AZURE_ALERT_STATUS,
            "Alert {alert_name} / {alert_id} reached status {alert_status} at {alert_time}.",
            alert_name=name,
            alert_id=alert_id,
            alert_status=request.data.get("status", ""),
            alert_time=context.get("timestamp", ""),
        )

    def bitbucket(self, request: WebhookRequest) -> None:
        self._received(request)
        self.events.record(
            BITBUCKET_EVENT,
            "Bitbucket event {event_name} received.",
            event_name=request.event,
        )

    def dropbox(self, request: WebhookRequest) -> None:
        self._received(request)
        data = _as_mapping(request.data)
        accounts = _as_list(_as_mapping(data.get("list_folder")).get("accounts"))
        users = _as_list(_as_mapping(data.get("delta")).get("users"))
        self.events.record(
            DROPBOX_CHANGE,
            "Dropbox reported changes for {account_count} accounts.",
            account_count=len(accounts) or len(users),
        )

    def dynamics_crm(self, request: WebhookRequest) -> None:
        data = _as_mapping(request.data)
        self.events.record(
            DYNAMICS_CRM_MESSAGE,
            "Receiver {receiver} / {receiver_id} received message {message_name} "
            "with {property_count} properties.",
            receiver=request.receiver,
            receiver_id=request.id,
            message_name=data.get(DYNAMICS_CRM_EVENT_FIELD, request.event),
            property_count=len(data),
        )

    def github(self, request: WebhookRequest) -> None:
        self._received(request, GITHUB_RECEIVED)
        if request.event.lower() != "push":
            return

        branch = _require(request.data, "ref", "GitHub push")
        commits = request.data.get("commits")
        if not isinstance(commits, list):
            raise WebhookPayloadError("GitHub push payload is missing 'commits'.")

        self.events.record(
            GITHUB_PUSH, "Received notification of push to '{branch}'.", branch=branch,
        )
        for commit in commits:
            if not isinstance(commit, Mapping):
                continue
            self.events.record(
                GITHUB_COMMIT,
                "\t{commit_id}: {message}.",
                commit_id=commit.get("id", ""),
                message=commit.get("message", ""),
            )
            for name in _as_list(commit.get("added")):
                self.events.record(GITHUB_FILE_ADDED, "Added '{file_name}'.", file_name=name)
            for name in _as_list(commit.get("modified")):
                self.events.record(GITHUB_FILE_MODIFIED, "Modified '{file_name}'.", file_name=name)
            for name in _as_list(commit.get("removed")):
                self.events.record(GITHUB_FILE_REMOVED, "Removed '{file_name}'.", file_name=name)

    def kudu(self, request: WebhookRequest) -> None:
        kudu_id = _require(request.data, "id", "Kudu")
        site_name = _require(request.data, "siteName", "Kudu")
        self._received(request, KUDU_RECEIVED)
        self.events.record(
            KUDU_DEPLOYMENT,
            "Kudu deployment {kudu_id} for site {site_name} reached status {status} ({status_text}).",
            kudu_id=kudu_id,
            site_name=site_name,
            status=request.data.get("status", ""),
            status_text=request.data.get("statusText", ""),
        )

    def mailchimp(self, request: WebhookRequest) -> None:
        data = _as_mapping(request.data)
        self.events.record(
            MAILCHIMP_MESSAGE,
            "Receiver {receiver} / {receiver_id} received message {event_names} "
            "with {property_count} properties.",
            receiver=request.receiver,
            receiver_id=request.id,
            event_names=data.get(MAILCHIMP_EVENT_FIELD, request.event),
            property_count=len(data),
        )

    def pusher(self, request: WebhookRequest) -> None:
        self._received(request)
        data = _as_mapping(request.data)
        names = [
            str(e.get("name", "")) for e in _as_list(data.get("events")) if isinstance(e, Mapping)
        ]
        self.events.record(
            PUSHER_EVENTS,
            "Pusher delivered {event_count} events ({event_names}) at {time_ms}.",
            event_count=len(names),
            event_names=", ".join(names),
            time_ms=data.get("time_ms", ""),
        )

    def salesforce(self, request: WebhookRequest) -> None:
        self._received(request)
        data = _as_mapping(request.data)
        notifications = _as_list(data.get("notifications"))
        self.events.record(
            SALESFORCE_MESSAGE,
            "Salesforce organization {organization_id} action {action_id} "
            "sent {notification_count} notifications.",
            organization_id=data.get("organization_id", ""),
            action_id=data.get("action_id", ""),
            notification_count=len(notifications),
        )
        for notification in notifications:
            self.events.record(
                SALESFORCE_NOTIFICATION,
                "\t{object_type} '{object_id}'.",
                object_type=notification.get("type", ""),
                object_id=notification.get("id", ""),
            )

    def slack(self, request: WebhookRequest) -> SlackReply:
        data = _as_mapping(request.data)
        self.events.record(
            SLACK_MESSAGE,
            "Data on channel '{channel}' contained command '{command}', "
            "trigger '{trigger}', and subtext '{subtext}'.",
            channel=data.get(CHANNEL_FIELD, ""),
            command=data.get(COMMAND_FIELD, ""),
            trigger=data.get(TRIGGER_FIELD, ""),
            subtext=get_subtext(data.get(TEXT_FIELD, ""), data.get(TRIGGER_FIELD, "")),
        )
        return self.slack_handler.build_reply(data)

    def stripe(self, request: WebhookRequest) -> None:
        event_id = _require(request.data, "id", "Stripe")
        event_type = _require(request.data, "type", "Stripe")
        self._received(request)
        if event_id == STRIPE_TEST_EVENT_ID:
            self.events.record(
                STRIPE_TEST_EVENT, "Received Stripe test event of type {event_type}.",
                event_type=event_type,
            )
            return
        self.events.record(
            STRIPE_EVENT,
            "Stripe event {stripe_event_id} of type {event_type} (livemode={livemode}).",
            stripe_event_id=event_id,
            event_type=event_type,
            livemode=request.data.get("livemode", False),
        )
