"""Request-to-struct mapping for each receiver's wire format.

The route layer hands over raw bytes and headers; everything here returns
plain Python data so the domain never sees transport objects.
"""

import json
from typing import Any, Dict, Mapping
from urllib.parse import parse_qs
from xml.etree import ElementTree

from webhook_receiver.domain.errors import UnknownReceiverError, WebhookPayloadError
from webhook_receiver.domain.slack import get_event_name
from webhook_receiver.ports.inbound import WebhookRequest

JSON_RECEIVERS = frozenset({
    "azurealert", "bitbucket", "dropbox", "dynamicscrm", "github", "kudu", "pusher", "stripe",
})
FORM_RECEIVERS = frozenset({"mailchimp", "slack"})
XML_RECEIVERS = frozenset({"salesforce"})

# Header carrying the event name, for receivers that use one
EVENT_HEADERS = {
    "github": "x-github-event",
    "bitbucket": "x-event-key",
}

SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"
OUTBOUND_NS = "http://soap.sforce.com/2005/09/outbound"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

SALESFORCE_ACK = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    f'<soapenv:Envelope xmlns:soapenv="{SOAP_NS}">'
    "<soapenv:Body>"
    f'<notificationsResponse xmlns="{OUTBOUND_NS}"><Ack>true</Ack></notificationsResponse>'
    "</soapenv:Body>"
    "</soapenv:Envelope>"
)


def parse_json_body(raw: bytes) -> Any:
    if not raw.strip():
        raise WebhookPayloadError("Request body is empty.")
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise WebhookPayloadError(f"Request body is not valid JSON: {e}") from e


def parse_form_body(raw: bytes) -> Dict[str, str]:
    """Decode an urlencoded form, keeping the first value of repeated fields."""
    try:
        params = parse_qs(raw.decode("utf-8"), keep_blank_values=True)
    except UnicodeDecodeError as e:
        raise WebhookPayloadError(f"Form body is not valid UTF-8: {e}") from e
    return {key: values[0] for key, values in params.items() if values}


def _outbound(name: str) -> str:
    return f"{{{OUTBOUND_NS}}}{name}"


def _child_text(element: ElementTree.Element, name: str) -> str:
    child = element.find(_outbound(name))
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def parse_salesforce_notifications(raw: bytes) -> Dict[str, Any]:
    """Extract the outbound message header and each notified sObject."""
    try:
        root = ElementTree.fromstring(raw)
    except ElementTree.ParseError as e:
        raise WebhookPayloadError(f"Invalid Salesforce SOAP message: {e}") from e

    message = root.find(f".//{_outbound('notifications')}")
    if message is None:
        raise WebhookPayloadError("Salesforce SOAP message has no 'notifications' element.")

    notifications = []
    for notification in message.findall(_outbound("Notification")):
        object_type = ""
        object_id = ""
        sobject = notification.find(_outbound("sObject"))
        if sobject is not None:
            # xsi:type="sf:Contact"
            object_type = sobject.get(f"{{{XSI_NS}}}type", "").rpartition(":")[2]
            for field in sobject:
                if field.tag.rpartition("}")[2] == "Id":
                    object_id = (field.text or "").strip()
                    break
        notifications.append({
            "notification_id": _child_text(notification, "Id"),
            "type": object_type,
            "id": object_id,
        })

    return {
        "organization_id": _child_text(message, "OrganizationId"),
        "action_id": _child_text(message, "ActionId"),
        "notifications": notifications,
    }


def _event_name(receiver: str, headers: Mapping[str, str], data: Any) -> str:
    header = EVENT_HEADERS.get(receiver)
    if header:
        return headers.get(header, "")
    if receiver == "dropbox":
        return "change"
    if not isinstance(data, Mapping):
        return ""
    if receiver == "slack":
        return get_event_name(data)
    if receiver == "stripe":
        return str(data.get("type", ""))
    if receiver == "dynamicscrm":
        return str(data.get("MessageName", ""))
    if receiver == "mailchimp":
        return str(data.get("type", ""))
    if receiver == "pusher":
        events = data.get("events")
        if isinstance(events, list):
            return ", ".join(str(e.get("name", "")) for e in events if isinstance(e, Mapping))
    return ""


def build_webhook_request(
    receiver: str,
    receiver_id: str,
    headers: Mapping[str, str],
    raw: bytes,
) -> WebhookRequest:
    """Map one inbound HTTP delivery to a WebhookRequest."""
    receiver = receiver.lower()
    if receiver in FORM_RECEIVERS:
        data: Any = parse_form_body(raw)
    elif receiver in XML_RECEIVERS:
        data = parse_salesforce_notifications(raw)
    elif receiver in JSON_RECEIVERS:
        data = parse_json_body(raw)
    else:
        raise UnknownReceiverError(f"No receiver named '{receiver}'.")
    return WebhookRequest(
        receiver=receiver,
        id=receiver_id,
        event=_event_name(receiver, headers, data),
        data=data,
    )
