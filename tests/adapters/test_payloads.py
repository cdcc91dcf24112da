"""Tests for adapters/web/payloads.py — request-to-struct mapping."""

import pytest

from webhook_receiver.adapters.web.payloads import (
    SALESFORCE_ACK,
    build_webhook_request,
    parse_form_body,
    parse_json_body,
    parse_salesforce_notifications,
)
from webhook_receiver.domain.errors import UnknownReceiverError, WebhookPayloadError

SALESFORCE_MESSAGE = b"""<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
 <soapenv:Body>
  <notifications xmlns="http://soap.sforce.com/2005/09/outbound">
   <OrganizationId>00D000000000001</OrganizationId>
   <ActionId>04k000000000001</ActionId>
   <SessionId xsi:nil="true"/>
   <Notification>
    <Id>04l000000000001</Id>
    <sObject xsi:type="sf:Contact" xmlns:sf="urn:sobject.enterprise.soap.sforce.com">
     <sf:Id>003000000000001</sf:Id>
     <sf:Email>someone@example.com</sf:Email>
    </sObject>
   </Notification>
   <Notification>
    <Id>04l000000000002</Id>
    <sObject xsi:type="sf:Lead" xmlns:sf="urn:sobject.enterprise.soap.sforce.com">
     <sf:Id>00Q000000000002</sf:Id>
    </sObject>
   </Notification>
  </notifications>
 </soapenv:Body>
</soapenv:Envelope>"""


class TestParseJsonBody:
    def test_object(self):
        assert parse_json_body(b'{"a": 1}') == {"a": 1}

    def test_empty(self):
        with pytest.raises(WebhookPayloadError, match="empty"):
            parse_json_body(b"  ")

    def test_invalid(self):
        with pytest.raises(WebhookPayloadError, match="JSON"):
            parse_json_body(b"{not json")


class TestParseFormBody:
    def test_first_value_wins(self):
        assert parse_form_body(b"text=a&text=b&command=%2Fdeploy") == {
            "text": "a", "command": "/deploy",
        }

    def test_blank_values_kept(self):
        assert parse_form_body(b"trigger_word=&text=hi") == {"trigger_word": "", "text": "hi"}

    def test_plus_is_space(self):
        assert parse_form_body(b"text=deploy+env%3Dprod")["text"] == "deploy env=prod"

    def test_empty_body(self):
        assert parse_form_body(b"") == {}


class TestParseSalesforceNotifications:
    def test_header_and_notifications(self):
        data = parse_salesforce_notifications(SALESFORCE_MESSAGE)
        assert data["organization_id"] == "00D000000000001"
        assert data["action_id"] == "04k000000000001"
        assert data["notifications"] == [
            {"notification_id": "04l000000000001", "type": "Contact", "id": "003000000000001"},
            {"notification_id": "04l000000000002", "type": "Lead", "id": "00Q000000000002"},
        ]

    def test_invalid_xml(self):
        with pytest.raises(WebhookPayloadError, match="SOAP"):
            parse_salesforce_notifications(b"<soapenv:Envelope")

    def test_missing_notifications(self):
        with pytest.raises(WebhookPayloadError, match="notifications"):
            parse_salesforce_notifications(b"<Envelope><Body/></Envelope>")

    def test_ack_is_soap(self):
        assert "<Ack>true</Ack>" in SALESFORCE_ACK
        assert "notificationsResponse" in SALESFORCE_ACK


class TestBuildWebhookRequest:
    def test_github_event_from_header(self):
        req = build_webhook_request("GitHub", "r1", {"x-github-event": "push"}, b'{"ref": "x"}')
        assert req.receiver == "github"
        assert req.id == "r1"
        assert req.event == "push"
        assert req.data == {"ref": "x"}

    def test_bitbucket_event_from_header(self):
        req = build_webhook_request("bitbucket", "default", {"x-event-key": "repo:push"}, b"{}")
        assert req.event == "repo:push"

    def test_stripe_event_from_body(self):
        req = build_webhook_request("stripe", "default", {}, b'{"id": "evt_1", "type": "charge.failed"}')
        assert req.event == "charge.failed"

    def test_pusher_event_names(self):
        body = b'{"events": [{"name": "a"}, {"name": "b"}]}'
        assert build_webhook_request("pusher", "default", {}, body).event == "a, b"

    @pytest.mark.parametrize("receiver,body,expected", [
        ("stripe", b'{"id": "evt_1", "type": 5}', "5"),
        ("dynamicscrm", b'{"MessageName": 7}', "7"),
        ("pusher", b'{"events": [{"name": 1}, {"name": "b"}]}', "1, b"),
    ])
    def test_non_text_event_names_become_text(self, receiver, body, expected):
        assert build_webhook_request(receiver, "default", {}, body).event == expected

    def test_dropbox_change(self):
        assert build_webhook_request("dropbox", "default", {}, b"{}").event == "change"

    def test_slack_form(self):
        body = b"command=%2Fdeploy&text=release+env%3Dprod"
        req = build_webhook_request("slack", "default", {}, body)
        assert req.event == "/deploy"
        assert req.data["text"] == "release env=prod"

    def test_mailchimp_form(self):
        req = build_webhook_request("mailchimp", "default", {}, b"type=subscribe&data%5Bemail%5D=a%40b.c")
        assert req.event == "subscribe"
        assert req.data["data[email]"] == "a@b.c"

    def test_salesforce_xml(self):
        req = build_webhook_request("salesforce", "default", {}, SALESFORCE_MESSAGE)
        assert len(req.data["notifications"]) == 2

    def test_unknown_receiver(self):
        with pytest.raises(UnknownReceiverError):
            build_webhook_request("nope", "default", {}, b"{}")
