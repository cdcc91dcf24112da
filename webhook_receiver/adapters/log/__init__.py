from webhook_receiver.adapters.log.event_log import LoggingEventLog

__all__ = ["LoggingEventLog"]
