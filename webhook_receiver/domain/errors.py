"""Domain exceptions raised by receiver handlers."""


class WebhookPayloadError(ValueError):
    """Raised when a payload lacks data the receiver requires"""
    pass


class UnknownReceiverError(LookupError):
    """Raised when no handler exists for a receiver name"""
    pass
