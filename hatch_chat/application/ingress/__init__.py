from hatch_chat.application.ingress.message_ingress import (
    IngressResult,
    MessageIngressEnvelope,
    validate_message_ingress,
)

__all__ = ["IngressResult", "MessageIngressEnvelope", "validate_message_ingress"]
