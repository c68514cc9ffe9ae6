"""Use cases dos webhooks da Veriff."""

from .base import HandlerResult, HandlerStatus, WebhookHandler
from .decision_events import DecisionEventHandler
from .proof_of_address import ProofOfAddressHandler
from .verification_events import VerificationEventHandler

__all__ = [
    "DecisionEventHandler",
    "HandlerResult",
    "HandlerStatus",
    "ProofOfAddressHandler",
    "VerificationEventHandler",
    "WebhookHandler",
]
