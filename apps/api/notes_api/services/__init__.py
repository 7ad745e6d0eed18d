"""Business operations on notes and subscriptions."""

from notes_api.services.notes import NoteService
from notes_api.services.subscriptions import SubscriptionService

__all__ = ["NoteService", "SubscriptionService"]
