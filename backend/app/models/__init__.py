from app.models.user import User, UserRole
from app.models.bot import Bot
from app.models.document import Document
from app.models.lead import Lead
from app.models.conversation import Conversation, Message, MessageRole

__all__ = [
    "User",
    "UserRole",
    "Bot",
    "Document",
    "Lead",
    "Conversation",
    "Message",
    "MessageRole",
]
