from api.features.chat.entities.conversation import Conversation
from api.features.chat.entities.message import Direction, Message

__all__ = ["Conversation", "Direction", "Message"]
