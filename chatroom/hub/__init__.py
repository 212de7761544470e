"""
Real-time chat hub.

Handles:
- History replay to newly admitted participants
- Serialized commit-then-broadcast of chat messages
- Participant tracking
"""

from .chat_hub import ChatHub, Participant

__all__ = ["ChatHub", "Participant"]
