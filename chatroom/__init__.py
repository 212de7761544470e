"""Chatroom: authenticated real-time broadcast chat service"""

__version__ = "1.0.0"
