"""Custom exceptions for the chatroom service"""


class ChatroomError(Exception):
    """Base exception for the chatroom service"""
    pass


class ValidationError(ChatroomError):
    """Rejected input (empty login/password, non-text message)"""
    pass


class ConflictError(ChatroomError):
    """Login already taken"""
    pass


class AuthenticationError(ChatroomError):
    """Unknown login or password mismatch"""
    pass


class AuthorizationError(ChatroomError):
    """Missing or unregistered session credential"""
    pass


class ConfigError(ChatroomError):
    """Configuration error"""
    pass
