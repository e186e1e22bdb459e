"""
Chat backend adapters.
"""

from huissier.infrastructure.chat.stream_chat_client import StreamChatClient

__all__ = ["StreamChatClient"]
