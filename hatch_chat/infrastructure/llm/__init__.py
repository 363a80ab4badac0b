"""
Reply generation adapters.
"""

from hatch_chat.infrastructure.llm.canned_reply_generator import CannedReplyGenerator
from hatch_chat.infrastructure.llm.openai_reply_generator import OpenAIReplyGenerator

__all__ = ["CannedReplyGenerator", "OpenAIReplyGenerator"]
