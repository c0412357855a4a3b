"""
Agents package for the RKM Loom Spares assistant.
Contains the rule-based chat assistant.
"""

from .assistant import Assistant, get_assistant

__all__ = [
    'Assistant',
    'get_assistant'
]
