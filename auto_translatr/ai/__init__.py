"""
AI Module

This module provides the LLM "send" collaborator used by the translation pipeline.
"""

from auto_translatr.ai.exceptions import TranslationError
from auto_translatr.ai.service import AIService

__all__ = ['TranslationError', 'AIService']
