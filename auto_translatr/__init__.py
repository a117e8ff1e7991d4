"""auto-translatr: extract t('...') strings and fill missing translations with an LLM."""

__version__ = "1.1.0"
