"""
Project module - Source tree and translation files

This module provides:
- scanner: Extract t('...') strings from a codebase
- store: Read and merge-write per-language JSON translation files
"""

from auto_translatr.project.scanner import (
    ScanError,
    find_files,
    extract_translation_calls,
    read_codebase,
)

from auto_translatr.project.store import (
    StoreError,
    TranslationStore,
    read_translation_file,
    read_all_translations,
    write_language_file,
    write_language_files,
)
