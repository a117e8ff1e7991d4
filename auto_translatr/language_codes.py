"""
Language code names and file naming.

Language codes are opaque strings to the translation pipeline. This module
only gives them readable names for prompts and log messages, and maps them
to translation file names ('fr' -> 'fr.json', 'pt-BR' -> 'pt-BR.json').
Unknown codes are passed through unchanged.
"""

from typing import Optional

# Common ISO 639-1 codes
LANGUAGE_NAMES = {
    'ar': 'Arabic',
    'bg': 'Bulgarian',
    'ca': 'Catalan',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'et': 'Estonian',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fr': 'French',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hr': 'Croatian',
    'hu': 'Hungarian',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'nb': 'Norwegian Bokmal',
    'nl': 'Dutch',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sr': 'Serbian',
    'sv': 'Swedish',
    'th': 'Thai',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
}

# Regional variants that read differently from their base language
REGIONAL_NAMES = {
    'en-GB': 'English (United Kingdom)',
    'en-US': 'English (United States)',
    'es-MX': 'Spanish (Mexico)',
    'fr-CA': 'French (Canada)',
    'pt-BR': 'Portuguese (Brazil)',
    'pt-PT': 'Portuguese (Portugal)',
    'zh-CN': 'Chinese (Simplified)',
    'zh-TW': 'Chinese (Traditional)',
}


def extract_base_language(code: str) -> str:
    """
    Examples:
        >>> extract_base_language('pt-BR')
        'pt'
        >>> extract_base_language('fr')
        'fr'
    """
    return code.split('-')[0]


def get_language_name(code: str) -> Optional[str]:
    """
    Get the readable name for a code, falling back to the base language.

    Examples:
        >>> get_language_name('zh-TW')
        'Chinese (Traditional)'
        >>> get_language_name('de-AT')
        'German'
        >>> get_language_name('xx') is None
        True
    """
    if code in REGIONAL_NAMES:
        return REGIONAL_NAMES[code]
    return LANGUAGE_NAMES.get(extract_base_language(code))


def describe_language(code: str) -> str:
    """
    Examples:
        >>> describe_language('fr')
        'French (fr)'
        >>> describe_language('tlh')
        'tlh'
    """
    name = get_language_name(code)
    return f"{name} ({code})" if name else code


def get_language_file_name(language_code: str) -> str:
    """
    Examples:
        >>> get_language_file_name('zh-CN')
        'zh-CN.json'
    """
    return f"{language_code}.json"

