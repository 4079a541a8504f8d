#!/usr/bin/env python3
"""
Language support for boundary detection and token estimation.

Profiles are created once by the registry and shared read-only for the
lifetime of the process.
"""

from lingochunk.languages.base import LanguageProfile, SectionHeader
from lingochunk.languages.registry import (
    DEFAULT_LANGUAGE,
    LanguageProfileRegistry,
    detect_language,
    get_registry,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "LanguageProfile",
    "LanguageProfileRegistry",
    "SectionHeader",
    "detect_language",
    "get_registry",
]
