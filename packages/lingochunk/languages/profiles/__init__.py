#!/usr/bin/env python3
"""Concrete language profiles."""

from lingochunk.languages.profiles.arabic import ArabicLanguageProfile
from lingochunk.languages.profiles.chinese import ChineseLanguageProfile
from lingochunk.languages.profiles.english import EnglishLanguageProfile
from lingochunk.languages.profiles.german import GermanLanguageProfile
from lingochunk.languages.profiles.hindi import HindiLanguageProfile
from lingochunk.languages.profiles.japanese import JapaneseLanguageProfile
from lingochunk.languages.profiles.korean import KoreanLanguageProfile
from lingochunk.languages.profiles.romance import (
    FrenchLanguageProfile,
    PortugueseLanguageProfile,
    SpanishLanguageProfile,
)
from lingochunk.languages.profiles.russian import RussianLanguageProfile
from lingochunk.languages.profiles.thai import ThaiLanguageProfile
from lingochunk.languages.profiles.vietnamese import VietnameseLanguageProfile

ALL_PROFILES = (
    EnglishLanguageProfile,
    KoreanLanguageProfile,
    ChineseLanguageProfile,
    JapaneseLanguageProfile,
    SpanishLanguageProfile,
    FrenchLanguageProfile,
    GermanLanguageProfile,
    PortugueseLanguageProfile,
    RussianLanguageProfile,
    ArabicLanguageProfile,
    HindiLanguageProfile,
    VietnameseLanguageProfile,
    ThaiLanguageProfile,
)

__all__ = [
    "ALL_PROFILES",
    "ArabicLanguageProfile",
    "ChineseLanguageProfile",
    "EnglishLanguageProfile",
    "FrenchLanguageProfile",
    "GermanLanguageProfile",
    "HindiLanguageProfile",
    "JapaneseLanguageProfile",
    "KoreanLanguageProfile",
    "PortugueseLanguageProfile",
    "RussianLanguageProfile",
    "SpanishLanguageProfile",
    "ThaiLanguageProfile",
    "VietnameseLanguageProfile",
]
