"""
Services for stfjson.

- DocumentBuilder: STF grammar state machine producing Document models
- StfConverter: reader -> builder -> sink pipeline driven by Config
"""

from stfjson.services.converter import StfConverter
from stfjson.services.document_builder import (
    BuilderContext,
    BuilderState,
    DocumentBuilder,
    Transition,
    log_comment,
)

__all__ = [
    "StfConverter",
    "DocumentBuilder",
    "BuilderContext",
    "BuilderState",
    "Transition",
    "log_comment",
]
