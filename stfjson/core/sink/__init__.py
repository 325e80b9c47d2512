"""
Sink module for building and rendering the output tree.
"""

from stfjson.core.sink.base import NativeTreeSink, TreeSink
from stfjson.core.sink.emitter import emit_document
from stfjson.core.sink.factory import create_sink
from stfjson.core.sink.renderers import JsonTreeSink, YamlTreeSink

__all__ = [
    "TreeSink",
    "NativeTreeSink",
    "JsonTreeSink",
    "YamlTreeSink",
    "create_sink",
    "emit_document",
]
