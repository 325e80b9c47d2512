"""JSON and YAML renderers for converted documents."""

import json
from typing import Any

import yaml

from stfjson.core.sink.base import NativeTreeSink


class JsonTreeSink(NativeTreeSink):
    """Renders the tree as pretty-printed JSON."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def render(self, root: Any) -> str:
        return json.dumps(root, indent=self.indent, ensure_ascii=self.ensure_ascii)


class YamlTreeSink(NativeTreeSink):
    """Renders the tree as block-style YAML, preserving field order."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def render(self, root: Any) -> str:
        return yaml.safe_dump(
            root,
            indent=self.indent or None,
            allow_unicode=not self.ensure_ascii,
            sort_keys=False,
            default_flow_style=False,
        ).rstrip("\n")
