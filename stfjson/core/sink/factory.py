"""Factory for creating tree sinks."""

from .base import TreeSink
from .renderers import JsonTreeSink, YamlTreeSink


def create_sink(output_format: str = "json", **kwargs) -> TreeSink:
    """
    Factory function to create tree sinks.

    Args:
        output_format: Type of output ("json" or "yaml")
        **kwargs: Renderer options (indent, ensure_ascii)

    Returns:
        TreeSink instance

    Raises:
        ValueError: If the format is not supported
    """
    if output_format == "json":
        return JsonTreeSink(
            indent=kwargs.get("indent", 2),
            ensure_ascii=kwargs.get("ensure_ascii", False),
        )
    elif output_format == "yaml":
        return YamlTreeSink(
            indent=kwargs.get("indent", 2),
            ensure_ascii=kwargs.get("ensure_ascii", False),
        )
    else:
        raise ValueError(f"Unknown output format: {output_format}")
