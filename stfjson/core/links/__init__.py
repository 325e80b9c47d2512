"""
Links module for decoding item category links.
"""

from stfjson.core.links.parser import classify_link, parse_link, split_names, unescape_value

__all__ = ["classify_link", "parse_link", "split_names", "unescape_value"]
