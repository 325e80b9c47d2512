"""
Tests for StfConverter.

Tests cover:
1. End-to-end conversion of byte and text streams
2. Output format selection
3. Comment echoing
4. Failure leaves nothing rendered
"""

import io
import json

import pytest
import yaml

from stfjson.config import BuilderConfig, Config, OutputConfig, ReaderConfig
from stfjson.core.sink import JsonTreeSink
from stfjson.services.converter import StfConverter
from stfjson.utils.exceptions import GrammarError, LexError

AGENDA_EXPORT = (
    "Agenda export\r\n"
    "{STF}10/05/20;08:00:00;002\r\n"
    "{C}Work\\{r}AC{;}{F}Office{p}{C}Home{+}{C}Play{-}{;}{.}\r\n"
    "{I}{C}Priority;Pri;Urgent\\{C}Due@|10/05/2020 14:30{T}Buy milk{N}Before noon{!}\r\n"
)

EXPECTED = [
    {
        "timestamp": "2020-10-05T08:00:00Z",
        "categories": [
            {
                "name": "Work\\",
                "attributes": ["AC"],
                "note": "Office",
                "conditions": {"include": ["Home"], "exclude": ["Play"]},
            }
        ],
        "items": [
            {
                "categories": [
                    {"type": "standard", "name": "Priority", "shortname": "Pri", "alsomatch": ["Urgent"]},
                    {"type": "date", "name": "Due", "value": "2020-10-05T14:30:00Z"},
                ],
                "text": "Buy milk",
                "note": "Before noon",
            }
        ],
    }
]


class TestConvert:
    """Tests for full conversions."""

    def test_convert_bytes(self):
        """Test converting a byte stream to JSON."""
        output = StfConverter().convert(io.BytesIO(AGENDA_EXPORT.encode("cp437")))

        assert json.loads(output) == EXPECTED

    def test_convert_text_stream(self):
        """Test that text streams are read as-is."""
        output = StfConverter().convert(io.StringIO(AGENDA_EXPORT))

        assert json.loads(output) == EXPECTED

    def test_convert_empty_stream(self):
        """Test that an empty stream renders an empty array."""
        assert StfConverter().convert(io.BytesIO(b"")) == "[]"

    def test_convert_yaml(self):
        """Test YAML output."""
        config = Config(output=OutputConfig(format="yaml"))

        output = StfConverter(config).convert(io.StringIO(AGENDA_EXPORT))

        assert yaml.safe_load(output) == EXPECTED

    def test_input_encoding(self):
        """Test decoding with the configured encoding."""
        config = Config(reader=ReaderConfig(encoding="utf-8"))
        data = "{STF}10/05/20;08:00:00;002{I}{T}naïve{!}".encode("utf-8")

        document = StfConverter(config).parse(io.BytesIO(data))

        assert document.files[0].items[0].text == "naïve"

    def test_default_date_format(self):
        """Test that the configured default date format is used."""
        config = Config(builder=BuilderConfig(default_date_format=4))

        document = StfConverter(config).parse_string(
            "{STF}10/05/20;08:00:00;002{I}{C}Due@|2020-10-05 14:30{!}"
        )

        assert document.files[0].items[0].categories[0].value == "2020-10-05T14:30:00Z"

    def test_custom_sink(self):
        """Test that an explicit sink overrides the configured format."""
        converter = StfConverter(Config(output=OutputConfig(format="yaml")), sink=JsonTreeSink(indent=0))

        assert converter.convert(io.StringIO("")) == "[]"

    def test_parse_logs_counts(self, log_messages):
        """Test the summary log line."""
        StfConverter().parse(io.StringIO(AGENDA_EXPORT))

        assert "Parsed 1 STF file(s): 1 categories, 1 items" in log_messages


class TestComments:
    """Tests for comment echoing."""

    def test_comments_logged(self, log_messages):
        """Test that comments are reported by default."""
        StfConverter().parse(io.StringIO(AGENDA_EXPORT))

        assert "Comment: Agenda export" in log_messages

    def test_comments_discarded(self, log_messages):
        """Test that comments can be silenced."""
        config = Config(builder=BuilderConfig(echo_comments=False))

        StfConverter(config).parse(io.StringIO(AGENDA_EXPORT))

        assert not any(m.startswith("Comment:") for m in log_messages)


class TestFailures:
    """Tests for failed conversions."""

    def test_truncated_stream(self):
        """Test that a truncated file fails the whole conversion."""
        with pytest.raises(LexError):
            StfConverter().convert(io.StringIO(AGENDA_EXPORT + "{I}{T}half"))

    def test_unexpected_tag(self):
        """Test that grammar errors propagate."""
        with pytest.raises(GrammarError):
            StfConverter().convert(io.StringIO("{STF}10/05/20;08:00:00;002{X}oops{!}"))
