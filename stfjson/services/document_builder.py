"""
Document builder: the STF grammar as a state machine over chunks.

States and the tags they accept:

    NONE                  {STF}
    ROOT                  {d} {C} {I} {STF}
    CATEGORY              {r}{;} {F} {p} {a} {.}
    CATEGORY_CONDITIONS   {C}{+} {C}{-} {;}
    CATEGORY_ACTIONS      {C}{+} {C}{-} {;}
    ITEM                  {T} {N} {C} {.} {!}

{S} comments are accepted everywhere and never change state. Any other
tag is a GrammarError; nothing is recovered.
"""

from enum import Enum
from typing import Callable, NamedTuple

from stfjson.core.dates.normalizer import (
    DEFAULT_FORMAT_INDEX,
    parse_header_timestamp,
    validate_format_index,
)
from stfjson.core.links.parser import parse_link
from stfjson.core.reader.chunk_stream import ChunkStream
from stfjson.models.chunk import Chunk
from stfjson.models.document import Category, ConditionSet, Document, FileRecord, Item
from stfjson.utils.exceptions import GrammarError, StfJsonError
from stfjson.utils.logger import get_logger

logger = get_logger(__name__)


class BuilderState(str, Enum):
    """Grammar states of the document builder."""

    NONE = "none"
    ROOT = "root"
    CATEGORY = "category"
    CATEGORY_CONDITIONS = "category_conditions"
    CATEGORY_ACTIONS = "category_actions"
    ITEM = "item"


class Transition(NamedTuple):
    """Result of handling one chunk; replay re-dispatches it in the new state."""

    state: BuilderState
    replay: bool = False


class BuilderContext:
    """
    Mutable state for one build() call.

    Holds the document under construction and the entities currently open
    for modification. At most one of category/item is set at any time, and
    condition_set is only set while category is.
    """

    def __init__(self, default_date_format: int = DEFAULT_FORMAT_INDEX):
        self.document = Document()
        self.default_date_format = default_date_format
        self.date_format = default_date_format
        self.record: FileRecord | None = None
        self.category: Category | None = None
        self.condition_set: ConditionSet | None = None
        self.item: Item | None = None

    def start_file(self, timestamp: str) -> FileRecord:
        self.record = FileRecord(timestamp=timestamp)
        self.document.files.append(self.record)
        # The {d} setting does not carry over between files
        self.date_format = self.default_date_format
        return self.record

    def open_category(self, name: str) -> Category:
        self.category = Category(name=name)
        self.record.categories.append(self.category)
        return self.category

    def close_category(self) -> None:
        self.category = None
        self.condition_set = None

    def open_condition_set(self, actions: bool) -> ConditionSet:
        self.condition_set = ConditionSet()
        if actions:
            self.category.actions = self.condition_set
        else:
            self.category.conditions = self.condition_set
        return self.condition_set

    def close_condition_set(self) -> None:
        self.condition_set = None

    def open_item(self) -> Item:
        self.item = Item()
        self.record.items.append(self.item)
        return self.item

    def close_item(self) -> None:
        self.item = None


def log_comment(text: str) -> None:
    """Default comment handler: report {S} text through the logger."""
    logger.info(f"Comment: {text}")


class DocumentBuilder:
    """
    Builds a Document from a stream of chunks.

    Usage:
        builder = DocumentBuilder()
        document = builder.build(ChunkStream(ChunkReader(sys.stdin)))
    """

    def __init__(
        self,
        default_date_format: int = DEFAULT_FORMAT_INDEX,
        comment_handler: Callable[[str], None] | None = None,
    ):
        """
        Initialize builder.

        Args:
            default_date_format: Date format index in effect at the start of every file
            comment_handler: Receives the text of {S} chunks (default: log it)

        Raises:
            ConfigError: If default_date_format is outside 1..12
        """
        self.default_date_format = validate_format_index(default_date_format)
        self.comment_handler = comment_handler or log_comment
        self._handlers = {
            BuilderState.NONE: self._on_none,
            BuilderState.ROOT: self._on_root,
            BuilderState.CATEGORY: self._on_category,
            BuilderState.CATEGORY_CONDITIONS: self._on_condition_set,
            BuilderState.CATEGORY_ACTIONS: self._on_condition_set,
            BuilderState.ITEM: self._on_item,
        }

    def build(self, chunks: ChunkStream) -> Document:
        """
        Consume every chunk and return the finished document.

        Args:
            chunks: Chunk source

        Returns:
            Document with one FileRecord per {STF} header

        Raises:
            LexError: If the stream is malformed
            GrammarError: If a tag appears where the grammar does not allow it,
                or the stream ends inside a category or item
            LinkFormatError: If an item's category link cannot be parsed
            DateFormatError: If a header or date link value cannot be parsed
            ConfigError: If a {d} tag selects an unknown date format
        """
        context = BuilderContext(self.default_date_format)
        state = BuilderState.NONE

        while True:
            chunk = chunks.next_chunk()
            if chunk is None:
                break

            if chunk.is_comment:
                if chunk.value is not None:
                    self.comment_handler(chunk.value)
                continue

            try:
                while True:
                    transition = self._handlers[state](state, chunk, context, chunks)
                    state = transition.state
                    if not transition.replay:
                        break
            except StfJsonError as e:
                e.context.setdefault("state", state.value)
                e.context.setdefault("tag", chunk.tag)
                e.context.setdefault("offset", chunks.offset)
                raise

        if state not in (BuilderState.NONE, BuilderState.ROOT):
            raise GrammarError(
                f"Stream ended inside an open {state.value}",
                context={"state": state.value, "offset": chunks.offset},
            )

        logger.debug(f"Built document with {len(context.document)} file(s)")
        return context.document

    def _unexpected(self, state: BuilderState, chunk: Chunk) -> GrammarError:
        return GrammarError(
            f"[{state.value}] unexpected tag {{{chunk.tag}}} here",
            context={"state": state.value, "tag": chunk.tag, "value": chunk.value},
        )

    def _on_none(
        self, state: BuilderState, chunk: Chunk, context: BuilderContext, chunks: ChunkStream
    ) -> Transition:
        if chunk.tag == "STF":
            record = context.start_file(parse_header_timestamp(chunk.value))
            logger.debug(f"Started STF file dated {record.timestamp}")
            return Transition(BuilderState.ROOT)

        raise self._unexpected(state, chunk)

    def _on_root(
        self, state: BuilderState, chunk: Chunk, context: BuilderContext, chunks: ChunkStream
    ) -> Transition:
        # Change date format, Appendix B-6
        if chunk.tag == "d":
            context.date_format = validate_format_index(chunk.value)
            return Transition(BuilderState.ROOT)

        if chunk.tag == "C":
            context.open_category(chunk.value or "")
            return Transition(BuilderState.CATEGORY)

        if chunk.tag == "I":
            context.open_item()
            return Transition(BuilderState.ITEM)

        # Another file follows in the same stream
        if chunk.tag == "STF":
            return Transition(BuilderState.NONE, replay=True)

        raise self._unexpected(state, chunk)

    def _on_category(
        self, state: BuilderState, chunk: Chunk, context: BuilderContext, chunks: ChunkStream
    ) -> Transition:
        if chunk.tag == "r":
            context.category.attributes.append(chunk.value or "")
            chunks.expect_chunk(
                lambda c: c.tag == ";" and c.value is None,
                "{;} ending category attribute",
                context={"attribute": chunk.value},
            )
            return Transition(BuilderState.CATEGORY)

        if chunk.tag == ".":
            context.close_category()
            return Transition(BuilderState.ROOT)

        if chunk.tag == "F":
            context.category.note = chunk.value or ""
            return Transition(BuilderState.CATEGORY)

        if chunk.tag == "p":
            context.open_condition_set(actions=False)
            return Transition(BuilderState.CATEGORY_CONDITIONS)

        if chunk.tag == "a":
            context.open_condition_set(actions=True)
            return Transition(BuilderState.CATEGORY_ACTIONS)

        raise self._unexpected(state, chunk)

    def _on_condition_set(
        self, state: BuilderState, chunk: Chunk, context: BuilderContext, chunks: ChunkStream
    ) -> Transition:
        if chunk.tag == "C":
            polarity = chunks.expect_chunk(
                lambda c: c.tag in ("+", "-"),
                "{+} or {-} after assignment category",
                context={"category": chunk.value},
            )
            target = context.condition_set.include if polarity.tag == "+" else context.condition_set.exclude
            target.append(chunk.value or "")
            return Transition(state)

        if chunk.tag == ";":
            context.close_condition_set()
            return Transition(BuilderState.CATEGORY)

        raise self._unexpected(state, chunk)

    def _on_item(
        self, state: BuilderState, chunk: Chunk, context: BuilderContext, chunks: ChunkStream
    ) -> Transition:
        if chunk.tag == "T":
            context.item.text = chunk.value or ""
            return Transition(BuilderState.ITEM)

        if chunk.tag == "N":
            context.item.note = chunk.value or ""
            return Transition(BuilderState.ITEM)

        if chunk.tag == "C":
            context.item.categories.append(parse_link(chunk.value or "", context.date_format))
            return Transition(BuilderState.ITEM)

        if chunk.tag == ".":
            return Transition(BuilderState.ITEM)

        if chunk.tag == "!":
            context.close_item()
            return Transition(BuilderState.ROOT)

        raise self._unexpected(state, chunk)
