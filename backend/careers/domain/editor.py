"""
The page editor: one ordered, mutable block list plus tenant settings.

Persistence is injected. ``save_fn`` receives the normalized document and
``publish_fn`` copies the persisted draft into the published slot. With an
``autosave_delay`` every edit re-arms a debounced save.
"""
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .autosave import Autosaver
from .blocks import AnyBlock, Block, UnknownBlock, block_from_dict, ensure_block_ids, load_block_list, new_block
from .invariants.exceptions import FieldError, InvariantViolation
from .invariants.page import validate_page

logger = logging.getLogger(__name__)

DEFAULT_BRAND_COLOR = "#3b82f6"
DIRECTIONS = ("up", "down")
SETTINGS_FIELDS = ("brand_color", "logo_url", "hero_background_url")

SaveFn = Callable[[Dict[str, Any]], None]
PublishFn = Callable[[], Any]


class PageEditor:
    def __init__(
        self,
        blocks: Optional[List[Union[AnyBlock, Mapping[str, Any]]]] = None,
        *,
        brand_color: str = DEFAULT_BRAND_COLOR,
        logo_url: str = "",
        hero_background_url: str = "",
        save_fn: Optional[SaveFn] = None,
        publish_fn: Optional[PublishFn] = None,
        autosave_delay: Optional[float] = None,
        timer_factory: Optional[Callable[..., threading.Timer]] = None,
        on_autosave_error: Optional[Callable[[Exception], None]] = None,
    ):
        self.blocks: List[AnyBlock] = [
            b if not isinstance(b, Mapping) else block_from_dict(b) for b in (blocks or [])
        ]
        self.brand_color = brand_color or DEFAULT_BRAND_COLOR
        self.logo_url = logo_url or ""
        self.hero_background_url = hero_background_url or ""

        self._save_fn = save_fn
        self._publish_fn = publish_fn
        self._lock = threading.RLock()
        self._revision = 0
        self._saved_revision = 0

        self._autosaver: Optional[Autosaver] = None
        if autosave_delay is not None and save_fn is not None:
            self._autosaver = Autosaver(
                self._persist,
                autosave_delay,
                timer_factory=timer_factory or threading.Timer,
                on_error=on_autosave_error,
            )

    @classmethod
    def from_document(cls, document: Mapping[str, Any], **kwargs) -> "PageEditor":
        return cls(
            ensure_block_ids(load_block_list(document.get("config"))),
            brand_color=document.get("brand_color") or DEFAULT_BRAND_COLOR,
            logo_url=document.get("logo_url") or "",
            hero_background_url=document.get("hero_background_url") or "",
            **kwargs,
        )

    # -------------------------------------------------
    # State
    # -------------------------------------------------
    @property
    def dirty(self) -> bool:
        with self._lock:
            return self._revision != self._saved_revision

    def to_document(self) -> Dict[str, Any]:
        """Normalized snapshot: every block in its canonical wire form."""
        with self._lock:
            return {
                "brand_color": self.brand_color,
                "logo_url": self.logo_url,
                "hero_background_url": self.hero_background_url,
                "config": [block.to_dict() for block in self.blocks],
            }

    def errors(self) -> List[FieldError]:
        return validate_page(self.to_document())

    def _changed(self) -> None:
        self._revision += 1
        if self._autosaver is not None:
            self._autosaver.touch()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.blocks):
            raise InvariantViolation(f"Block index out of range: {index}")

    # -------------------------------------------------
    # Edits
    # -------------------------------------------------
    def add_block(self, block_type: str) -> Block:
        block = new_block(block_type)
        with self._lock:
            self.blocks.append(block)
            self._changed()
        return block

    def move_block(self, index: int, direction: str) -> bool:
        """Swap with the neighbour in ``direction``; False at a boundary."""
        if direction not in DIRECTIONS:
            raise InvariantViolation(f"Direction must be one of {', '.join(DIRECTIONS)}")

        with self._lock:
            self._check_index(index)
            target = index - 1 if direction == "up" else index + 1
            if not 0 <= target < len(self.blocks):
                return False

            self.blocks[index], self.blocks[target] = self.blocks[target], self.blocks[index]
            self._changed()
            return True

    def remove_block(self, index: int) -> AnyBlock:
        with self._lock:
            self._check_index(index)
            removed = self.blocks.pop(index)
            self._changed()
            return removed

    def update_block(self, index: int, block: Union[AnyBlock, Mapping[str, Any]]) -> AnyBlock:
        if isinstance(block, Mapping):
            block = block_from_dict(block)

        with self._lock:
            self._check_index(index)
            current = self.blocks[index]

            if block.id != current.id:
                raise InvariantViolation("Block id cannot change")
            if block.type != current.type:
                raise InvariantViolation("Block type cannot change")
            if isinstance(current, UnknownBlock):
                raise InvariantViolation(f"Cannot edit unknown block type: {current.type}")

            self.blocks[index] = block
            self._changed()
            return block

    def update_settings(self, **fields: Optional[str]) -> None:
        unknown = set(fields) - set(SETTINGS_FIELDS)
        if unknown:
            raise InvariantViolation(f"Unknown page settings: {', '.join(sorted(unknown))}")

        with self._lock:
            for key, value in fields.items():
                setattr(self, key, value or "")
            self._changed()

    # -------------------------------------------------
    # Persistence
    # -------------------------------------------------
    def save(self) -> None:
        """
        Persist the current document as the draft.

        Supersedes any pending autosave. On failure the in-memory
        document is kept and stays dirty so the caller can retry.
        """
        if self._save_fn is None:
            raise InvariantViolation("Editor has no draft store")

        if self._autosaver is not None:
            self._autosaver.flush()
        else:
            self._persist()

    def publish(self) -> Any:
        if self._publish_fn is None:
            raise InvariantViolation("Editor has no publisher")

        if self.dirty:
            self.save()
        else:
            self.cancel_autosave()

        return self._publish_fn()

    def cancel_autosave(self) -> None:
        if self._autosaver is not None:
            self._autosaver.cancel()

    def _persist(self) -> None:
        with self._lock:
            revision = self._revision
            document = self.to_document()

        self._save_fn(document)

        with self._lock:
            # edits made while the save was in flight keep the editor dirty
            self._saved_revision = max(self._saved_revision, revision)

        logger.debug("Draft saved at revision %s", revision)
