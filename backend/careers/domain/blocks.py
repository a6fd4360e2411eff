"""
Typed content blocks for a careers page.

Each variant is its own dataclass carrying exactly that variant's fields.
Stored JSON keeps the historical key names (``backgroundImageUrl``,
``imageUrl``, ``image_url``); ``from_dict`` / ``to_dict`` translate.

Construction from stored data is lenient: a missing string becomes ``""``
so half-edited drafts can always be loaded. Strictness lives in
``careers.domain.invariants.block``.
"""
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Union

from .invariants.exceptions import InvariantViolation

logger = logging.getLogger(__name__)


def new_block_id() -> str:
    return str(uuid.uuid4())


def _block_id(data: Mapping[str, Any]) -> str:
    # reading never invents ids; ensure_block_ids assigns them on write
    block_id = data.get("id")
    return str(block_id) if block_id else ""


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _dicts(data: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    # a non-object element becomes an empty item so sibling indices hold
    return [item if isinstance(item, Mapping) else {} for item in value]


@dataclass
class HeroBlock:
    id: str
    heading: str = ""
    subheading: str = ""
    background_image_url: str = ""

    type: ClassVar[str] = "hero"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HeroBlock":
        return cls(
            id=_block_id(data),
            heading=_text(data, "heading"),
            subheading=_text(data, "subheading"),
            background_image_url=_text(data, "backgroundImageUrl"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "heading": self.heading,
            "subheading": self.subheading,
            "backgroundImageUrl": self.background_image_url,
        }


@dataclass
class FeatureSplitBlock:
    id: str
    layout: str = "image_left"
    heading: str = ""
    content: str = ""
    image_url: str = ""

    type: ClassVar[str] = "feature_split"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureSplitBlock":
        return cls(
            id=_block_id(data),
            # an invalid layout is kept so validation can still report it
            layout=_text(data, "layout") or "image_left",
            heading=_text(data, "heading"),
            content=_text(data, "content"),
            image_url=_text(data, "imageUrl"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "layout": self.layout,
            "heading": self.heading,
            "content": self.content,
            "imageUrl": self.image_url,
        }


@dataclass
class ValueItem:
    title: str = ""
    text: str = ""
    image_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "text": self.text, "image_url": self.image_url}


@dataclass
class ValuesGridBlock:
    id: str
    heading: str = ""
    items: List[ValueItem] = field(default_factory=list)

    type: ClassVar[str] = "values_grid"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValuesGridBlock":
        return cls(
            id=_block_id(data),
            heading=_text(data, "heading"),
            items=[
                ValueItem(
                    title=_text(item, "title"),
                    text=_text(item, "text"),
                    image_url=_text(item, "image_url"),
                )
                for item in _dicts(data, "items")
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "heading": self.heading,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class FeatureItem:
    title: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description}


@dataclass
class FeaturesBlock:
    id: str
    heading: str = ""
    features: List[FeatureItem] = field(default_factory=list)

    type: ClassVar[str] = "features"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeaturesBlock":
        return cls(
            id=_block_id(data),
            heading=_text(data, "heading"),
            features=[
                FeatureItem(
                    title=_text(item, "title"),
                    description=_text(item, "description"),
                )
                for item in _dicts(data, "features")
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "heading": self.heading,
            "features": [item.to_dict() for item in self.features],
        }


@dataclass
class UnknownBlock:
    """A block whose type this version does not know; stored data is kept as-is."""

    id: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data)


Block = Union[HeroBlock, FeatureSplitBlock, ValuesGridBlock, FeaturesBlock]
AnyBlock = Union[Block, UnknownBlock]

BLOCK_CLASSES = {
    HeroBlock.type: HeroBlock,
    FeatureSplitBlock.type: FeatureSplitBlock,
    ValuesGridBlock.type: ValuesGridBlock,
    FeaturesBlock.type: FeaturesBlock,
}


def new_block(block_type: str) -> Block:
    """Create a block of ``block_type`` with a fresh id and empty defaults."""
    block_id = new_block_id()

    if block_type == "hero":
        return HeroBlock(id=block_id)
    if block_type == "feature_split":
        return FeatureSplitBlock(id=block_id)
    if block_type == "values_grid":
        return ValuesGridBlock(id=block_id, items=[ValueItem(), ValueItem(), ValueItem()])
    if block_type == "features":
        return FeaturesBlock(id=block_id)

    raise InvariantViolation(f"Unknown block type: {block_type}")


def block_from_dict(raw: Any) -> AnyBlock:
    if not isinstance(raw, Mapping):
        raise InvariantViolation("Block must be an object")

    block_type = raw.get("type")
    cls = BLOCK_CLASSES.get(block_type) if isinstance(block_type, str) else None
    if cls is None:
        return UnknownBlock(
            id=_block_id(raw),
            type=str(block_type),
            data=dict(raw),
        )
    return cls.from_dict(raw)


def normalize_block(raw: Any) -> Dict[str, Any]:
    return block_from_dict(raw).to_dict()


def ensure_block_ids(blocks: List[Any]) -> List[Any]:
    """Give every stored block object without an id a fresh one. Other values pass through."""
    result = []
    for raw in blocks:
        if isinstance(raw, Mapping) and not raw.get("id"):
            raw = {**raw, "id": new_block_id()}
        result.append(raw)
    return result


def load_block_list(value: Any) -> List[Dict[str, Any]]:
    """
    Read a stored block sequence.

    Stored configs may be a JSON array or a JSON-encoded string. Anything
    that does not decode to a list of objects becomes an empty list.
    """
    if value is None:
        return []

    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Stored block config is not valid JSON; treating as empty")
            return []

    if not isinstance(value, list):
        logger.warning("Stored block config is not a list (%s); treating as empty", type(value).__name__)
        return []

    return [dict(item) for item in value if isinstance(item, Mapping)]
