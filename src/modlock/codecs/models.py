"""
Default codec for lockfile document models.

Handles every pydantic ``BaseModel`` subclass by walking its declared
``model_fields``; nothing is discovered from instance attributes at runtime, so the
persisted field set of each type is exactly its declaration.

- Encode: fields in declaration order under their alias; ``None`` values
  are omitted when the field defaults to ``None`` and written as ``null`` otherwise,
  so a ``None`` that differs from the default survives a round trip.
- Decode: known keys are decoded with the codec for the field's declared type,
  then the model is validated (pydantic.ValidationError on constraint failures).
  Missing keys fall back to field defaults. Unknown keys are ignored.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from pydantic import BaseModel

from ..core.errors import LockfileParseError
from .base import Codec, JsonValue, decoding_at
from .registry import CodecRegistry

__all__ = ["ModelCodecFactory"]

logger = logging.getLogger(__name__)


class _ModelCodec:
    def __init__(
        self, model: type[BaseModel], fields: list[tuple[str, str, Codec[Any], bool]]
    ) -> None:
        self.model = model
        # (attribute name, wire key, codec, omit when None)
        self.fields = fields

    def encode(self, value: BaseModel) -> JsonValue:
        out: dict[str, JsonValue] = {}
        for name, key, codec, omit_none in self.fields:
            attr = getattr(value, name)
            if attr is None:
                if not omit_none:
                    out[key] = None
                continue
            out[key] = codec.encode(attr)
        return out

    def decode(self, raw: JsonValue) -> BaseModel:
        if not isinstance(raw, dict):
            raise LockfileParseError(
                f"Expected a JSON object for {self.model.__name__} in the lockfile, got {raw!r}",
                raw=raw,
            )
        values: dict[str, Any] = {}
        for name, key, codec, _ in self.fields:
            if key not in raw:
                continue
            with decoding_at(key):
                values[name] = codec.decode(raw[key])
        unknown = set(raw) - {key for _, key, _, _ in self.fields}
        if unknown:
            logger.debug("ignoring unknown %s keys: %s", self.model.__name__, sorted(unknown))
        return self.model.model_validate(values)


class ModelCodecFactory:
    """Codec factory for pydantic models, driven by their declared fields."""

    def create(self, registry: CodecRegistry, tp: Any) -> Codec[Any] | None:
        if not (inspect.isclass(tp) and issubclass(tp, BaseModel)):
            return None
        fields = [
            (name, info.alias or name, registry.codec_for(info.annotation), info.default is None)
            for name, info in tp.model_fields.items()
        ]
        return _ModelCodec(tp, fields)
