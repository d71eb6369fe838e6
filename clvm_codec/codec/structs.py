from __future__ import annotations

import dataclasses
from typing import Any

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.base import Codec, check_depth, decode_child
from clvm_codec.codec.representation import Repr, frame, unframe
from clvm_codec.errors import ToClvmError


class StructCodec(Codec):
    """Encodes a dataclass as its fields, in declaration order, framed by
    `representation`.

    Field codecs are bound after construction so a type can refer to itself
    (e.g. through `Option`) while its codec is still being resolved.
    """

    def __init__(self, cls: type, representation: Repr):
        self.cls = cls
        self.name = cls.__name__
        self.representation = representation
        self.fields: list[tuple[str, Codec]] | None = None

    def bind(self, fields: list[tuple[str, Codec]]) -> None:
        self.fields = fields

    @property
    def field_count(self) -> int:
        if self.fields is not None:
            return len(self.fields)
        return len(dataclasses.fields(self.cls))

    @property
    def nil_encodable(self) -> bool:
        count = self.field_count
        if self.representation is Repr.CURRY:
            return False
        if self.representation is Repr.LIST:
            return count == 0
        # tuple: a newtype encodes as its only field
        if count == 1:
            return self.fields is None or self.fields[0][1].nil_encodable
        return count == 0

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, self.cls):
            raise ToClvmError(f"{self.name} expected, got {type(value).__name__}")
        nodes = []
        for name, codec in self.fields:
            try:
                nodes.append(codec.encode(a, getattr(value, name)))
            except ToClvmError as e:
                raise ToClvmError(f"{self.name}.{name}: {e}") from e
        return frame(a, self.representation, nodes)

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        check_depth(depth)
        nodes = unframe(a, self.representation, node, len(self.fields))
        kwargs = {
            name: decode_child(codec, a, n, depth, name)
            for (name, codec), n in zip(self.fields, nodes)
        }
        return self.cls(**kwargs)

    def __repr__(self) -> str:
        return f"<{self.name} {self.representation.value}>"
