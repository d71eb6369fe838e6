"""Tagged and untagged enum codecs.

An enum is a closed union of dataclass variants registered in declaration
order. A tagged enum prefixes the variant payload with its discriminant,
``(discriminant . payload)``; an untagged enum writes the payload alone and
recovers the variant on decode by trying each one in turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.base import Codec, check_depth, decode_child
from clvm_codec.codec.primitives import Int
from clvm_codec.codec.representation import Repr
from clvm_codec.codec.structs import StructCodec
from clvm_codec.errors import (
    DepthLimitExceeded,
    ExpectedNil,
    ExpectedPair,
    FromClvmError,
    NoMatchingVariant,
    ToClvmError,
    WrongDiscriminant,
)


@dataclass
class Variant:
    cls: type
    discriminant: int | None
    representation: Repr
    # resolved lazily; field annotations may name classes defined later
    payload: Callable[[], StructCodec]

    @property
    def name(self) -> str:
        return self.cls.__name__


class EnumCodec(Codec):
    def __init__(self, name: str, representation: Repr):
        self.name = name
        self.representation = representation
        self.variants: list[Variant] = []
        self._by_cls: dict[type, Variant] = {}

    def add_variant(self, variant: Variant) -> None:
        if variant.cls in self._by_cls:
            raise TypeError(f"{variant.name} is already a variant of {self.name}")
        self.variants.append(variant)
        self._by_cls[variant.cls] = variant

    def variant_for(self, value: Any) -> Variant:
        variant = self._by_cls.get(type(value))
        if variant is None:
            raise ToClvmError(f"{type(value).__name__} is not a variant of {self.name}")
        return variant

    def _variant_of_cls(self, cls: type) -> Variant:
        return self._by_cls[cls]

    # --- Payloads ---
    def _encode_payload(self, a: Allocator, variant: Variant, value: Any) -> NodePtr:
        codec = variant.payload()
        if codec.field_count == 0:
            return a.nil()
        return codec.encode(a, value)

    def _decode_payload(
        self, a: Allocator, variant: Variant, node: NodePtr, depth: int
    ) -> Any:
        codec = variant.payload()
        if codec.field_count == 0:
            if not a.is_atom(node) or not a.is_nil(node):
                raise ExpectedNil().with_context(variant.name)
            return variant.cls()
        return decode_child(codec, a, node, depth, variant.name)

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        raise NotImplementedError

    def decode_variant(
        self, a: Allocator, node: NodePtr, cls: type, depth: int = 0
    ) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class TaggedEnumCodec(EnumCodec):
    nil_encodable = False

    def __init__(self, name: str, representation: Repr, discriminant: Codec):
        super().__init__(name, representation)
        self.discriminant = discriminant
        self._by_discriminant: dict[int, Variant] = {}

    def add_variant(self, variant: Variant) -> None:
        if variant.discriminant is None:
            # implicit values continue from the previous variant
            variant.discriminant = (
                self.variants[-1].discriminant + 1 if self.variants else 0
            )
        d = variant.discriminant
        if isinstance(self.discriminant, Int) and not (
            self.discriminant.min <= d <= self.discriminant.max
        ):
            raise TypeError(f"discriminant {d} of {variant.name} does not fit {self.discriminant!r}")
        if d in self._by_discriminant:
            raise TypeError(
                f"{variant.name} reuses discriminant {d} of {self._by_discriminant[d].name}"
            )
        super().add_variant(variant)
        self._by_discriminant[d] = variant

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        variant = self.variant_for(value)
        tag = self.discriminant.encode(a, variant.discriminant)
        return a.new_pair(tag, self._encode_payload(a, variant, value))

    def _split(self, a: Allocator, node: NodePtr, depth: int) -> tuple[Variant, NodePtr]:
        check_depth(depth)
        if not a.is_pair(node):
            raise ExpectedPair()
        tag, payload = a.pair(node)
        d = decode_child(self.discriminant, a, tag, depth, "discriminant")
        variant = self._by_discriminant.get(d)
        if variant is None:
            raise WrongDiscriminant(d)
        return variant, payload

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        variant, payload = self._split(a, node, depth)
        return self._decode_payload(a, variant, payload, depth)

    def decode_variant(
        self, a: Allocator, node: NodePtr, cls: type, depth: int = 0
    ) -> Any:
        variant, payload = self._split(a, node, depth)
        if variant.cls is not cls:
            raise WrongDiscriminant(variant.discriminant)
        return self._decode_payload(a, variant, payload, depth)


class UntaggedEnumCodec(EnumCodec):
    def __init__(self, name: str, representation: Repr):
        super().__init__(name, representation)
        # set once nil_encodable has answered False
        self._sealed = False

    def add_variant(self, variant: Variant) -> None:
        if self._sealed:
            raise TypeError(
                f"cannot add {variant.name} to {self.name}: the enum is already in use "
                f"by a codec that depends on its variants"
            )
        super().add_variant(variant)

    @property
    def nil_encodable(self) -> bool:
        for variant in self.variants:
            codec = variant.payload()
            if codec.field_count == 0 or codec.nil_encodable:
                return True
        # an Option may now wrap this enum; a later nil variant would break it
        self._sealed = True
        return False

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        return self._encode_payload(a, self.variant_for(value), value)

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        check_depth(depth)
        last_error: FromClvmError | None = None
        for variant in self.variants:
            try:
                return self._decode_payload(a, variant, node, depth)
            except DepthLimitExceeded:
                raise
            except FromClvmError as e:
                last_error = e
        raise NoMatchingVariant(self.name) from last_error

    def decode_variant(
        self, a: Allocator, node: NodePtr, cls: type, depth: int = 0
    ) -> Any:
        check_depth(depth)
        return self._decode_payload(a, self._variant_of_cls(cls), node, depth)


class VariantCodec(Codec):
    """Codec for a field or value typed as one specific variant.

    Encodes exactly as the enclosing enum would (tag included) and only
    accepts that variant when decoding.
    """

    def __init__(self, enum: EnumCodec, cls: type):
        self.enum = enum
        self.cls = cls

    @property
    def nil_encodable(self) -> bool:
        if isinstance(self.enum, TaggedEnumCodec):
            return False
        codec = self.enum._variant_of_cls(self.cls).payload()
        return codec.field_count == 0 or codec.nil_encodable

    def encode(self, a: Allocator, value: Any) -> NodePtr:
        if not isinstance(value, self.cls):
            raise ToClvmError(f"{self.cls.__name__} expected, got {type(value).__name__}")
        return self.enum.encode(a, value)

    def decode(self, a: Allocator, node: NodePtr, depth: int = 0) -> Any:
        return self.enum.decode_variant(a, node, self.cls, depth)

    def __repr__(self) -> str:
        return f"<{self.enum.name}.{self.cls.__name__}>"
