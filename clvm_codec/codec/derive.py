"""Class decorators that derive codecs from dataclass declarations.

    @clvm(Repr.LIST)
    @dataclass
    class Coin:
        parent_coin_info: Bytes32
        puzzle_hash: Bytes32
        amount: U64

    @clvm_enum(Repr.TUPLE)
    class Shape:
        pass

    @variant(discriminant=42)
    @dataclass
    class Circle(Shape):
        radius: U32

Fields are encoded in declaration order. Annotations are resolved on first
use, so a field may name a class defined further down the module. Decorated
classes gain `value.to_clvm(a)` and `Cls.from_clvm(a, node)` unless they
define their own.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import typing
from functools import partial
from typing import Any

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.base import Codec
from clvm_codec.codec.enums import (
    EnumCodec,
    TaggedEnumCodec,
    UntaggedEnumCodec,
    Variant,
    VariantCodec,
)
from clvm_codec.codec.primitives import U8
from clvm_codec.codec.registry import codec_for
from clvm_codec.codec.representation import Repr
from clvm_codec.codec.structs import StructCodec

logger = logging.getLogger(__name__)

# Re-entrant: resolving one class may resolve the classes its fields name
_lock = threading.RLock()


def _resolve_fields(cls: type) -> list[tuple[str, Codec]]:
    hints = typing.get_type_hints(cls, include_extras=True)
    fields = []
    for f in dataclasses.fields(cls):
        if not f.init:
            raise TypeError(f"{cls.__name__}.{f.name}: init=False fields cannot be decoded")
        override = f.metadata.get("clvm")
        codec = codec_for(override if override is not None else hints[f.name])
        fields.append((f.name, codec))
    return fields


def struct_codec(cls: type, representation: Repr) -> StructCodec:
    with _lock:
        cache = cls.__dict__.get("_clvm_structs")
        if cache is None:
            cache = {}
            setattr(cls, "_clvm_structs", cache)
        codec = cache.get(representation)
        if codec is not None:
            return codec
        codec = StructCodec(cls, representation)
        # publish before resolving fields so self-referencing types terminate
        cache[representation] = codec
        try:
            codec.bind(_resolve_fields(cls))
        except Exception:
            del cache[representation]
            raise
        logger.debug("derived %r with fields %s", codec, [name for name, _ in codec.fields])
        return codec


# --- Methods installed on decorated classes ---
def _to_clvm(self, a: Allocator) -> NodePtr:
    return codec_for(type(self)).encode(a, self)


def _from_clvm(cls, a: Allocator, node: NodePtr) -> Any:
    return codec_for(cls).decode(a, node)


def _install_methods(cls: type) -> None:
    if "to_clvm" not in cls.__dict__:
        cls.to_clvm = _to_clvm
    if "from_clvm" not in cls.__dict__:
        cls.from_clvm = classmethod(_from_clvm)


def _require_dataclass(cls: type, decorator: str) -> None:
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"@{decorator} expects a dataclass; apply @dataclass first to {cls.__name__}")


def clvm(cls: Any = None, representation: Repr = Repr.LIST):
    """Derive a struct codec. Usable as `@clvm`, `@clvm(Repr.TUPLE)` or
    `@clvm(representation=Repr.CURRY)`."""
    if isinstance(cls, Repr):
        cls, representation = None, cls

    def wrap(target: type) -> type:
        _require_dataclass(target, "clvm")
        target._clvm_repr = representation
        target.__clvm_codec__ = classmethod(lambda _: struct_codec(target, representation))
        _install_methods(target)
        return target

    return wrap if cls is None else wrap(cls)


def clvm_enum(
    cls: Any = None,
    representation: Repr = Repr.LIST,
    *,
    untagged: bool = False,
    discriminant: Any = U8,
):
    """Declare an enum base class. `representation` is the default framing
    for variants that do not choose their own; `discriminant` is the type of
    the tag of a tagged enum."""
    if isinstance(cls, Repr):
        cls, representation = None, cls

    def wrap(target: type) -> type:
        if untagged:
            codec: EnumCodec = UntaggedEnumCodec(target.__name__, representation)
        else:
            codec = TaggedEnumCodec(target.__name__, representation, codec_for(discriminant))
        target._clvm_enum = codec
        target.__clvm_codec__ = classmethod(lambda _: codec)
        _install_methods(target)
        return target

    return wrap if cls is None else wrap(cls)


def _enum_base(cls: type) -> EnumCodec:
    for base in cls.__mro__[1:]:
        codec = base.__dict__.get("_clvm_enum")
        if codec is not None:
            return codec
    raise TypeError(f"{cls.__name__} does not subclass a @clvm_enum class")


def variant(
    cls: Any = None,
    *,
    discriminant: int | None = None,
    representation: Repr | None = None,
):
    """Register a dataclass subclass as the next variant of its enum base.

    Variants are tried and numbered in registration order. Framing is taken
    from `representation`, else the class's own `@clvm`, else the enum's
    default.
    """

    def wrap(target: type) -> type:
        _require_dataclass(target, "variant")
        enum = _enum_base(target)
        rep = representation or target.__dict__.get("_clvm_repr") or enum.representation
        enum.add_variant(
            Variant(target, discriminant, rep, partial(struct_codec, target, rep))
        )
        codec = VariantCodec(enum, target)
        target.__clvm_codec__ = classmethod(lambda _: codec)
        _install_methods(target)
        return target

    return wrap if cls is None else wrap(cls)
