import json

from clvm_codec.allocator import Allocator, NodePtr
from clvm_codec.codec.primitives import atom_to_int, int_to_atom

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_INT = "\033[94m"
COLOR_STRING = "\033[92m"
COLOR_HEX = "\033[95m"
COLOR_NIL = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_depth": 64,
    "max_int_bytes": 2,
    "color": False,
}


# ----------------- Atom rendering -----------------
def _paint(text: str, color: str, options: dict) -> str:
    if options.get("color", False):
        return f"{color}{text}{RESET}"
    return text


def format_atom(blob: bytes, options: dict = DEFAULT_OPTIONS) -> str:
    if not blob:
        return _paint("()", COLOR_NIL, options)
    # only canonical integers print as numbers, so the text round-trips
    if len(blob) <= options.get("max_int_bytes", 2) and int_to_atom(atom_to_int(blob)) == blob:
        return _paint(str(atom_to_int(blob)), COLOR_INT, options)
    if len(blob) > 1 and all(0x20 <= b < 0x7F and b not in b'"\\' for b in blob):
        return _paint(f'"{blob.decode("ascii")}"', COLOR_STRING, options)
    return _paint("0x" + blob.hex(), COLOR_HEX, options)


# ----------------- Node printer -----------------
def disassemble(
    a: Allocator,
    node: NodePtr,
    options: dict = DEFAULT_OPTIONS,
    _current_depth: int = 0,
) -> str:
    """Render `node` as Lisp text: `(52 -32)`, `(1 . 2)`, `"hello"`."""
    if a.is_atom(node):
        return format_atom(a.atom(node), options)

    if _current_depth >= options.get("max_depth", 64):
        return "…"

    parts = []
    while a.is_pair(node):
        first, node = a.pair(node)
        parts.append(disassemble(a, first, options, _current_depth + 1))
    if not a.is_nil(node):
        parts.append(".")
        parts.append(format_atom(a.atom(node), options))
    return "(" + " ".join(parts) + ")"


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    user_opts = json.loads(json_str)
    unknown = set(user_opts) - set(DEFAULT_OPTIONS)
    if unknown:
        raise ValueError(f"unknown pprint options: {sorted(unknown)}")
    return {**DEFAULT_OPTIONS, **user_opts}
