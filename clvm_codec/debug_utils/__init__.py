from .pprint import disassemble, format_atom

__all__ = ["disassemble", "format_atom"]
