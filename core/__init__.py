from core.assembler import MessageAssembler
from core.fields import parse_field_line, resolve_field
from core.text import resolve_text

__all__ = ["MessageAssembler", "parse_field_line", "resolve_field", "resolve_text"]
