"""Lossless editing of HOCON-like configuration files."""

from .errors import ConfigEditError, UnterminatedSectionError
from .tokens import KeyValueToken, OpaqueToken, SectionEndToken, SectionStartToken, Token
from .lexer import ConfigTokenizer, LineKind, TokenizerConfig, classify_line, tokenize_text
from .document import ConfigDocument
from .serializer import ConfigSerializer
from .editor import ConfigEditor, EditorConfig, SectionPath
from .endpoints import EndPoint, ManagerConfig, NodeConfigManager, NodeEndpointKind, Protocol, split_address

__all__ = [
    "ConfigEditError",
    "UnterminatedSectionError",
    "KeyValueToken",
    "OpaqueToken",
    "SectionEndToken",
    "SectionStartToken",
    "Token",
    "ConfigTokenizer",
    "LineKind",
    "TokenizerConfig",
    "classify_line",
    "tokenize_text",
    "ConfigDocument",
    "ConfigSerializer",
    "ConfigEditor",
    "EditorConfig",
    "SectionPath",
    "EndPoint",
    "ManagerConfig",
    "NodeConfigManager",
    "NodeEndpointKind",
    "Protocol",
    "split_address",
]
