"""Tree-sitter powered C# workspace."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from tree_sitter import Language, Node, Parser

from .base import BuildToolchain, Declaration, DeclaredSymbol, ModuleHandle, Workspace
from .msbuild import load_modules
from .registry import TOOLCHAIN_NAME, registered_language
from ..descriptors import SOURCE_SUFFIX, classify_descriptor
from ..logging import get_logger

_LOGGER = get_logger("toolchain.tree_sitter")

# Member declaration syntax kinds mapped to the symbol kind they declare.
_SYMBOL_KINDS = {
    "class_declaration": "Class",
    "struct_declaration": "Struct",
    "interface_declaration": "Interface",
    "enum_declaration": "Enum",
    "record_declaration": "Record",
    "record_struct_declaration": "Record",
    "delegate_declaration": "Delegate",
    "method_declaration": "Method",
    "constructor_declaration": "Constructor",
    "destructor_declaration": "Destructor",
    "operator_declaration": "Operator",
    "conversion_operator_declaration": "Operator",
    "property_declaration": "Property",
    "indexer_declaration": "Indexer",
    "event_declaration": "Event",
    "field_declaration": "Field",
    "event_field_declaration": "Event",
}

# These declare one or more variables and so resolve to no single symbol.
_MULTI_VARIABLE_KINDS = {"field_declaration", "event_field_declaration"}

_CONTAINER_KINDS = {"declaration_list", "enum_member_declaration_list"}


class TreeSitterToolchain(BuildToolchain):
    """Opens workspaces whose compilation units are parsed with tree-sitter.

    The grammar comes from the process-wide registration unless a language is
    passed explicitly.
    """

    name = TOOLCHAIN_NAME

    def __init__(self, language: Optional[Language] = None) -> None:
        self._language = language

    def open_workspace(self, path: Path) -> Workspace:
        language = self._language or registered_language()
        kind = classify_descriptor(path)
        modules = load_modules(path, kind)
        _LOGGER.debug("Opened %s with %d module(s)", path, len(modules))
        return TreeSitterWorkspace(path, kind, modules, Parser(language))


class TreeSitterWorkspace(Workspace):
    def __init__(
        self, path: Path, kind: str, modules: Sequence[ModuleHandle], parser: Parser
    ) -> None:
        super().__init__(path, kind)
        self._modules: List[ModuleHandle] = list(modules)
        self._parser: Optional[Parser] = parser

    def enumerate_modules(self) -> Sequence[ModuleHandle]:
        return list(self._modules)

    def enumerate_declarations(self, module: ModuleHandle) -> Iterator[Declaration]:
        parser = self._require_parser()
        for document in module.documents:
            if document.suffix.lower() != SOURCE_SUFFIX:
                continue
            try:
                source = document.read_bytes()
            except OSError as exc:
                _LOGGER.warning("Could not read compilation unit %s: %s", document, exc)
                continue
            tree = parser.parse(source)
            yield from self._collect(tree.root_node, None, document, source)

    def resolve_symbol(self, declaration: Declaration) -> Optional[DeclaredSymbol]:
        kind = declaration.syntax_kind
        if kind in _MULTI_VARIABLE_KINDS or kind not in _SYMBOL_KINDS:
            return None
        name = self._symbol_name(declaration.node, declaration.source)
        if not name:
            return None
        return DeclaredSymbol(
            name=name,
            kind=_SYMBOL_KINDS[kind],
            namespace=declaration.namespace,
            declaration=declaration,
        )

    def get_doc_comment(self, symbol: DeclaredSymbol) -> Optional[str]:
        source = symbol.declaration.source
        lines: List[str] = []
        for comment in _leading_doc_comments(symbol.declaration.node, source):
            lines.extend(_strip_comment_markers(_text(comment, source)))
        markup = "\n".join(lines).strip()
        return markup or None

    def close(self) -> None:
        self._parser = None
        self._modules = []

    def _require_parser(self) -> Parser:
        if self._parser is None:
            raise RuntimeError("Workspace has been closed")
        return self._parser

    def _collect(
        self, node: Node, namespace: Optional[str], path: Path, source: bytes
    ) -> Iterator[Declaration]:
        current = namespace
        for child in node.named_children:
            kind = child.type
            if kind == "namespace_declaration":
                scoped = _join(namespace, _text(child.child_by_field_name("name"), source))
                body = child.child_by_field_name("body")
                if body is not None:
                    yield from self._collect(body, scoped, path, source)
            elif kind == "file_scoped_namespace_declaration":
                # Members follow as siblings in some grammar versions and as
                # children in others.
                current = _join(namespace, _text(child.child_by_field_name("name"), source))
                yield from self._collect(child, current, path, source)
            elif kind in _SYMBOL_KINDS:
                yield Declaration(
                    syntax_kind=kind,
                    modifiers=tuple(
                        _text(item, source) for item in child.children if item.type == "modifier"
                    ),
                    namespace=current,
                    source_path=path,
                    node=child,
                    source=source,
                )
                yield from self._collect(child, current, path, source)
            elif kind in _CONTAINER_KINDS:
                yield from self._collect(child, current, path, source)

    @staticmethod
    def _symbol_name(node: Node, source: bytes) -> str:
        kind = node.type
        if kind == "indexer_declaration":
            return "this[]"
        if kind == "operator_declaration":
            operator = node.child_by_field_name("operator")
            return f"operator {_text(operator, source)}".strip()
        if kind == "conversion_operator_declaration":
            target = node.child_by_field_name("type")
            return f"operator {_text(target, source)}".strip()
        name = _text(node.child_by_field_name("name"), source)
        if kind == "destructor_declaration" and name:
            return f"~{name}"
        return name


# Directives that never contain declarations; #if blocks are not skipped.
_SKIPPED_DIRECTIVES = frozenset(
    {
        "preproc_define",
        "preproc_endregion",
        "preproc_error",
        "preproc_line",
        "preproc_nullable",
        "preproc_pragma",
        "preproc_region",
        "preproc_undef",
        "preproc_warning",
    }
)


def _leading_doc_comments(node: Node, source: bytes) -> List[Node]:
    comments: List[Node] = []
    sibling = node.prev_sibling
    while sibling is not None and _is_trivia(sibling):
        if _is_doc_node(sibling, source):
            comments.append(sibling)
        sibling = sibling.prev_sibling
    if not comments and sibling is not None:
        # A comment can end up as the trailing child of the previous node.
        comments = _trailing_doc_comments(sibling, source)
    comments.reverse()
    return comments


def _trailing_doc_comments(node: Node, source: bytes) -> List[Node]:
    children = node.children
    collected: List[Node] = []
    index = len(children) - 1
    while index >= 0 and _is_trivia(children[index]):
        if _is_doc_node(children[index], source):
            collected.append(children[index])
        index -= 1
    if collected or index < 0:
        return collected
    if index == len(children) - 1:
        return _trailing_doc_comments(children[index], source)
    return []


def _is_trivia(node: Node) -> bool:
    """Plain comments and simple directives may sit between a doc block and its member."""
    return node.type == "comment" or node.type in _SKIPPED_DIRECTIVES


def _is_doc_node(node: Node, source: bytes) -> bool:
    return node.type == "comment" and _is_doc_comment(_text(node, source))


def _is_doc_comment(text: str) -> bool:
    return (text.startswith("///") and not text.startswith("////")) or (
        text.startswith("/**") and text != "/**/"
    )


def _strip_comment_markers(text: str) -> List[str]:
    if text.startswith("///"):
        lines = []
        for line in text.splitlines():
            stripped = line.strip()
            if stripped.startswith("///"):
                stripped = stripped[3:]
            lines.append(stripped[1:] if stripped.startswith(" ") else stripped)
        return lines
    body = text[3:]
    if body.endswith("*/"):
        body = body[:-2]
    lines = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:].lstrip()
        lines.append(stripped)
    return lines


def _text(node: Optional[Node], source: bytes) -> str:
    if node is None:
        return ""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore").strip()


def _join(namespace: Optional[str], name: str) -> Optional[str]:
    if not name:
        return namespace
    return f"{namespace}.{name}" if namespace else name


__all__ = ["TreeSitterToolchain", "TreeSitterWorkspace"]
