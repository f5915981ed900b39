"""Go AST extractor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yake.parsing.treesitter import (
    FunctionInfo,
    ImportInfo,
    ParseResult,
    collect_error_ranges,
    get_parser,
    has_parse_errors,
    node_end_line,
    node_line,
    node_text,
)

if TYPE_CHECKING:
    import tree_sitter

_HEADER_NODE_TYPES = frozenset({"package_clause", "import_declaration", "comment"})

# Wrappers around a receiver's named type: ``*T`` and ``(T)``.
_TYPE_WRAPPERS = frozenset({"pointer_type", "parenthesized_type"})


class GoExtractor:
    language = "go"

    def extract(self, source: bytes) -> ParseResult:
        """Parse source and extract package, imports and function declarations."""
        tree = get_parser(self.language).parse(source)
        root = tree.root_node

        return ParseResult(
            language=self.language,
            package=self.extract_package(root),
            functions=self.extract_functions(root),
            imports=self.extract_imports(root),
            has_errors=has_parse_errors(root),
            header_has_errors=self.header_has_errors(root),
            error_ranges=collect_error_ranges(root),
        )

    def extract_package(self, root: tree_sitter.Node) -> str:
        for child in root.children:
            if child.type == "package_clause":
                for sub in child.named_children:
                    if sub.type == "package_identifier":
                        return node_text(sub)
        return ""

    def extract_functions(self, root: tree_sitter.Node) -> list[FunctionInfo]:
        results: list[FunctionInfo] = []
        for child in root.children:
            if child.type == "function_declaration":
                results.append(self._parse_function(child))
            elif child.type == "method_declaration":
                results.append(self._parse_method(child))
        return results

    def extract_imports(self, root: tree_sitter.Node) -> list[ImportInfo]:
        results: list[ImportInfo] = []
        for child in root.children:
            if child.type == "import_declaration":
                for sub in child.children:
                    if sub.type == "import_spec":
                        results.append(self._parse_import_spec(sub))
                    elif sub.type == "import_spec_list":
                        results.extend(
                            self._parse_import_spec(spec)
                            for spec in sub.children
                            if spec.type == "import_spec"
                        )
        return results

    def header_has_errors(self, root: tree_sitter.Node) -> bool:
        """Report syntax errors in the package clause or import block.

        Anything after the last import declaration is ignored, so a file
        whose body does not parse still answers import questions.
        """
        children = list(root.children)
        header_end = -1
        for index, child in enumerate(children):
            if child.type in {"package_clause", "import_declaration"}:
                header_end = index
        if header_end < 0 or not any(c.type == "package_clause" for c in children):
            return True
        for child in children[: header_end + 1]:
            if child.type not in _HEADER_NODE_TYPES or child.has_error:
                return True
        return False

    def _parse_function(self, node: tree_sitter.Node) -> FunctionInfo:
        info = FunctionInfo(
            name=node_text(node.child_by_field_name("name")),
            start_line=node_line(node),
            end_line=node_end_line(node),
        )
        self._attach_body(info, node.child_by_field_name("body"))
        return info

    def _parse_method(self, node: tree_sitter.Node) -> FunctionInfo:
        info = FunctionInfo(
            name=node_text(node.child_by_field_name("name")),
            start_line=node_line(node),
            end_line=node_end_line(node),
            receiver=self._receiver_type(node.child_by_field_name("receiver")),
        )
        self._attach_body(info, node.child_by_field_name("body"))
        return info

    @staticmethod
    def _attach_body(info: FunctionInfo, body: tree_sitter.Node | None) -> None:
        if body is None:
            return
        info.body_start = node_line(body)
        info.body_end = node_end_line(body)

    def _receiver_type(self, receiver: tree_sitter.Node | None) -> str | None:
        if receiver is None:
            return None
        for param in receiver.named_children:
            if param.type == "parameter_declaration":
                return self._base_type_name(param.child_by_field_name("type")) or None
        return None

    def _base_type_name(self, node: tree_sitter.Node | None) -> str:
        while node is not None:
            if node.type == "type_identifier":
                return node_text(node)
            if node.type in _TYPE_WRAPPERS:
                node = node.named_children[0] if node.named_children else None
            elif node.type == "generic_type":
                node = node.child_by_field_name("type")
            elif node.type == "qualified_type":
                node = node.child_by_field_name("name")
            else:
                return node_text(node).lstrip("*")
        return ""

    def _parse_import_spec(self, spec: tree_sitter.Node) -> ImportInfo:
        path_node = spec.child_by_field_name("path")
        name_node = spec.child_by_field_name("name")
        module = node_text(path_node).strip('"`') if path_node else ""
        alias = node_text(name_node) if name_node else None
        return ImportInfo(module=module, alias=alias, start_line=node_line(spec))
