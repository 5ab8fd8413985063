"""In-memory AstNode implementation for building canned trees in tests.

Part of the public API: code built on ccouple can drive the analyzer with
hand-made trees instead of libclang.
"""

from ccouple.ast_provider import NodeKind
from ccouple.models import SourceLocation

# Kinds that never act as a semantic parent of the nodes below them.
_NON_CONTEXT_KINDS = {
    NodeKind.VAR_DECL,
    NodeKind.DECL_REF_EXPR,
    NodeKind.COMPOUND_STMT,
    NodeKind.OTHER,
}


class FakeNode:
    """A hand-built AST node.

    The semantic parent defaults to the nearest lexical ancestor that can hold
    declarations, which matches how clang reports locals declared inside a
    function body. Pass ``semantic_parent`` to override it.
    """

    def __init__(
        self,
        kind: NodeKind,
        spelling: str = "",
        location: SourceLocation | None = None,
        children: list["FakeNode"] | None = None,
        definition: "FakeNode | None" = None,
        semantic_parent: "FakeNode | None" = None,
        kind_name: str | None = None,
    ):
        self._kind = kind
        self._kind_name = kind_name or kind.name
        self._spelling = spelling
        self._location = location
        self._definition = definition
        self._semantic_parent = semantic_parent
        self.lexical_parent: FakeNode | None = None
        self._children: list[FakeNode] = []
        for child in children or []:
            self.add(child)

    def add(self, child: "FakeNode") -> "FakeNode":
        child.lexical_parent = self
        self._children.append(child)
        return child

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def kind_name(self) -> str:
        return self._kind_name

    @property
    def spelling(self) -> str:
        return self._spelling

    @property
    def location(self) -> SourceLocation | None:
        return self._location

    @property
    def semantic_parent(self) -> "FakeNode | None":
        if self._semantic_parent is not None:
            return self._semantic_parent
        parent = self.lexical_parent
        while parent is not None and parent.kind in _NON_CONTEXT_KINDS:
            parent = parent.lexical_parent
        return parent

    def children(self) -> list["FakeNode"]:
        return list(self._children)

    def definition(self) -> "FakeNode | None":
        return self._definition

    def __repr__(self):
        return f"FakeNode({self._kind_name} {self._spelling!r} at {self._location})"


def loc(file: str, line: int, column: int = 1) -> SourceLocation:
    return SourceLocation(file=file, line=line, column=column)


def translation_unit(*children: FakeNode, name: str = "main.c") -> FakeNode:
    return FakeNode(NodeKind.TRANSLATION_UNIT, name, children=list(children))


def var(name: str, location: SourceLocation, *children: FakeNode) -> FakeNode:
    return FakeNode(NodeKind.VAR_DECL, name, location, children=list(children))


def function(name: str, location: SourceLocation, *children: FakeNode) -> FakeNode:
    return FakeNode(NodeKind.FUNCTION_DECL, name, location, children=list(children))


def body(*children: FakeNode) -> FakeNode:
    return FakeNode(NodeKind.COMPOUND_STMT, children=list(children))


def ref(name: str, location: SourceLocation, target: FakeNode | None = None) -> FakeNode:
    return FakeNode(NodeKind.DECL_REF_EXPR, name, location, definition=target)


def other(
    kind_name: str,
    *children: FakeNode,
    spelling: str = "",
    location: SourceLocation | None = None,
) -> FakeNode:
    return FakeNode(NodeKind.OTHER, spelling, location, children=list(children), kind_name=kind_name)
