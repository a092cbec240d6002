import logging
from typing import List, Optional

import libcst as cst
from libcst.metadata import ParentNodeProvider

from typeweave.spec import UsageContext

log = logging.getLogger(__name__)

# A usage grows upward through these ancestors and stops at anything else.
CALL_LIKE = (cst.Call,)
BINARY = (cst.BinaryOperation, cst.BooleanOperation, cst.Comparison)
DECLARATION = (cst.Assign, cst.AnnAssign, cst.AugAssign, cst.NamedExpr)
USAGE_ANCESTORS = CALL_LIKE + BINARY + DECLARATION

SYNTAX_NODES = (cst.BaseExpression, cst.BaseSmallStatement, cst.BaseStatement)


def find_first_name(node: cst.CSTNode) -> Optional[cst.Name]:
    if isinstance(node, cst.Name):
        return node
    for child in node.children:
        found = find_first_name(child)
        if found is not None:
            return found
    return None


class UsageScanVisitor(cst.CSTVisitor):
    """
    Collects the statements that mention `name`, skipping the first mention,
    which is taken to be its declaration. Names are matched by text only.
    """

    METADATA_DEPENDENCIES = (ParentNodeProvider,)

    def __init__(self, name: str):
        self.name = name
        self.usages: List[cst.BaseStatement] = []
        self._seen_declaration = False

    def _enclosing(self, node: cst.CSTNode) -> Optional[cst.CSTNode]:
        # Connector nodes like Arg, Element or AssignTarget are passed through.
        parent = self.get_metadata(ParentNodeProvider, node, None)
        while parent is not None and not isinstance(parent, SYNTAX_NODES):
            parent = self.get_metadata(ParentNodeProvider, parent, None)
        return parent

    def _in_import(self, node: cst.CSTNode) -> bool:
        parent = self.get_metadata(ParentNodeProvider, node, None)
        while parent is not None and not isinstance(
            parent, (cst.BaseSmallStatement, cst.BaseStatement)
        ):
            parent = self.get_metadata(ParentNodeProvider, parent, None)
        return isinstance(parent, (cst.Import, cst.ImportFrom))

    def _usage_node(self, node: cst.Name) -> cst.CSTNode:
        current = self._enclosing(node)
        if not isinstance(
            current, (cst.BaseExpression, cst.BaseSmallStatement)
        ) or self._in_import(node):
            # Parameters, loop targets, imported names and the like.
            return node

        while True:
            parent = self._enclosing(current)
            if not isinstance(parent, USAGE_ANCESTORS):
                return current
            current = parent

    def _as_statement(self, node: cst.CSTNode) -> cst.BaseStatement:
        if isinstance(node, cst.BaseSmallStatement):
            return cst.SimpleStatementLine(
                body=[node.with_changes(semicolon=cst.MaybeSentinel.DEFAULT)]
            )
        if isinstance(node, cst.NamedExpr) and not node.lpar:
            # A walrus is only a valid statement inside parentheses.
            node = node.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])
        return cst.SimpleStatementLine(body=[cst.Expr(value=node)])

    def visit_Name(self, node: cst.Name) -> Optional[bool]:
        if node.value != self.name:
            return False
        if not self._seen_declaration:
            self._seen_declaration = True
            return False
        self.usages.append(self._as_statement(self._usage_node(node)))
        return False


def find_usages(outer: cst.Module, inner: cst.Module) -> Optional[UsageContext]:
    ident = find_first_name(inner)
    if ident is None:
        return None

    visitor = UsageScanVisitor(ident.value)
    # The wrapper works on its own copy of `outer`.
    cst.MetadataWrapper(outer).visit(visitor)
    log.debug(f"Found {len(visitor.usages)} usage(s) of '{ident.value}'")
    return UsageContext(name=ident.value, statements=visitor.usages)


def extract_usage_context(outer: cst.Module, inner: cst.Module) -> str:
    """
    Builds a prompt snippet listing how the first name introduced by `inner`
    is used elsewhere in `outer`, e.g.::

        # Usages of 'hello' are shown below:
        print(hello("world"))

    Returns an empty string when `inner` has no name or `outer` no usages.
    """
    context = find_usages(outer, inner)
    if context is None:
        return ""
    return context.render()
