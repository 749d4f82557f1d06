"""
TypeScript syntax tree to TypeBox IR visitor.

Phase 2 of the pipeline: walk the top-level statements of a parsed file
and build one IR declaration per statement. Dispatch is table driven,
keyed by tree-sitter node type; anything without a handler is passed
through verbatim with a diagnostic.
"""

from __future__ import annotations

from collections.abc import Callable

from tree_sitter import Node

from ...logging import get_logger
from ..source_ast.parser import has_token, named_children, node_line, node_text, preceding_comment
from .context import DiagnosticKind, GenerationContext
from .ir_nodes import (
    ArrayLiteral,
    Call,
    Declaration,
    EnumDeclaration,
    Expr,
    Field,
    GenericCall,
    NamespaceDeclaration,
    ObjectLiteral,
    Raw,
    RawDeclaration,
    Recursive,
    Ref,
    SchemaOptions,
    SourceModule,
    TypeDeclaration,
    attach_options,
)
from .jsdoc import discarded_tags, extract_schema_options
from .recursion import is_recursive_type
from .reference_resolver import IndexedAccessResolver

logger = get_logger("visitor")

# Keyword types and their zero-argument TypeBox constructors
PRIMITIVES = {
    "string": "String",
    "number": "Number",
    "boolean": "Boolean",
    "bigint": "BigInt",
    "any": "Any",
    "unknown": "Unknown",
    "never": "Never",
    "undefined": "Undefined",
    "void": "Void",
    "null": "Null",
    "symbol": "Symbol",
}

# Builtin generic types with a TypeBox counterpart of the same name
BUILTIN_GENERICS = {
    "Array",
    "Record",
    "Partial",
    "Required",
    "Omit",
    "Pick",
    "Promise",
    "ReturnType",
    "InstanceType",
    "Parameters",
    "ConstructorParameters",
    "Exclude",
    "Extract",
}

# Statements emitted as-is without a diagnostic
VERBATIM_STATEMENTS = {"function_declaration", "class_declaration", "abstract_class_declaration"}

# Statements that produce no output
SKIPPED_STATEMENTS = {"comment", "empty_statement"}


def _wrap_modifiers(expr: Expr, readonly: bool, optional: bool) -> Expr:
    """Apply the readonly/optional matrix as a single wrapper."""
    if readonly and optional:
        return Call("ReadonlyOptional", (expr,))
    if readonly:
        return Call("Readonly", (expr,))
    if optional:
        return Call("Optional", (expr,))
    return expr


class TypeBoxVisitor:
    """Builds TypeBox IR from a TypeScript syntax tree."""

    def __init__(self, context: GenerationContext):
        """
        Initialize the visitor.

        Args:
            context: Traversal state for this generation call
        """
        self.context = context
        self.resolver = IndexedAccessResolver(context)

        self._statement_handlers: dict[str, Callable[..., Declaration | None]] = {
            "type_alias_declaration": self._type_alias_declaration,
            "interface_declaration": self._interface_declaration,
            "enum_declaration": self._enum_declaration,
            "internal_module": self._module_declaration,
            "module": self._module_declaration,
            "export_statement": self._export_statement,
            "expression_statement": self._expression_statement,
        }

        self._type_handlers: dict[str, Callable[[Node], Expr]] = {
            "predefined_type": self._predefined_type,
            "type_identifier": self._type_identifier,
            "nested_type_identifier": self._nested_type_identifier,
            "generic_type": self._generic_type,
            "literal_type": self._literal_type,
            "array_type": self._array_type,
            "tuple_type": self._tuple_type,
            "union_type": self._union_type,
            "intersection_type": self._intersection_type,
            "object_type": self._object_type,
            "function_type": self._function_type,
            "constructor_type": self._constructor_type,
            "index_type_query": self._keyof_type,
            "readonly_type": self._readonly_type,
            "lookup_type": self.resolver.resolve,
            "parenthesized_type": self._parenthesized_type,
            "conditional_type": self._conditional_type,
            "rest_type": self._rest_type,
            "optional_type": self._optional_type,
            "required_parameter": self._named_tuple_member,
            "optional_parameter": self._named_tuple_member,
        }

    # ----------------------------------------------------------------------
    # Statements
    # ----------------------------------------------------------------------

    def visit_program(self, root: Node) -> SourceModule:
        """
        Visit all top-level statements of a file in source order.

        Args:
            root: The program node

        Returns:
            SourceModule with one declaration per emitted statement
        """
        module = SourceModule()
        for statement in root.named_children:
            declaration = self.visit_statement(statement, top_level=True)
            if declaration is not None:
                module.declarations.append(declaration)
        module.uses_typebox = self.context.uses_typebox
        module.uses_generics = self.context.uses_generics
        return module

    def visit_statement(
        self,
        node: Node,
        top_level: bool = True,
        exported: bool = False,
        anchor: Node | None = None,
    ) -> Declaration | None:
        """
        Visit one statement.

        Args:
            node: The statement node
            top_level: Whether the statement is at file level (registry eligible)
            exported: Whether the statement is wrapped in `export`
            anchor: Node whose preceding comment documents this statement

        Returns:
            The IR declaration, or None for statements with no output
        """
        if node.type in SKIPPED_STATEMENTS:
            return None
        if node.type in VERBATIM_STATEMENTS:
            text = node_text(node)
            return RawDeclaration(text=f"export {text}" if exported else text)

        handler = self._statement_handlers.get(node.type)
        if handler is None:
            return self._unsupported_statement(node)
        return handler(node, top_level=top_level, exported=exported, anchor=anchor or node)

    def _export_statement(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration | None:
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            return self._unsupported_statement(node)
        return self.visit_statement(declaration, top_level=top_level, exported=True, anchor=anchor)

    def _expression_statement(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration | None:
        # `namespace A {}` at statement level parses as an expression statement
        inner = named_children(node)
        if len(inner) == 1 and inner[0].type == "internal_module":
            return self._module_declaration(inner[0], top_level=top_level, exported=exported, anchor=anchor)
        return self._unsupported_statement(node)

    def _type_alias_declaration(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration:
        self.context.uses_typebox = True
        name = node_text(node.child_by_field_name("name"))
        type_parameters = self._type_parameters(node)

        body = self.visit_type(node.child_by_field_name("value"))
        body = self._with_options(body, self._doc_options(anchor), node)
        if is_recursive_type(node):
            body = Recursive(name=name, body=body)

        return self._finish_type_declaration(name, exported, body, type_parameters, top_level)

    def _interface_declaration(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration:
        self.context.uses_typebox = True
        name = node_text(node.child_by_field_name("name"))
        type_parameters = self._type_parameters(node)

        heritage = [self._heritage_clause(clause) for clause in node.children if clause.type == "extends_type_clause"]

        own: Expr = Call("Object", (self._object_literal(node.child_by_field_name("body")),))
        own = self._with_options(own, self._doc_options(anchor), node)
        if is_recursive_type(node):
            own = Recursive(name=name, body=own)

        body = own if not heritage else Call("Intersect", (ArrayLiteral((*heritage, own)),))
        return self._finish_type_declaration(name, exported, body, type_parameters, top_level)

    def _finish_type_declaration(
        self,
        name: str,
        exported: bool,
        body: Expr,
        type_parameters: tuple[str, ...],
        top_level: bool,
    ) -> TypeDeclaration:
        if type_parameters:
            self.context.uses_generics = True
        elif top_level:
            self.context.registry.register(name, body)
            logger.debug("Registered %s for indexed access", name)
        return TypeDeclaration(name=name, exported=exported, body=body, type_parameters=type_parameters)

    def _enum_declaration(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration:
        self.context.uses_typebox = True
        name = node_text(node.child_by_field_name("name"))
        body = node.child_by_field_name("body")
        members = tuple(node_text(member) for member in named_children(body)) if body is not None else ()
        return EnumDeclaration(name=name, exported=exported, members=members)

    def _module_declaration(self, node: Node, top_level: bool, exported: bool, anchor: Node) -> Declaration:
        name = node_text(node.child_by_field_name("name"))
        keyword = "namespace" if node.type == "internal_module" else "module"
        block = node.child_by_field_name("body")

        body: list[Declaration] = []
        if block is not None:
            for statement in block.named_children:
                declaration = self.visit_statement(statement, top_level=False)
                if declaration is not None:
                    body.append(declaration)
        return NamespaceDeclaration(name=name, exported=exported, keyword=keyword, body=tuple(body))

    def _unsupported_statement(self, node: Node) -> Declaration:
        self._report_unsupported(node)
        return RawDeclaration(text=node_text(node))

    def _type_parameters(self, node: Node) -> tuple[str, ...]:
        parameters = node.child_by_field_name("type_parameters")
        if parameters is None:
            return ()
        return tuple(node_text(p.child_by_field_name("name")) for p in named_children(parameters) if p.type == "type_parameter")

    def _heritage_clause(self, clause: Node) -> Expr:
        """One `extends` clause: a single type, or an Intersect of several."""
        types = [self._heritage_type(t) for t in named_children(clause)]
        if len(types) == 1:
            return types[0]
        return Call("Intersect", (ArrayLiteral(tuple(types)),))

    def _heritage_type(self, node: Node) -> Expr:
        if node.type == "generic_type":
            return GenericCall(
                callee=node_text(node.child_by_field_name("name")),
                args=self._type_arguments(node),
            )
        return Ref(name=node_text(node))

    def _doc_options(self, anchor: Node) -> SchemaOptions:
        comment = preceding_comment(anchor)
        if comment is None:
            return {}
        text = node_text(comment)
        for tag in discarded_tags(text):
            self.context.report(
                DiagnosticKind.OPTIONS_IGNORED,
                f"Documentation tag @{tag} ignored: write one tag per line.",
                node_type=comment.type,
                line=node_line(comment),
            )
        return extract_schema_options(text)

    def _with_options(self, expr: Expr, options: SchemaOptions, node: Node) -> Expr:
        if not options:
            return expr
        result = attach_options(expr, options)
        if result is None:
            self.context.report(
                DiagnosticKind.OPTIONS_IGNORED,
                f"Documentation tags {', '.join(options)} ignored: '{node_text(node)[:40]}' has no TypeBox constructor to carry them.",
                node_type=node.type,
                line=node_line(node),
            )
            return expr
        return result

    # ----------------------------------------------------------------------
    # Types
    # ----------------------------------------------------------------------

    def visit_type(self, node: Node | None) -> Expr:
        """
        Build the TypeBox expression for a type node.

        Args:
            node: Any tree-sitter type node; None means an omitted annotation

        Returns:
            The expression IR
        """
        if node is None:
            # Omitted annotations are implicitly `any`
            return Call("Any")
        handler = self._type_handlers.get(node.type)
        if handler is None:
            self._report_unsupported(node)
            return Raw(text=node_text(node))
        return handler(node)

    def _predefined_type(self, node: Node) -> Expr:
        constructor = PRIMITIVES.get(node_text(node))
        if constructor is None:
            self._report_unsupported(node)
            return Raw(text=node_text(node))
        return Call(constructor)

    def _type_identifier(self, node: Node) -> Expr:
        name = node_text(node)
        if name in PRIMITIVES:
            return Call(PRIMITIVES[name])
        if name == "Uint8Array":
            return Call("Uint8Array")
        if name in BUILTIN_GENERICS:
            return Raw(text=f"Type.{name}")
        return Ref(name=name)

    def _nested_type_identifier(self, node: Node) -> Expr:
        return Ref(name=node_text(node))

    def _generic_type(self, node: Node) -> Expr:
        name = node_text(node.child_by_field_name("name"))
        if name == "Uint8Array":
            return Call("Uint8Array")
        args = self._type_arguments(node)
        if name in BUILTIN_GENERICS:
            return Call(name, args)
        return GenericCall(callee=name, args=args)

    def _type_arguments(self, node: Node) -> tuple[Expr, ...]:
        arguments = node.child_by_field_name("type_arguments")
        if arguments is None:
            return ()
        return tuple(self.visit_type(arg) for arg in named_children(arguments))

    def _literal_type(self, node: Node) -> Expr:
        text = node_text(node)
        if text == "null":
            return Call("Null")
        if text == "undefined":
            return Call("Undefined")
        return Call("Literal", (Raw(text=text),))

    def _array_type(self, node: Node) -> Expr:
        return Call("Array", (self.visit_type(named_children(node)[0]),))

    def _tuple_type(self, node: Node) -> Expr:
        items = tuple(self.visit_type(member) for member in named_children(node))
        return Call("Tuple", (ArrayLiteral(items),))

    def _named_tuple_member(self, node: Node) -> Expr:
        """`[name: T]` and `[name?: T]` tuple members."""
        annotation = node.child_by_field_name("type")
        if annotation is None:
            annotation = next((c for c in node.named_children if c.type == "type_annotation"), None)
        member = self.visit_type(named_children(annotation)[0] if annotation is not None else None)
        return _wrap_modifiers(member, readonly=False, optional=node.type == "optional_parameter")

    def _optional_type(self, node: Node) -> Expr:
        return Call("Optional", (self.visit_type(named_children(node)[0]),))

    def _rest_type(self, node: Node) -> Expr:
        return Call("Rest")

    def _flatten(self, node: Node) -> list[Node]:
        """Flatten the left-nested binary union/intersection nodes of tree-sitter."""
        members: list[Node] = []
        for child in named_children(node):
            if child.type == node.type:
                members.extend(self._flatten(child))
            else:
                members.append(child)
        return members

    def _union_type(self, node: Node) -> Expr:
        members = tuple(self.visit_type(member) for member in self._flatten(node))
        return Call("Union", (ArrayLiteral(members),))

    def _intersection_type(self, node: Node) -> Expr:
        members = tuple(self.visit_type(member) for member in self._flatten(node))
        return Call("Intersect", (ArrayLiteral(members),))

    def _object_type(self, node: Node) -> Expr:
        return Call("Object", (self._object_literal(node),))

    def _object_literal(self, body: Node | None) -> ObjectLiteral:
        if body is None:
            return ObjectLiteral()
        return ObjectLiteral(fields=tuple(self._member(member) for member in named_children(body)))

    def _member(self, node: Node) -> Field:
        if node.type != "property_signature":
            self._report_unsupported(node)
            return Field(name="", value=Raw(text=node_text(node)))

        annotation = node.child_by_field_name("type")
        type_node = named_children(annotation)[0] if annotation is not None else None
        expr = self.visit_type(type_node)
        expr = self._with_options(expr, self._doc_options(node), node)
        expr = _wrap_modifiers(expr, readonly=has_token(node, "readonly"), optional=has_token(node, "?"))
        return Field(name=node_text(node.child_by_field_name("name")), value=expr)

    def _parameters(self, node: Node) -> ArrayLiteral:
        parameters = node.child_by_field_name("parameters")
        if parameters is None:
            return ArrayLiteral()
        items = []
        for parameter in named_children(parameters):
            annotation = parameter.child_by_field_name("type")
            items.append(self.visit_type(named_children(annotation)[0] if annotation is not None else None))
        return ArrayLiteral(tuple(items))

    def _return_type(self, node: Node) -> Node | None:
        returns = node.child_by_field_name("return_type") or node.child_by_field_name("type")
        if returns is not None:
            return returns
        candidates = [c for c in named_children(node) if c.type not in ("formal_parameters", "type_parameters")]
        return candidates[-1] if candidates else None

    def _function_type(self, node: Node) -> Expr:
        return Call("Function", (self._parameters(node), self.visit_type(self._return_type(node))))

    def _constructor_type(self, node: Node) -> Expr:
        return Call("Constructor", (self._parameters(node), self.visit_type(self._return_type(node))))

    def _keyof_type(self, node: Node) -> Expr:
        return Call("KeyOf", (self.visit_type(named_children(node)[0]),))

    def _readonly_type(self, node: Node) -> Expr:
        return Call("Readonly", (self.visit_type(named_children(node)[0]),))

    def _parenthesized_type(self, node: Node) -> Expr:
        return self.visit_type(named_children(node)[0])

    def _conditional_type(self, node: Node) -> Expr:
        return Call(
            "Extends",
            (
                self.visit_type(node.child_by_field_name("left")),
                self.visit_type(node.child_by_field_name("right")),
                self.visit_type(node.child_by_field_name("consequence")),
                self.visit_type(node.child_by_field_name("alternative")),
            ),
        )

    def _report_unsupported(self, node: Node) -> None:
        self.context.report(
            DiagnosticKind.UNSUPPORTED_SYNTAX,
            f"Unhandled: {node.type}",
            node_type=node.type,
            line=node_line(node),
        )
