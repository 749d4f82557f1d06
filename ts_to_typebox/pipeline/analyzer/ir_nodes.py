"""
IR (Intermediate Representation) node definitions.

These nodes represent TypeBox expressions built from TypeScript
declarations. Every schema-builder call is one node, so later phases
(indexed-access lookups, rendering) work on structure instead of text.
All nodes are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class RawOption:
    """A documentation-tag value that is not a JSON literal.

    Kept as the raw token text and emitted verbatim.
    """

    text: str = ""


# Ordered mapping from tag name to parsed literal (int, float, bool, None, str or RawOption)
SchemaOptions = dict[str, Any]


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes."""


@dataclass(frozen=True)
class Call(Expr):
    """A TypeBox constructor call, rendered as `Type.<name>(args..., options)`."""

    name: str = ""
    args: tuple[Expr, ...] = ()
    options: SchemaOptions = field(default_factory=dict)


@dataclass(frozen=True)
class Ref(Expr):
    """A reference to a declared value (`A`, `NS.A`, a type parameter)."""

    name: str = ""


@dataclass(frozen=True)
class GenericCall(Expr):
    """An instantiation of a generic declaration, rendered as `Name(args...)`."""

    callee: str = ""
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Raw(Expr):
    """Verbatim text: unsupported syntax passed through, or a failure sentinel."""

    text: str = ""


@dataclass(frozen=True)
class ArrayLiteral(Expr):
    """An array argument (`[a, b]`) as taken by Union, Tuple, Intersect."""

    items: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Field:
    """A property of an object literal. Modifiers are already applied to value."""

    name: str = ""
    value: Expr | None = None


@dataclass(frozen=True)
class ObjectLiteral(Expr):
    """The property map argument of `Type.Object`."""

    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Recursive(Expr):
    """Fixed-point wrapper binding `name` to the schema being built."""

    name: str = ""
    body: Expr | None = None


# Wrappers that options never attach to; they are forwarded to the wrapped expression
MODIFIER_WRAPPERS = {"Optional", "Readonly", "ReadonlyOptional"}


def attach_options(expr: Expr, options: SchemaOptions) -> Expr | None:
    """Return expr with options merged into its outermost constructor.

    Returns None when the expression has no constructor to carry options.
    """
    if not options:
        return expr
    if isinstance(expr, Recursive) and expr.body is not None:
        body = attach_options(expr.body, options)
        return None if body is None else replace(expr, body=body)
    if isinstance(expr, Call):
        if expr.name in MODIFIER_WRAPPERS and expr.args:
            inner = attach_options(expr.args[0], options)
            return None if inner is None else replace(expr, args=(inner,) + expr.args[1:])
        return replace(expr, options={**expr.options, **options})
    return None


def children(expr: Expr) -> tuple[Expr, ...]:
    """Return the direct sub-expressions of a node."""
    if isinstance(expr, ArrayLiteral):
        return expr.items
    if isinstance(expr, (Call, GenericCall)):
        return expr.args
    if isinstance(expr, ObjectLiteral):
        return tuple(f.value for f in expr.fields if f.value is not None)
    if isinstance(expr, Recursive) and expr.body is not None:
        return (expr.body,)
    return ()


# --------------------------------------------------------------------------
# Declarations
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Declaration:
    """Base class for top-level and namespace-level declarations."""

    name: str = ""
    exported: bool = False


@dataclass(frozen=True)
class TypeDeclaration(Declaration):
    """A type alias or interface: a static type line plus a value line."""

    body: Expr | None = None
    type_parameters: tuple[str, ...] = ()

    @property
    def is_generic(self) -> bool:
        return bool(self.type_parameters)


@dataclass(frozen=True)
class EnumDeclaration(Declaration):
    """An enum: a plain enum block plus a `Type.Enum` constant bound to it."""

    members: tuple[str, ...] = ()

    @property
    def enum_name(self) -> str:
        return f"{self.name}Enum"


@dataclass(frozen=True)
class NamespaceDeclaration(Declaration):
    """A namespace or module whose statements are emitted recursively."""

    keyword: str = "namespace"
    body: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class RawDeclaration(Declaration):
    """A statement passed through verbatim."""

    text: str = ""


@dataclass
class SourceModule:
    """The complete IR of one input file."""

    declarations: list[Declaration] = field(default_factory=list)

    # Whether any declaration used the TypeBox vocabulary
    uses_typebox: bool = False

    # Whether any generic declaration was emitted (needs TSchema)
    uses_generics: bool = False
