"""
TypeBox backend.

Renders the IR of a source file to TypeScript code using the TypeBox
vocabulary. Rendering is a single pass over an immutable tree, so the
same IR always produces the same text.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from ...utils import is_identifier
from ..analyzer.ir_nodes import (
    ArrayLiteral,
    Call,
    Declaration,
    EnumDeclaration,
    Expr,
    GenericCall,
    NamespaceDeclaration,
    ObjectLiteral,
    Raw,
    RawDeclaration,
    RawOption,
    Recursive,
    Ref,
    SchemaOptions,
    SourceModule,
    TypeDeclaration,
)
from ..config import CodeGeneratorConfig

INDENT = "  "


class TypeBoxBackend:
    """Renders SourceModule IR to TypeBox code."""

    # Template directory name
    TEMPLATE_LANG: str = "typebox"

    # File extension
    FILE_EXTENSION: str = "ts"

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.imports_template = self.jinja_env.get_template(f"imports.{self.FILE_EXTENSION}.jinja2")

    def generate(self, module: SourceModule) -> str:
        """
        Generate code from IR.

        The import header comes first, then one block per declaration in
        source order, separated by blank lines.

        Args:
            module: The IR of one source file

        Returns:
            Generated code as a string
        """
        header = self.render_imports(module)
        blocks = [self.render_declaration(d) for d in module.declarations]
        return "\n\n".join(part for part in [header, *blocks] if part) + "\n"

    def render_imports(self, module: SourceModule) -> str:
        """Render the import header from the import flags."""
        import_names = []
        if module.uses_typebox:
            import_names = ["Type", "Static"]
            if module.uses_generics:
                import_names.append("TSchema")
        return self.imports_template.render(
            import_names=import_names,
            typebox_module=self.config.typebox_module,
        ).strip()

    def render_prefix(self, generation_comment: str) -> str:
        """Render the file prefix placed above the import header."""
        return self.prefix_template.render(generation_comment=generation_comment)

    # ----------------------------------------------------------------------
    # Declarations
    # ----------------------------------------------------------------------

    def render_declaration(self, declaration: Declaration) -> str:
        """Render one declaration block."""
        if isinstance(declaration, TypeDeclaration):
            return self._render_type_declaration(declaration)
        if isinstance(declaration, EnumDeclaration):
            return self._render_enum_declaration(declaration)
        if isinstance(declaration, NamespaceDeclaration):
            return self._render_namespace_declaration(declaration)
        if isinstance(declaration, RawDeclaration):
            return declaration.text
        raise TypeError(f"Unknown declaration type: {type(declaration).__name__}")

    def _exports(self, declaration: Declaration) -> str:
        return "export " if declaration.exported else ""

    def _render_type_declaration(self, declaration: TypeDeclaration) -> str:
        exports = self._exports(declaration)
        name = declaration.name
        body = self.render_expr(declaration.body)

        if declaration.is_generic:
            constraints = ", ".join(f"{p} extends TSchema" for p in declaration.type_parameters)
            parameters = ", ".join(f"{p}: {p}" for p in declaration.type_parameters)
            names = ", ".join(declaration.type_parameters)
            static_line = f"{exports}type {name}<{constraints}> = Static<ReturnType<typeof {name}<{names}>>>"
            value_line = f"{exports}const {name} = <{constraints}>({parameters}) => {body}"
        else:
            static_line = f"{exports}type {name} = Static<typeof {name}>"
            value_line = f"{exports}const {name} = {body}"
        return f"{static_line}\n{value_line}"

    def _render_enum_declaration(self, declaration: EnumDeclaration) -> str:
        exports = self._exports(declaration)
        members = ", ".join(declaration.members)
        enum_block = f"{exports}enum {declaration.enum_name} {{ {members} }}" if members else f"{exports}enum {declaration.enum_name} {{}}"
        value_line = f"{exports}const {declaration.name} = Type.Enum({declaration.enum_name})"
        return f"{enum_block}\n\n{value_line}"

    def _render_namespace_declaration(self, declaration: NamespaceDeclaration) -> str:
        exports = self._exports(declaration)
        blocks = "\n\n".join(self.render_declaration(d) for d in declaration.body)
        body = "\n".join(f"{INDENT}{line}" if line else line for line in blocks.splitlines())
        opening = f"{exports}{declaration.keyword} {declaration.name} {{"
        if not body:
            return f"{opening}\n}}"
        return f"{opening}\n{body}\n}}"

    # ----------------------------------------------------------------------
    # Expressions
    # ----------------------------------------------------------------------

    def render_expr(self, expr: Expr | None, level: int = 0) -> str:
        """
        Render an expression.

        Args:
            expr: The expression IR
            level: Nesting depth of object literals, for indentation

        Returns:
            TypeBox code for the expression
        """
        if expr is None:
            return ""
        if isinstance(expr, Call):
            args = [self.render_expr(arg, level) for arg in expr.args]
            if expr.options:
                args.append(self.render_options(expr.options))
            return f"Type.{expr.name}({', '.join(args)})"
        if isinstance(expr, Ref):
            return expr.name
        if isinstance(expr, GenericCall):
            return f"{expr.callee}({', '.join(self.render_expr(arg, level) for arg in expr.args)})"
        if isinstance(expr, Raw):
            return expr.text
        if isinstance(expr, ArrayLiteral):
            return f"[{', '.join(self.render_expr(item, level) for item in expr.items)}]"
        if isinstance(expr, ObjectLiteral):
            return self._render_object(expr, level)
        if isinstance(expr, Recursive):
            return f"Type.Recursive({expr.name} => {self.render_expr(expr.body, level)})"
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _render_object(self, expr: ObjectLiteral, level: int) -> str:
        if not expr.fields:
            return "{}"
        indent = INDENT * (level + 1)
        lines = []
        for f in expr.fields:
            value = self.render_expr(f.value, level + 1)
            # Unsupported members are passed through without a key
            lines.append(f"{indent}{f.name}: {value}" if f.name else f"{indent}{value}")
        return "{\n" + ",\n".join(lines) + "\n" + INDENT * level + "}"

    def render_options(self, options: SchemaOptions) -> str:
        """Render schema options as a trailing object argument."""
        entries = [f"{self._format_key(k)}: {self.format_option_value(v)}" for k, v in options.items()]
        return "{ " + ", ".join(entries) + " }"

    def _format_key(self, key: str) -> str:
        return key if is_identifier(key) else json.dumps(key)

    def format_option_value(self, value: Any) -> str:
        """
        Format an option value as a JavaScript literal.

        Args:
            value: A parsed tag value

        Returns:
            Literal text; raw values are emitted unquoted
        """
        if isinstance(value, RawOption):
            return value.text
        if value is True:
            return "true"
        if value is False:
            return "false"
        if value is None:
            return "null"
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        return json.dumps(value)
