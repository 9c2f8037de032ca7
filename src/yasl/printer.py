"""Human-readable and JSON-ready views of tokens and syntax trees.

Trees are walked with explicit stacks: a long `a + b + ...` chain is as deep
as it is wide.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple, Union

from . import ast
from .errors import SourceSpan
from .token import Token, TokenType


#fully parenthesized form; parsing it back yields an equal tree
def format_expression(expr: ast.Expr) -> str:
    parts: List[str] = []
    pending: List[Union[ast.Node, str]] = [expr]
    while pending:
        item = pending.pop()
        match item:
            case str():
                parts.append(item)
            case ast.IntLiteral(value=value):
                parts.append(str(value))
            case ast.VarExpr(name=name):
                parts.append(name)
            case ast.BinaryExpr(left=left, operator=operator, right=right):
                pending.extend((")", right, f" {operator.value} ", left, "("))
            case _:
                raise TypeError(f"not an expression node: {item!r}")
    return "".join(parts)


#canonical source text for a whole program
def format_program(program: ast.Program) -> str:
    lines = [f"program {program.name};"]
    for decl in program.block.const_decls:
        lines.append(f"const {decl.name} = {decl.value};")
    lines.append("begin")
    for stmt in program.block.statements:
        lines.append(f"  print {format_expression(stmt.expr)};")
    lines.append("end.")
    return "\n".join(lines)


#indented one-node-per-line dump used by the CLI
def dump_tree(node: ast.Node) -> str:
    lines: List[str] = []
    pending: List[Tuple[ast.Node, int]] = [(node, 0)]
    while pending:
        current, depth = pending.pop()
        lines.append("  " * depth + f"{_describe_node(current)} [{current.span.start}]")
        pending.extend((child, depth + 1) for child in reversed(_children(current)))
    return "\n".join(lines)


def _describe_node(node: ast.Node) -> str:
    match node:
        case ast.Program(name=name):
            return f"Program {name}"
        case ast.Block():
            return "Block"
        case ast.ConstDecl(name=name, value=value):
            return f"ConstDecl {name} = {value}"
        case ast.PrintStmt():
            return "PrintStmt"
        case ast.BinaryExpr(operator=operator):
            return f"BinaryExpr {operator.value}"
        case ast.IntLiteral(value=value):
            return f"IntLiteral {value}"
        case ast.VarExpr(name=name):
            return f"VarExpr {name}"
    raise TypeError(f"unknown node type {type(node).__name__}")


def _children(node: ast.Node) -> Tuple[ast.Node, ...]:
    match node:
        case ast.Program(block=block):
            return (block,)
        case ast.Block(const_decls=const_decls, statements=statements):
            return (*const_decls, *statements)
        case ast.PrintStmt(expr=expr):
            return (expr,)
        case ast.BinaryExpr(left=left, right=right):
            return (left, right)
    return ()


def _span_to_dict(span: SourceSpan) -> Dict[str, Any]:
    return {
        "start": [span.start.line, span.start.column],
        "end": [span.end.line, span.end.column],
    }


#nested dictionaries tagged with the node class, ready for json.dumps
def node_to_dict(node: ast.Node, include_spans: bool = True) -> Dict[str, Any]:
    root: Dict[str, Any] = {}
    pending: List[Tuple[ast.Node, Dict[str, Any]]] = [(node, root)]
    while pending:
        current, data = pending.pop()
        data["node"] = type(current).__name__
        match current:
            case ast.Program(name=name, block=block):
                data["name"] = name
                data["block"] = _enqueue(block, pending)
            case ast.Block(const_decls=const_decls, statements=statements):
                data["const_decls"] = [_enqueue(decl, pending) for decl in const_decls]
                data["statements"] = [_enqueue(stmt, pending) for stmt in statements]
            case ast.ConstDecl(name=name, value=value):
                data["name"] = name
                data["value"] = value
            case ast.PrintStmt(expr=expr):
                data["expr"] = _enqueue(expr, pending)
            case ast.BinaryExpr(left=left, operator=operator, right=right):
                data["operator"] = operator.value
                data["left"] = _enqueue(left, pending)
                data["right"] = _enqueue(right, pending)
            case ast.IntLiteral(value=value):
                data["value"] = value
            case ast.VarExpr(name=name):
                data["name"] = name
            case _:
                raise TypeError(f"unknown node type {type(current).__name__}")
        if include_spans:
            data["span"] = _span_to_dict(current.span)
    return root


#reserves the child's dictionary now and fills it when the walk reaches it
def _enqueue(node: ast.Node, pending: List[Tuple[ast.Node, Dict[str, Any]]]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    pending.append((node, data))
    return data


def format_token(token: Token) -> str:
    location = f"{token.span.start.line}:{token.span.start.column}"
    kind = "KEYWORD" if token.type.is_keyword else token.type.name
    if token.type is TokenType.STRING:
        lexeme = '"' + token.lexeme.replace('"', '""') + '"'
    else:
        lexeme = token.lexeme
    return f"{location:<8} {kind:<14} {lexeme}".rstrip()


def token_to_dict(token: Token) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": token.type.name,
        "lexeme": token.lexeme,
        "span": _span_to_dict(token.span),
    }
    if token.literal is not None:
        data["literal"] = token.literal
    return data
