"""JSON serialization/deserialization for the Mini-PL AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node type and `TypeSpec`
round-trips, including source rows.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    IntegerLiteral,
    StringLiteral,
    VariableReference,
    VariableDeclaration,
    ArithmeticOp,
    LogicalOp,
    UnaryNot,
    Range,
    Assignment,
    ExpressionStatement,
    ReadStatement,
    Loop,
)
from .types import TypeSpec


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(o["kind"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "value": node.value, "row": node.row}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value, "row": node.row}
    if isinstance(node, VariableReference):
        return {"type": "VariableReference", "name": node.name, "row": node.row}
    if isinstance(node, VariableDeclaration):
        return {
            "type": "VariableDeclaration",
            "name": node.name,
            "type_spec": ast_to_obj(node.type_spec),
            "row": node.row,
        }
    if isinstance(node, (ArithmeticOp, LogicalOp)):
        return {
            "type": type(node).__name__,
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "row": node.row,
        }
    if isinstance(node, UnaryNot):
        return {"type": "UnaryNot", "operand": ast_to_obj(node.operand), "row": node.row}
    if isinstance(node, Range):
        return {"type": "Range", "begin": ast_to_obj(node.begin), "end": ast_to_obj(node.end), "row": node.row}
    if isinstance(node, Assignment):
        return {
            "type": "Assignment",
            "target": ast_to_obj(node.target),
            "expression": ast_to_obj(node.expression),
            "row": node.row,
        }
    if isinstance(node, ExpressionStatement):
        return {
            "type": "ExpressionStatement",
            "keyword": node.keyword,
            "expression": ast_to_obj(node.expression),
            "row": node.row,
        }
    if isinstance(node, ReadStatement):
        return {"type": "ReadStatement", "variable": ast_to_obj(node.variable), "row": node.row}
    if isinstance(node, Loop):
        return {
            "type": "Loop",
            "variable": ast_to_obj(node.variable),
            "range": ast_to_obj(node.range),
            "body": [ast_to_obj(s) for s in node.body],
            "row": node.row,
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict) and obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj["value"])
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    row = obj.get("row", 0)
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "IntegerLiteral":
        return IntegerLiteral(value=obj["value"], row=row)
    if t == "StringLiteral":
        return StringLiteral(value=obj["value"], row=row)
    if t == "VariableReference":
        return VariableReference(name=obj["name"], row=row)
    if t == "VariableDeclaration":
        return VariableDeclaration(name=obj["name"], type_spec=ast_from_obj(obj["type_spec"]), row=row)
    if t == "ArithmeticOp":
        return ArithmeticOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), row=row)
    if t == "LogicalOp":
        return LogicalOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), row=row)
    if t == "UnaryNot":
        return UnaryNot(operand=ast_from_obj(obj["operand"]), row=row)
    if t == "Range":
        return Range(begin=ast_from_obj(obj["begin"]), end=ast_from_obj(obj["end"]), row=row)
    if t == "Assignment":
        return Assignment(target=ast_from_obj(obj["target"]), expression=ast_from_obj(obj["expression"]), row=row)
    if t == "ExpressionStatement":
        return ExpressionStatement(keyword=obj["keyword"], expression=ast_from_obj(obj["expression"]), row=row)
    if t == "ReadStatement":
        return ReadStatement(variable=ast_from_obj(obj["variable"]), row=row)
    if t == "Loop":
        return Loop(
            variable=ast_from_obj(obj["variable"]),
            range=ast_from_obj(obj["range"]),
            body=[ast_from_obj(s) for s in obj["body"]],
            row=row,
        )

    raise ValueError(f"Unknown AST node type: {t}")
