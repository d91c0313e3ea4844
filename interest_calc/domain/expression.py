"""Arithmetic expression evaluator for field input"""

import ast
import math

from interest_calc.domain.exceptions import EvaluationError

_ALLOWED_BINOPS = (ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Mod, ast.Pow)
_ALLOWED_UNARYOPS = (ast.UAdd, ast.USub)


def evaluate(text: str) -> float:
    """
    Evaluate arithmetic text to a float.

    Supports:
    - Numeric literals, parentheses, unary + and -
    - Binary + - * / % and power, written either ^ or **

    An empty or whitespace-only string means zero. Anything else that does not
    reduce to a real number raises EvaluationError.

    Example:
        evaluate("7 + 3 * 2") -> 13.0
        evaluate("2^10") -> 1024.0
    """
    if not text or not text.strip():
        return 0.0

    try:
        node = ast.parse(text.strip().replace("^", "**"), mode="eval")
    except SyntaxError as e:
        raise EvaluationError(f"Syntax error: {e.msg}") from None
    except ValueError as e:
        raise EvaluationError(str(e)) from None

    try:
        result = _eval(node.body)
    except RecursionError:
        raise EvaluationError("Expression is nested too deeply") from None

    if not isinstance(result, float) or math.isnan(result):
        raise EvaluationError("Expression does not produce a real number")
    return result


def _eval(node: ast.AST) -> float:
    if isinstance(node, ast.Constant):
        # bool is an int subclass, reject it explicitly
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            try:
                return float(node.value)
            except OverflowError:
                raise EvaluationError("Numeric literal is too large") from None
        raise EvaluationError(f"Unsupported literal: {node.value!r}")

    if isinstance(node, ast.UnaryOp) and isinstance(node.op, _ALLOWED_UNARYOPS):
        value = _eval(node.operand)
        return value if isinstance(node.op, ast.UAdd) else -value

    if isinstance(node, ast.BinOp) and isinstance(node.op, _ALLOWED_BINOPS):
        left, right = _eval(node.left), _eval(node.right)
        try:
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                return left / right
            if isinstance(node.op, ast.Mod):
                return left % right
            result = left ** right
        except ZeroDivisionError:
            raise EvaluationError("Division by zero") from None
        except OverflowError:
            raise EvaluationError("Overflow during computation") from None

        if isinstance(result, complex):
            raise EvaluationError("Expression does not produce a real number")
        return result

    raise EvaluationError(f"Unsupported expression: {type(node).__name__}")
