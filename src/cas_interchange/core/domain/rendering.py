"""
Native textual rendering.

Renders native nodes in the kernel's input syntax (``x^2+1``, ``sin(x)``,
``[1,2,3]``, ``3/4``, ``3+4*i``) so that the text can be handed back to the
kernel's string evaluator. Parentheses are inserted from operator precedence.
"""

from typing import Final

from cas_interchange.core.domain.native import NativeKind, NativeNode
from cas_interchange.core.errors import UnsupportedVariant
from cas_interchange.core.math.bigint import int_from_bigint_node

# Precedence levels (higher binds tighter)
PREC_RELATION: Final[int] = 1
PREC_SUM: Final[int] = 2
PREC_PRODUCT: Final[int] = 3
PREC_UNARY: Final[int] = 4
PREC_POWER: Final[int] = 5
PREC_ATOM: Final[int] = 6

RELATIONAL_SYMBOLS: Final[frozenset[str]] = frozenset({"=", "==", "!=", "<", "<=", ">", ">="})


def render_native(node: NativeNode) -> str:
    """
    Render a native node as kernel input text.

    Raises:
        UnsupportedVariant: for a node that is not a native tree node
    """
    text, _ = _render(node)
    return text


def _paren(text: str) -> str:
    return f"({text})"


def _operand(node: NativeNode, min_prec: int, leading: bool = True) -> str:
    """Render a child, parenthesized if it binds looser than min_prec.

    Non-leading operands that start with a minus sign are always wrapped.
    """
    text, prec = _render(node)
    if prec < min_prec or (not leading and text.startswith("-")):
        return _paren(text)
    return text


def _signed(text: str, prec: int) -> tuple[str, int]:
    return (text, PREC_UNARY if text.startswith("-") else prec)


def _is_int(node: NativeNode, value: int) -> bool:
    return node.kind == NativeKind.INT and node.value == value


def _render(node: NativeNode) -> tuple[str, int]:
    kind = getattr(node, "kind", None)

    if kind == NativeKind.INT:
        return _signed(str(node.value), PREC_ATOM)

    if kind == NativeKind.DOUBLE:
        return _signed(repr(float(node.value)), PREC_ATOM)

    if kind == NativeKind.BIGINT:
        return _signed(str(int_from_bigint_node(node)), PREC_ATOM)

    if kind == NativeKind.FRACTION:
        num = _operand(node.numerator, PREC_PRODUCT)
        den = _operand(node.denominator, PREC_POWER, leading=False)
        return (f"{num}/{den}", PREC_PRODUCT)

    if kind == NativeKind.COMPLEX:
        return _render_complex(node.real, node.imaginary)

    if kind == NativeKind.IDENTIFIER:
        return (node.name, PREC_ATOM)

    if kind == NativeKind.STRING:
        escaped = node.value.replace("\\", "\\\\").replace('"', '\\"')
        return (f'"{escaped}"', PREC_ATOM)

    if kind == NativeKind.VECTOR:
        return ("[" + ",".join(render_native(e) for e in node.elements) + "]", PREC_ATOM)

    if kind == NativeKind.APPLICATION:
        return _render_application(node.operator, node.arguments)

    raise UnsupportedVariant(str(kind), "cannot render node")


def _render_complex(real: NativeNode, imaginary: NativeNode) -> tuple[str, int]:
    if _is_int(imaginary, 1):
        im_term = "i"
    elif _is_int(imaginary, -1):
        im_term = "-i"
    else:
        im_term = _operand(imaginary, PREC_PRODUCT) + "*i"

    if _is_int(real, 0):
        return _signed(im_term, PREC_PRODUCT)

    re_text = _operand(real, PREC_SUM)
    if im_term.startswith("-"):
        return (f"{re_text}{im_term}", PREC_SUM)
    return (f"{re_text}+{im_term}", PREC_SUM)


def _render_application(op: str, args: tuple[NativeNode, ...]) -> tuple[str, int]:
    arity = len(args)

    if op == "+" and arity >= 2:
        parts = [_operand(args[0], PREC_SUM)]
        for arg in args[1:]:
            text = _operand(arg, PREC_SUM)
            parts.append(text if text.startswith("-") else "+" + text)
        return ("".join(parts), PREC_SUM)

    if op == "*" and arity >= 2:
        parts = [_operand(args[0], PREC_PRODUCT)]
        parts += [_operand(a, PREC_PRODUCT, leading=False) for a in args[1:]]
        return ("*".join(parts), PREC_PRODUCT)

    if op == "-" and arity == 1:
        return ("-" + _operand(args[0], PREC_UNARY, leading=False), PREC_UNARY)

    if op == "-" and arity == 2:
        left = _operand(args[0], PREC_SUM)
        right = _operand(args[1], PREC_PRODUCT, leading=False)
        return (f"{left}-{right}", PREC_SUM)

    if op == "/" and arity == 2:
        left = _operand(args[0], PREC_PRODUCT)
        right = _operand(args[1], PREC_UNARY, leading=False)
        return (f"{left}/{right}", PREC_PRODUCT)

    if op == "^" and arity == 2:
        base = _operand(args[0], PREC_ATOM)
        exponent = _operand(args[1], PREC_ATOM)
        return (f"{base}^{exponent}", PREC_POWER)

    if op in RELATIONAL_SYMBOLS and arity == 2:
        left = _operand(args[0], PREC_SUM)
        right = _operand(args[1], PREC_SUM)
        return (f"{left}{op}{right}", PREC_RELATION)

    joined = ",".join(render_native(a) for a in args)
    if op[0].isalpha() or op[0] == "_":
        return (f"{op}({joined})", PREC_ATOM)
    # Operator symbol used with an arity that has no infix form
    return (f"'{op}'({joined})", PREC_ATOM)
