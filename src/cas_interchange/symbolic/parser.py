"""
Syntax-Fallback Parser — kernel text -> SymPy expression

Used when only the kernel's textual rendering of an expression is available.
Calls to preservable functions (sqrt, exp, logarithms, trigonometric and
hyperbolic functions, abs) are kept as unevaluated SymPy applications instead
of being evaluated; ordinary arithmetic is reduced by SymPy as usual.
A preservable call nested inside arithmetic is wrapped in UnevaluatedExpr,
since Mul and Pow would otherwise fold it (2*sqrt(4) -> 4).

Pipeline:
1) Atom: number, constant (pi, i) or identifier (through the variable cache)
2) Single call 'name(...)': preservable -> unevaluated application
3) Anything else: recursive-descent arithmetic parse
   (relation -> sum -> term -> unary -> power -> factor)

The variable cache is passed explicitly and shared by one top-level parse so
that every use of a name resolves to the same Symbol instance.
"""

import re
from types import MappingProxyType
from typing import Callable, Collection, Dict, Final, List, Mapping, Optional, Tuple

import sympy

from cas_interchange.core.errors import SyntaxFallbackError

VarCache = Dict[str, sympy.Symbol]


# =============================================================================
# PRESERVABLE FUNCTIONS
# =============================================================================

def _log10(arg: sympy.Basic, evaluate: bool = False) -> sympy.Basic:
    """Base-10 logarithm in SymPy's own shape, log(x)/log(10)."""
    return sympy.Mul(
        sympy.log(arg, evaluate=evaluate),
        sympy.Pow(sympy.log(10, evaluate=evaluate), -1, evaluate=evaluate),
        evaluate=evaluate,
    )


# Native name -> SymPy constructor accepting evaluate=False
PRESERVABLE_FUNCTIONS: Final[Mapping[str, Callable[..., sympy.Basic]]] = MappingProxyType({
    "sqrt": sympy.sqrt,
    "exp": sympy.exp,
    "ln": sympy.log,
    "log": sympy.log,
    "log10": _log10,
    "sin": sympy.sin,
    "cos": sympy.cos,
    "tan": sympy.tan,
    "cot": sympy.cot,
    "sec": sympy.sec,
    "csc": sympy.csc,
    "asin": sympy.asin,
    "acos": sympy.acos,
    "atan": sympy.atan,
    "acot": sympy.acot,
    "sinh": sympy.sinh,
    "cosh": sympy.cosh,
    "tanh": sympy.tanh,
    "coth": sympy.coth,
    "asinh": sympy.asinh,
    "acosh": sympy.acosh,
    "atanh": sympy.atanh,
    "abs": sympy.Abs,
})

DEFAULT_PRESERVABLE: Final[frozenset[str]] = frozenset(PRESERVABLE_FUNCTIONS)

CONSTANTS: Final[Mapping[str, sympy.Basic]] = MappingProxyType({
    "pi": sympy.pi,
    "π": sympy.pi,
    "i": sympy.I,
})

RELATIONS: Final[Mapping[str, Callable[..., sympy.Basic]]] = MappingProxyType({
    "=": sympy.Eq,
    "==": sympy.Eq,
    "!=": sympy.Ne,
    "<": sympy.Lt,
    "<=": sympy.Le,
    ">": sympy.Gt,
    ">=": sympy.Ge,
})

_OPEN: Final[str] = "([{"
_CLOSE: Final[str] = ")]}"

_INTEGER = re.compile(r"^[+-]?\d+$")
_DECIMAL = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_CALL_HEAD = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)\s*\(", re.DOTALL)

_TOKEN = re.compile(
    r"""\s*(?:
        (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
      | (?P<name>π|[a-zA-Z_][a-zA-Z0-9_]*)
      | (?P<op>==|!=|<=|>=|\*\*|[-+*/^=<>(),\[\]])
    )""",
    re.VERBOSE,
)


# =============================================================================
# STRING HELPERS
# =============================================================================


def _matching_close(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at open_index, or -1."""
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char in _OPEN:
            depth += 1
        elif char in _CLOSE:
            depth -= 1
            if depth == 0:
                return index
    return -1


def _call_parts(text: str) -> Optional[Tuple[str, str]]:
    text = text.strip()
    match = _CALL_HEAD.match(text)
    if match is None:
        return None
    open_index = match.end() - 1
    # 'f(a)+g(b)' starts like a call but is not one
    if _matching_close(text, open_index) != len(text) - 1:
        return None
    return (match.group(1), text[open_index + 1:-1])


def is_function_call(text: str) -> bool:
    """
    True if the whole text is one call 'name(...)'.

    Examples:
        >>> is_function_call("sqrt(2)")
        True
        >>> is_function_call("sin(x)+1")
        False
    """
    return _call_parts(text) is not None


def extract_function_parts(text: str) -> Tuple[str, str]:
    """
    Split a call into (function name, argument text).

    Raises:
        SyntaxFallbackError: if text is not a single call
    """
    parts = _call_parts(text)
    if parts is None:
        raise SyntaxFallbackError(text.strip(), "not a function call")
    return parts


def split_args(text: str) -> List[str]:
    """
    Split argument text on top-level commas.

    Commas nested inside (), [] or {} do not split.

    Examples:
        >>> split_args("g(a,b),c")
        ['g(a,b)', 'c']
        >>> split_args("")
        []
    """
    text = text.strip()
    if not text:
        return []

    result = []
    current = []
    depth = 0
    for char in text:
        if char in _OPEN:
            depth += 1
        elif char in _CLOSE:
            depth -= 1
        elif char == "," and depth == 0:
            result.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    last = "".join(current).strip()
    if last:
        result.append(last)
    return result


# =============================================================================
# NODE BUILDERS
# =============================================================================


def preserved_call(name: str, args: List[sympy.Basic], fragment: str = "") -> sympy.Basic:
    """
    Unevaluated application of a preservable function.

    Names without a SymPy counterpart become opaque undefined functions.

    Raises:
        SyntaxFallbackError: if the function rejects the arguments
    """
    factory = PRESERVABLE_FUNCTIONS.get(name)
    try:
        if factory is None:
            return sympy.Function(name)(*args)
        return factory(*args, evaluate=False)
    except (TypeError, ValueError) as e:
        raise SyntaxFallbackError(fragment or name, str(e)) from e


def shielded_call(name: str, args: List[sympy.Basic], fragment: str = "") -> sympy.Basic:
    """preserved_call wrapped so that it survives as an operand of arithmetic."""
    return sympy.UnevaluatedExpr(preserved_call(name, args, fragment))


def _parse_atom(text: str, var_cache: VarCache) -> Optional[sympy.Basic]:
    if text in CONSTANTS:
        return CONSTANTS[text]
    if _INTEGER.match(text):
        return sympy.Integer(int(text))
    if _DECIMAL.match(text):
        return sympy.Float(text)
    if _IDENTIFIER.match(text):
        if text not in var_cache:
            var_cache[text] = sympy.Symbol(text)
        return var_cache[text]
    return None


# =============================================================================
# ENTRY POINT
# =============================================================================


def parse_symbolic(
    text: str,
    var_cache: Optional[VarCache] = None,
    preservable: Collection[str] = DEFAULT_PRESERVABLE,
) -> sympy.Basic:
    """
    Parse kernel text into a SymPy expression, keeping preservable calls symbolic.

    Args:
        text: Kernel rendering of an expression
        var_cache: Name -> Symbol cache for this parse (created if omitted)
        preservable: Function names kept as unevaluated applications

    Returns:
        SymPy expression (or a list for a list literal)

    Raises:
        SyntaxFallbackError: if no strategy can interpret the text

    Examples:
        >>> parse_symbolic("sqrt(2)")
        sqrt(2)
    """
    if var_cache is None:
        var_cache = {}

    text = text.strip()
    if not text:
        raise SyntaxFallbackError(text, "empty expression")

    parts = _call_parts(text)
    if parts is None:
        atom = _parse_atom(text, var_cache)
        if atom is not None:
            return atom
    else:
        name, inner = parts
        if name in preservable:
            args = [parse_symbolic(a, var_cache, preservable) for a in split_args(inner)]
            return preserved_call(name, args, text)

    return _parse_arithmetic(text, var_cache, preservable)


# =============================================================================
# ARITHMETIC PARSER
# =============================================================================


def _tokenize(text: str) -> List[Tuple[str, str, int]]:
    """Flat token list of (type, text, position)."""
    tokens = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        match = _TOKEN.match(text, pos)
        if match is None or match.end() == pos:
            raise SyntaxFallbackError(text[pos:], "unexpected character")
        kind = match.lastgroup
        tokens.append((kind, match.group(kind), match.start(kind)))
        pos = match.end()
    return tokens


def _parse_arithmetic(text: str, var_cache: VarCache, preservable: Collection[str]) -> sympy.Basic:
    """Recursive descent with standard precedence; reduces through SymPy."""
    tokens = _tokenize(text)

    def fail(detail: str):
        fragment = text[tokens[0][2]:] if tokens else text
        raise SyntaxFallbackError(fragment, detail)

    def peek() -> Optional[str]:
        return tokens[0][1] if tokens else None

    def expect(symbol: str) -> None:
        if peek() != symbol:
            fail(f"expected '{symbol}'")
        tokens.pop(0)

    def parse_sequence(closing: str) -> list:
        """Comma-separated relations up to the closing bracket."""
        items = []
        if peek() == closing:
            tokens.pop(0)
            return items
        while True:
            items.append(parse_relation())
            if peek() == ",":
                tokens.pop(0)
                continue
            expect(closing)
            return items

    def parse_factor():
        """Numbers, names, calls, '(...)' and '[...]'."""
        if not tokens:
            fail("unexpected end of expression")
        kind, value, _ = tokens.pop(0)

        if kind == "number":
            return _parse_atom(value, var_cache)

        if kind == "name":
            if peek() == "(":
                tokens.pop(0)
                args = parse_sequence(")")
                if value in preservable:
                    return shielded_call(value, args, value)
                return sympy.Function(value)(*args)
            return _parse_atom(value, var_cache)

        if value == "(":
            inner = parse_relation()
            expect(")")
            return inner

        if value == "[":
            return parse_sequence("]")

        tokens.insert(0, (kind, value, _))
        fail(f"unexpected token '{value}'")

    def parse_power():
        """Exponentiation '^' (right side may carry a sign)."""
        base = parse_factor()
        if peek() in ("^", "**"):
            tokens.pop(0)
            exponent = parse_unary()
            return base ** exponent
        return base

    def parse_unary():
        """Leading '+'/'-'."""
        if peek() in ("+", "-"):
            operator = tokens.pop(0)[1]
            operand = parse_unary()
            return -operand if operator == "-" else operand
        return parse_power()

    def parse_term():
        result = parse_unary()
        while peek() in ("*", "/"):
            operator = tokens.pop(0)[1]
            right = parse_unary()
            result = result * right if operator == "*" else result / right
        return result

    def parse_sum():
        result = parse_term()
        while peek() in ("+", "-"):
            operator = tokens.pop(0)[1]
            right = parse_term()
            result = result + right if operator == "+" else result - right
        return result

    def parse_relation():
        left = parse_sum()
        if peek() in RELATIONS:
            operator = tokens.pop(0)[1]
            right = parse_sum()
            return RELATIONS[operator](left, right, evaluate=False)
        return left

    try:
        result = parse_relation()
    except (TypeError, ValueError, sympy.SympifyError) as e:
        raise SyntaxFallbackError(text, str(e)) from e

    if tokens:
        fail("unexpected trailing input")
    return result
