"""Recursive-descent evaluator for the calculator. Parsing and evaluation are fused: every production below is one
function that consumes tokens from a TokenStream and directly returns the value of what it parsed. No syntax tree is
built.

The grammar can be defined as follows:

```
<calculation> ::= <statement>*                          ; until end of input, value of the last statement
<statement>   ::= "let" <declaration> | <expression>
<declaration> ::= <name> "=" <expression>               ; defines <name>, value of <expression>
<expression>  ::= <term> (("+" | "-") <term>)*          ; left associative
<term>        ::= <primary> (("*" | "/" | "%") <primary>)*  ; left associative
<primary>     ::= "+" <primary> | "-" <primary> | <number> | <name> | "(" <expression> ")"
```

The left-recursive rules (<expression> ::= <expression> "+" <term> | ...) are rewritten as loops, which fold the
running value left to right. Each function looks at most one token ahead and puts it back if it doesn't belong to it.
"""

import math
import operator

from calculator.lang.error import CalcSyntaxError, DivisionByZeroError
from calculator.lang.lexical import TokenKind


def _fmod(left, right):
    """C fmod: remainder has the sign of left. An infinite left gives nan instead of a ValueError."""
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


TERM_OPS = {
    TokenKind.MUL: operator.mul,
    TokenKind.DIV: operator.truediv,
    TokenKind.MOD: _fmod,
}
DIVISIONS = {TokenKind.DIV, TokenKind.MOD}

EXPRESSION_OPS = {
    TokenKind.ADD: operator.add,
    TokenKind.SUB: operator.sub,
}


def primary(ts, variables):
    """Handles <primary>: unary sign, number, variable or parenthesized expression."""
    token = ts.get()

    if token.kind is TokenKind.ADD:
        return primary(ts, variables)

    elif token.kind is TokenKind.SUB:
        return -primary(ts, variables)

    elif token.kind is TokenKind.LPAREN:
        value = expression(ts, variables)
        token = ts.get()
        if token.kind is not TokenKind.RPAREN:
            raise CalcSyntaxError("missing a right parenthesis in '{}'", ts.line, start=token.start, end=token.end)
        return value

    elif token.kind is TokenKind.NUMBER:
        return token.value

    elif token.kind is TokenKind.NAME:
        return variables.get(token.name)

    ts.putback(token)
    raise CalcSyntaxError("expected a primary in '{}'", ts.line, start=token.start, end=token.end)


def term(ts, variables):
    """Handles <term>: products, quotients and remainders of primaries."""
    left = primary(ts, variables)

    token = ts.get()
    while token.kind in TERM_OPS:
        right = primary(ts, variables)
        if token.kind in DIVISIONS and right == 0.0:
            raise DivisionByZeroError("division by zero in '{}'", ts.line, start=token.start, end=token.end)
        left = TERM_OPS[token.kind](left, right)
        token = ts.get()

    ts.putback(token)
    return left


def expression(ts, variables):
    """Handles <expression>: sums and differences of terms."""
    left = term(ts, variables)

    token = ts.get()
    while token.kind in EXPRESSION_OPS:
        left = EXPRESSION_OPS[token.kind](left, term(ts, variables))
        token = ts.get()

    ts.putback(token)
    return left


def declaration(ts, variables):
    """Handles <declaration>, the part of a statement after 'let'. Defines the variable and returns its value."""
    token = ts.get()
    if token.kind is not TokenKind.NAME:
        ts.putback(token)
        msg = "expected a variable name after 'let' keyword in '{}'"
        raise CalcSyntaxError(msg, ts.line, start=token.start, end=token.end)
    name = token.name

    token = ts.get()
    if token.kind is not TokenKind.EQUALS:
        ts.putback(token)
        raise CalcSyntaxError("missing '=' in a declaration of '{1}'", (ts.line, name), start=token.start,
                              end=token.end)

    return variables.define(name, expression(ts, variables))


def statement(ts, variables):
    """Handles <statement>: either a declaration or an expression."""
    token = ts.get()
    if token.kind is TokenKind.LET:
        return declaration(ts, variables)

    ts.putback(token)
    return expression(ts, variables)


def calculation(ts, variables):
    """Handles <calculation>: evaluates statements until end of input and returns the value of the last one (0.0 if
    there are none). Earlier statements only matter for the variables they define.
    """
    result = 0.0
    token = ts.get()
    while token.kind is not TokenKind.EOF:
        ts.putback(token)
        result = statement(ts, variables)
        token = ts.get()

    return result


def evaluate(ts, variables):
    """Evaluates everything left in TokenStream ts against VarTable variables and returns the final value. Any error
    aborts the whole evaluation; variables defined by statements that completed before it are kept.
    """
    return calculation(ts, variables)
