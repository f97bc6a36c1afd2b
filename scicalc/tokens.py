# Token types and the static lookup tables used by the calculator pipeline

from collections import namedtuple
from dataclasses import dataclass
from enum import Enum
from math import acos, asin, atan, cos, degrees, e, exp, log, log10, pi, radians, sin, tan, sqrt


class TokenType(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONSTANT = "constant"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str

    def __str__(self):
        return self.text


OperatorSpec = namedtuple("OperatorSpec", ["precedence", "right_assoc"])
FunctionSpec = namedtuple("FunctionSpec", ["transform", "domain", "domain_msg"], defaults=[None, None])

# Parentheses sit at precedence 0 so they never pop anything
OPERATORS = {
    '(': OperatorSpec(0, False),
    ')': OperatorSpec(0, False),
    '+': OperatorSpec(1, False),
    '-': OperatorSpec(1, False),
    '*': OperatorSpec(2, False),
    '/': OperatorSpec(2, False),
    '%': OperatorSpec(2, False),
    '^': OperatorSpec(3, True),
    '!': OperatorSpec(4, True),
}

BINARY_OPERATORS = "+-*/%^"
FACTORIAL = '!'
MAX_FACTORIAL = 20


# Checks are negated comparisons: NaN passes them and the transform returns NaN
def positive_only(x):
    return not x <= 0


def within_unit_range(x):
    return not (x < -1 or x > 1)


# Trig functions take degrees, their inverses return degrees
FUNCTIONS = {
    "sin": FunctionSpec(lambda x: sin(radians(x))),
    "cos": FunctionSpec(lambda x: cos(radians(x))),
    "tan": FunctionSpec(lambda x: tan(radians(x))),
    "asin": FunctionSpec(lambda x: degrees(asin(x)), within_unit_range, "Domain definition of asin is [-1, 1]"),
    "acos": FunctionSpec(lambda x: degrees(acos(x)), within_unit_range, "Domain definition of acos is [-1, 1]"),
    "atan": FunctionSpec(lambda x: degrees(atan(x))),
    "exp": FunctionSpec(exp),
    "ln": FunctionSpec(log, positive_only, "ln undefined for non-positive values"),
    "log": FunctionSpec(log10, positive_only, "log undefined for non-positive values"),
    "√": FunctionSpec(sqrt, lambda x: not x < 0, "Square root of negative number is undefined"),
    "x²": FunctionSpec(lambda x: x * x),
    "10^x": FunctionSpec(lambda x: 10.0 ** x),
}

CONSTANTS = {
    "π": pi,
    'e': e,
}
