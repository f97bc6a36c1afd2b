# Scientific calculator engine
# Pipeline: tokenize -> normalize unary minus -> insert implicit '*' -> Shunting Yard -> RPN evaluation -> format

from decimal import Decimal, ROUND_HALF_UP, localcontext
from math import copysign, factorial, fmod, inf, isinf, isnan, nan
from re import ASCII, compile as re_compile, escape, sub

from scicalc.errors import (ConsecutiveOperators, DivisionByZero, DomainError, EmptyExpression, InsufficientOperands,
                            InvalidToken, MalformedExpression, MismatchedParentheses, ModuloByZero, UnknownToken)
from scicalc.tokens import BINARY_OPERATORS, CONSTANTS, FACTORIAL, FUNCTIONS, MAX_FACTORIAL, OPERATORS, Token, TokenType


MAX_DECIMALS = 10
RESULT_QUANTUM = Decimal(1).scaleb(-MAX_DECIMALS)
# Enough digits to hold the largest double plus every kept decimal place
DECIMAL_PRECISION = 400

# Alternation order is the match priority: functions must win over the constant 'e' and the number 10
TOKEN_PATTERN = re_compile(rf"(?P<function>{'|'.join(escape(i) for i in FUNCTIONS)})"
                           rf"|(?P<number>\d+(?:\.\d+)?)"
                           rf"|(?P<constant>{'|'.join(escape(i) for i in CONSTANTS)})"
                           rf"|(?P<operator>[{escape(BINARY_OPERATORS)}])"
                           rf"|(?P<factorial>{escape(FACTORIAL)})"
                           rf"|(?P<paren>[()])", ASCII)
CONSECUTIVE_OPS_PATTERN = re_compile(rf"[{escape(BINARY_OPERATORS)}]{{2,}}")

MULTIPLY = Token(TokenType.OPERATOR, '*')
ZERO = Token(TokenType.NUMBER, '0')


def calculate(expression):
    if expression is None or not expression.strip():
        raise EmptyExpression()

    expression = sub(r"\s+", "", expression, flags=ASCII).replace('÷', '/')

    if CONSECUTIVE_OPS_PATTERN.search(expression):
        raise ConsecutiveOperators()

    tokens = insert_implicit_multiplication(normalize_unary(tokenize(expression)))

    return format_result(evaluate_rpn(shunting_yard(tokens)))

# Appends a function call to the end of a text buffer
# param current_text - text typed so far, may be None
# param function_name - name of the function to append, e.g. "sin"
def insert_function(current_text, function_name):
    if current_text is None:
        current_text = ""

    return f"{current_text}{function_name}()"

def tokenize(text):
    tokens = []
    pos = 0

    while pos < len(text):
        if not (match := TOKEN_PATTERN.match(text, pos)):
            raise InvalidToken(pos)

        tokens.append(Token(get_token_type(match), match.group()))
        pos = match.end()

    return tokens

def get_token_type(match):
    kind = match.lastgroup

    if kind == "paren":
        return TokenType.LEFT_PAREN if match.group() == '(' else TokenType.RIGHT_PAREN

    if kind in ("operator", "factorial"):
        return TokenType.OPERATOR

    return TokenType(kind)

def is_binary_operator(token):
    return token.type is TokenType.OPERATOR and token.text in BINARY_OPERATORS

# Rewrites a unary minus as "0 -" so the rest of the pipeline only deals with binary minus
def normalize_unary(tokens):
    out = []

    for i, tok in enumerate(tokens):
        # Only a binary operator opens an operand, so "3!-2" stays a subtraction
        if tok.type is TokenType.OPERATOR and tok.text == '-':
            if i == 0 or is_binary_operator(tokens[i - 1]) or tokens[i - 1].type is TokenType.LEFT_PAREN:
                out.append(ZERO)

        out.append(tok)

    return out

def ends_value(tok):
    return tok.type in (TokenType.NUMBER, TokenType.CONSTANT, TokenType.RIGHT_PAREN)

def starts_value(tok):
    return tok.type in (TokenType.FUNCTION, TokenType.LEFT_PAREN, TokenType.CONSTANT)

# e.g. 9sin(90) -> 9*sin(90), 9(3+1) -> 9*(3+1), πe -> π*e
def insert_implicit_multiplication(tokens):
    out = []

    for i, tok in enumerate(tokens):
        out.append(tok)

        if i + 1 < len(tokens) and ends_value(tok) and starts_value(tokens[i + 1]):
            out.append(MULTIPLY)

    return out

def should_pop(top, incoming):
    if top.type is not TokenType.OPERATOR:
        return False

    prec_t, prec_i = OPERATORS[top.text].precedence, OPERATORS[incoming.text].precedence

    if OPERATORS[incoming.text].right_assoc:
        return prec_i < prec_t

    return prec_i <= prec_t

# Shunting Yard algorithm
def shunting_yard(tokens):
    output, ops = [], []

    for tok in tokens:
        if tok.type is TokenType.NUMBER:
            output.append(tok)
        elif tok.type is TokenType.CONSTANT:
            output.append(Token(TokenType.NUMBER, repr(CONSTANTS[tok.text])))
        elif tok.type is TokenType.FUNCTION:
            ops.append(tok)
        elif tok.type is TokenType.OPERATOR:
            while ops and should_pop(ops[-1], tok):
                output.append(ops.pop())

            ops.append(tok)
        elif tok.type is TokenType.LEFT_PAREN:
            ops.append(tok)
        elif tok.type is TokenType.RIGHT_PAREN:
            while ops and ops[-1].type is not TokenType.LEFT_PAREN:
                output.append(ops.pop())

            if not ops:
                raise MismatchedParentheses()

            ops.pop()

            # A function right before '(' takes the group that was just closed as its argument
            if ops and ops[-1].type is TokenType.FUNCTION:
                output.append(ops.pop())
        else:
            raise UnknownToken(tok)

    while ops:
        if (tok := ops.pop()).type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN):
            raise MismatchedParentheses()

        output.append(tok)

    return output

def evaluate_rpn(tokens):
    values = []

    for tok in tokens:
        if tok.type is TokenType.NUMBER:
            values.append(float(tok.text))
        elif tok.type is TokenType.CONSTANT:
            values.append(CONSTANTS[tok.text])
        elif tok.type is TokenType.FUNCTION:
            if not values:
                raise InsufficientOperands(tok, kind="function")

            values.append(apply_function(tok.text, values.pop()))
        elif tok.type is TokenType.OPERATOR and tok.text == FACTORIAL:
            if not values:
                raise InsufficientOperands(tok)

            values.append(apply_factorial(values.pop()))
        elif tok.type is TokenType.OPERATOR:
            if len(values) < 2:
                raise InsufficientOperands(tok)

            right = values.pop()
            left = values.pop()
            values.append(apply_operator(tok.text, left, right))
        else:
            raise UnknownToken(tok)

    if len(values) != 1:
        raise MalformedExpression(len(values))

    return values[0]

def apply_function(name, value):
    spec = FUNCTIONS[name]

    if spec.domain is not None and not spec.domain(value):
        raise DomainError(spec.domain_msg)

    # math raises where IEEE 754 yields a value, e.g. exp(1000) or sin(inf)
    try:
        return spec.transform(value)
    except OverflowError:
        return inf
    except ValueError:
        return nan

def apply_factorial(value):
    if value < 0 or not float(value).is_integer():
        raise DomainError("Factorial is only defined for non-negative integers")

    if value > MAX_FACTORIAL:
        raise DomainError("Factorial result is too large")

    return float(factorial(int(value)))

def apply_operator(op, left, right):
    if op == '+':
        return left + right
    if op == '-':
        return left - right
    if op == '*':
        return left * right
    if op == '/':
        if right == 0:
            raise DivisionByZero()
        return left / right
    if op == '%':
        if right == 0:
            raise ModuloByZero()
        return nan if isinf(left) else fmod(left, right)
    if op == '^':
        return power(left, right)

    raise UnknownToken(op)

# IEEE 754 pow: invalid operations give NaN and overflow gives an infinity instead of raising
def power(base, exponent):
    try:
        return base ** exponent if base >= 0 else _negative_power(base, exponent)
    except OverflowError:
        if base < 0 and fmod(exponent, 2) in (1, -1):
            return -inf
        return inf
    except ZeroDivisionError:
        return copysign(inf, base) if fmod(exponent, 2) in (1, -1) else inf

def _negative_power(base, exponent):
    if not float(exponent).is_integer() and not isinf(exponent):
        return nan

    return base ** exponent

def format_result(value):
    if isnan(value):
        return "NaN"

    if isinf(value):
        return "∞" if value > 0 else "-∞"

    # repr gives the shortest decimal that round-trips, so half-up applies to the digits a user sees
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        rounded = Decimal(repr(value)).quantize(RESULT_QUANTUM, rounding=ROUND_HALF_UP)

    result = format(rounded, 'f')

    if '.' in result:
        result = result.rstrip('0').rstrip('.')

    return "0" if result == "-0" else result
