# Exceptions raised by the calculator pipeline
# Every error carries a message meant to be shown to the user as-is


class CalculatorError(Exception):
    pass


class InvalidInput(CalculatorError, ValueError):
    pass


class EmptyExpression(InvalidInput):
    def __init__(self):
        super().__init__("Input is empty")


class ConsecutiveOperators(InvalidInput):
    def __init__(self):
        super().__init__("Invalid input: Consecutive operators")


class InvalidToken(InvalidInput):
    def __init__(self, position):
        super().__init__(f"Invalid token at position {position}")
        self.position = position


class MismatchedParentheses(InvalidInput):
    def __init__(self):
        super().__init__("Mismatched parentheses")


class UnknownToken(InvalidInput):
    def __init__(self, token):
        super().__init__(f"Unknown token: {token}")
        self.token = token


class InsufficientOperands(InvalidInput):
    def __init__(self, token, kind="operation"):
        super().__init__(f"Insufficient values for {kind} {token}")
        self.token = token


class MalformedExpression(InvalidInput):
    def __init__(self, count):
        super().__init__(f"Invalid expression: {count} values left after evaluation")
        self.count = count


class DomainError(CalculatorError, ValueError):
    pass


class CalculationError(CalculatorError, ArithmeticError):
    pass


class DivisionByZero(CalculationError, ZeroDivisionError):
    def __init__(self):
        super().__init__("Cannot divide by zero")


class ModuloByZero(CalculationError, ZeroDivisionError):
    def __init__(self):
        super().__init__("Cannot mod by zero")
