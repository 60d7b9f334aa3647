'''
Operation vocabulary: everything that can sit on a brain's stack.

Operations are plain immutable values. Operators are referred to by
identifier; what they compute lives in the dispatch tables below.
'''

from collections import namedtuple
from enum import Enum
from types import MappingProxyType
import math
import operator

from .util import ieee


class Kind(Enum):
    OPERAND = 'operand'
    VARIABLE = 'variable'
    CONSTANT = 'constant'
    UNARY = 'unary'
    BINARY = 'binary'


class Precedence(Enum):
    # Never needs parentheses as a sub-expression.
    ATOMIC = 'atomic'
    BINARY = 'binary'


class Operator(Enum):
    '''
    Built-in operator identifiers, valued by their display symbol.
    '''
    SQRT = '√'
    SIN = 'sin'
    COS = 'cos'
    NEGATE = '±'
    MULTIPLY = '×'
    ADD = '+'
    DIVIDE = '÷'
    SUBTRACT = '−'


class Operation(namedtuple('Operation', 'kind name value operator')):
    '''
    One entry of the postfix stack.

    Use the constructors rather than instantiating directly.
    '''
    __slots__ = ()

    @classmethod
    def operand(cls, value):
        return cls(Kind.OPERAND, None, float(value), None)

    @classmethod
    def variable(cls, name):
        return cls(Kind.VARIABLE, name, None, None)

    @classmethod
    def constant(cls, name, value):
        return cls(Kind.CONSTANT, name, float(value), None)

    @classmethod
    def unary(cls, operator):
        return cls(Kind.UNARY, None, None, Operator(operator))

    @classmethod
    def binary(cls, operator):
        return cls(Kind.BINARY, None, None, Operator(operator))

    def __str__(self):
        return display_symbol(self)


def _divide(left, right):
    '''
    Float division, answering infinities and NaN on a zero divisor.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


# Unary functions take the single operand.
UNARY_FUNCTIONS = MappingProxyType({
    Operator.SQRT: ieee(math.sqrt),
    Operator.SIN: ieee(math.sin),
    Operator.COS: ieee(math.cos),
    Operator.NEGATE: operator.__neg__,
})

# Binary functions take (left, right) in push order: 10 2 − is 10 − 2.
BINARY_FUNCTIONS = MappingProxyType({
    Operator.MULTIPLY: operator.__mul__,
    Operator.ADD: operator.__add__,
    Operator.DIVIDE: _divide,
    Operator.SUBTRACT: operator.__sub__,
})

_ARITIES = {
    Kind.UNARY: 1,
    Kind.BINARY: 2,
}


def format_number(value):
    '''
    Integer literal if value has no fractional part, else its full decimal.
    '''
    if value.is_integer():
        return str(int(value))
    return repr(value)


def display_symbol(op):
    if op.kind is Kind.OPERAND:
        return format_number(op.value)
    elif op.kind in (Kind.VARIABLE, Kind.CONSTANT):
        return op.name
    else:
        return op.operator.value


def precedence_class(op):
    '''
    Return the parenthesization class of an operation.

    All binary operators share one class; there is no arithmetic precedence
    between them.
    '''
    if op.kind is Kind.BINARY:
        return Precedence.BINARY
    return Precedence.ATOMIC


def arity(op):
    '''
    Return the number of values an operation consumes from the stack.
    '''
    return _ARITIES.get(op.kind, 0)


def function(op):
    '''
    Return the pure function an operator operation computes.
    '''
    if op.kind is Kind.UNARY:
        return UNARY_FUNCTIONS[op.operator]
    elif op.kind is Kind.BINARY:
        return BINARY_FUNCTIONS[op.operator]
    raise TypeError('{} is not an operator'.format(display_symbol(op)))


PI = Operation.constant('π', math.pi)

# Built-ins, by display symbol.
REGISTRY = MappingProxyType({
    str(op): op
    for op
    in [Operation.unary(Operator.SQRT),
        Operation.unary(Operator.SIN),
        Operation.unary(Operator.COS),
        Operation.unary(Operator.NEGATE),
        Operation.binary(Operator.MULTIPLY),
        Operation.binary(Operator.ADD),
        Operation.binary(Operator.DIVIDE),
        Operation.binary(Operator.SUBTRACT),
        PI]
})


def lookup(symbol, registry=REGISTRY):
    '''
    Return the registered operation for a display symbol, or None.
    '''
    return registry.get(symbol)
