'''
Operation vocabulary tests
'''

import math

from rpnbrain.operations import (BINARY_FUNCTIONS, Kind, Operation, Operator,
                                 PI, Precedence, REGISTRY, UNARY_FUNCTIONS,
                                 arity, display_symbol, lookup,
                                 precedence_class)

from pytest import raises


def test_registry_holds_builtins():
    assert set(REGISTRY) == {'√', 'sin', 'cos', '±', '×', '+', '÷', '−', 'π'}
    assert lookup('+') == Operation.binary(Operator.ADD)
    assert lookup('sin').kind is Kind.UNARY
    assert lookup('π') is PI
    assert lookup('π').value == math.pi


def test_unknown_symbol():
    assert lookup('%') is None
    assert lookup('-') is None


def test_registry_is_read_only():
    with raises(TypeError):
        REGISTRY['%'] = Operation.binary(Operator.DIVIDE)


def test_operand_display():
    assert display_symbol(Operation.operand(3)) == '3'
    assert display_symbol(Operation.operand(3.0)) == '3'
    assert display_symbol(Operation.operand(-0.0)) == '0'
    assert display_symbol(Operation.operand(2.5)) == '2.5'
    assert display_symbol(Operation.operand(-0.125)) == '-0.125'
    assert display_symbol(Operation.operand(math.inf)) == 'inf'


def test_named_display():
    assert display_symbol(Operation.variable('M')) == 'M'
    assert display_symbol(PI) == 'π'
    assert display_symbol(lookup('√')) == '√'
    assert str(lookup('−')) == '−'


def test_precedence():
    assert precedence_class(Operation.operand(1)) is Precedence.ATOMIC
    assert precedence_class(Operation.variable('M')) is Precedence.ATOMIC
    assert precedence_class(PI) is Precedence.ATOMIC
    assert precedence_class(lookup('cos')) is Precedence.ATOMIC
    for symbol in '×+÷−':
        assert precedence_class(lookup(symbol)) is Precedence.BINARY


def test_arity():
    assert arity(Operation.operand(1)) == 0
    assert arity(PI) == 0
    assert arity(lookup('±')) == 1
    assert arity(lookup('÷')) == 2


def test_operations_compare_by_value():
    assert Operation.operand(1) == Operation.operand(1.0)
    assert Operation.variable('M') != Operation.variable('X')
    assert len({Operation.unary('√'), Operation.unary(Operator.SQRT)}) == 1


def test_division_by_zero_is_ieee():
    divide = BINARY_FUNCTIONS[Operator.DIVIDE]
    assert divide(1.0, 0.0) == math.inf
    assert divide(-1.0, 0.0) == -math.inf
    assert divide(1.0, -0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))
    assert divide(6.0, 2.0) == 3.0


def test_domain_errors_are_nan():
    assert math.isnan(UNARY_FUNCTIONS[Operator.SQRT](-1.0))
    assert math.isnan(UNARY_FUNCTIONS[Operator.SIN](math.inf))
    assert UNARY_FUNCTIONS[Operator.SQRT](9.0) == 3.0
    assert UNARY_FUNCTIONS[Operator.NEGATE](2.0) == -2.0
