import logging
import math

from .operations import (Kind, Operation, Precedence, REGISTRY, arity,
                         display_symbol, function, lookup, precedence_class)
from .result import ErrorKind, Ok, Err
from .util import EvaluationError


logger = logging.getLogger(__name__)


class Machine:
    '''
    Postfix expression engine (the brain of a calculator).

    Holds the operations pushed so far, oldest first, and the values of
    variables. Every push re-evaluates the whole stack; the stack is the only
    thing a result or description is computed from.
    '''

    # Between independent expressions in a description.
    SEPARATOR = ', '
    # Stands in for a missing binary operand in a description.
    UNKNOWN = '?'

    def __init__(self, registry=REGISTRY):
        '''
        Create a brain with an empty stack and no variables set.

        :param registry: Read-only mapping of display symbol to operation.
        '''
        self.registry = registry
        self.stack = []
        self.bindings = dict()

    def _pshstack(self, op):
        self.stack.append(op)

    def push_operand(self, value):
        '''
        Push a literal number and evaluate.
        '''
        self._pshstack(Operation.operand(value))
        return self.evaluate()

    def push_variable(self, name):
        '''
        Push a reference to a variable and evaluate.
        '''
        self._pshstack(Operation.variable(name))
        return self.evaluate()

    def push_symbol(self, symbol):
        '''
        Push the registered constant or operator with this symbol and evaluate.

        Unknown symbols leave the stack alone; the current stack is still
        evaluated.
        '''
        op = lookup(symbol, self.registry)
        if op is None:
            logger.debug('Ignoring unknown symbol %r', symbol)
        else:
            self._pshstack(op)
        return self.evaluate()

    def pop_last(self):
        '''
        Drop the most recently pushed operation, if any.
        '''
        if self.stack:
            self.stack.pop()

    def clear(self):
        '''
        Clear everything from the stack. Variables are kept.
        '''
        self.stack.clear()

    def set_binding(self, name, value):
        self.bindings[name] = float(value)

    def clear_bindings(self):
        self.bindings.clear()

    def _resolve(self, op):
        '''
        Return the value of an operand, variable or constant.
        '''
        if op.kind is Kind.VARIABLE:
            try:
                return self.bindings[op.name]
            except KeyError:
                raise EvaluationError(ErrorKind.UNBOUND_VARIABLE,
                                      '{} is not set'.format(op.name),
                                      name=op.name) from None
        return op.value

    def _missing(self, op):
        return EvaluationError(ErrorKind.MISSING_OPERAND,
                               'Missing operand for {}'.format(op))

    def _evaluate(self):
        '''
        Evaluate the expression ending at the top of the stack.

        Returns the value, or None if the stack is empty, and the number of
        operations below that expression.

        Walks down from the top, parking operators until they have collected
        enough operands. The first operand an operator collects is the one
        nearest the top, i.e. its right-hand side.
        '''
        pending = []
        index = len(self.stack)
        while True:
            if index == 0:
                if pending:
                    raise self._missing(pending[-1][0])
                return None, index
            index -= 1
            op = self.stack[index]
            if arity(op):
                pending.append((op, []))
                continue
            value = self._resolve(op)
            while pending:
                operator, operands = pending[-1]
                operands.append(value)
                if len(operands) < arity(operator):
                    break
                pending.pop()
                # If you don't reverse, 10 2 − is 2 − 10.
                value = function(operator)(*reversed(operands))
            else:
                return value, index

    def evaluate(self):
        '''
        Evaluate the stack, answering Ok(value) or Err(kind, message).
        '''
        try:
            value, left = self._evaluate()
        except EvaluationError as e:
            logger.debug('%s failed: %s', self, e)
            return Err(e.kind, e.args[0], e.name)
        logger.debug('%s = %s with %d left over', self, value, left)
        if value is None:
            return Err(ErrorKind.GENERIC, 'Nothing to evaluate')
        elif math.isinf(value):
            return Err(ErrorKind.INFINITE_RESULT, 'Result is infinite')
        elif math.isnan(value):
            return Err(ErrorKind.NOT_A_NUMBER, 'Not a number')
        return Ok(value)

    def _binary_description(self, op, left, right, following):
        '''
        Combine two fragments, parenthesized unless this is the last
        operation or the next one is the same binary operator.
        '''
        fragment = left + display_symbol(op) + right
        if following is None:
            return fragment
        if precedence_class(following) is Precedence.BINARY and \
           following.operator is op.operator:
            return fragment
        return '(' + fragment + ')'

    def describe(self):
        '''
        Return the stack in infix notation, independent expressions separated
        by SEPARATOR.
        '''
        fragments = []
        for index, op in enumerate(self.stack):
            following = self.stack[index + 1] \
                if index + 1 < len(self.stack) else None
            symbol = display_symbol(op)
            if op.kind is Kind.UNARY:
                # Nothing to apply to: skip.
                if fragments:
                    fragments.append('{}({})'.format(symbol, fragments.pop()))
            elif op.kind is Kind.BINARY:
                if not fragments:
                    fragments.append(self.UNKNOWN + symbol + self.UNKNOWN)
                elif len(fragments) == 1:
                    fragments.append(self.UNKNOWN + symbol + fragments.pop())
                else:
                    right = fragments.pop()
                    left = fragments.pop()
                    fragments.append(self._binary_description(op, left, right,
                                                              following))
            else:
                fragments.append(symbol)
        return self.SEPARATOR.join(fragments)

    def __str__(self):
        return '[{}]'.format(' '.join(map(display_symbol, self.stack)))
