'''
Outcome of evaluating a brain's stack.

Nothing is raised across the engine boundary: every evaluation answers either
Ok(value) or Err(kind, message).
'''

from collections import namedtuple
from enum import Enum


class ErrorKind(Enum):
    UNBOUND_VARIABLE = 'unbound variable'
    MISSING_OPERAND = 'missing operand'
    INFINITE_RESULT = 'infinite result'
    NOT_A_NUMBER = 'not a number'
    GENERIC = 'generic'


class Ok(namedtuple('Ok', 'value')):
    __slots__ = ()
    ok = True


class Err(namedtuple('Err', 'kind message name', defaults=(None,))):
    '''
    Failed evaluation.

    :param kind: ErrorKind member.
    :param message: Human readable explanation, fit for a display.
    :param name: Offending variable, for ErrorKind.UNBOUND_VARIABLE.
    '''
    __slots__ = ()
    ok = False


__all__ = 'ErrorKind', 'Ok', 'Err'
