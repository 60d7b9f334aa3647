'''
Calculator brain.

A postfix (RPN) stack of operands, variables, constants and operators, as a
calculator's buttons push them. The brain evaluates its stack after every
push, and can describe it back in ordinary infix notation, parenthesized
where the order of operations needs it:

    3 4 + 5 ×  is  (3+4)×5 = 35

Built-ins: √ sin cos ± × + ÷ − π. Variables (calculator memory) are set by
whoever drives the brain and looked up when evaluating.

Failures never raise out of the brain; they come back as Err results.
'''

from .cli import CLI, Console
from .lexer import Lexer
from .machine import Machine
from .operations import (Kind, Operation, Operator, Precedence, REGISTRY,
                         display_symbol, lookup, precedence_class)
from .result import ErrorKind, Ok, Err


__all__ = ('Machine', 'Operation', 'Operator', 'Kind', 'Precedence',
           'REGISTRY', 'lookup', 'display_symbol', 'precedence_class',
           'ErrorKind', 'Ok', 'Err', 'Lexer', 'Console', 'CLI')
