from functools import reduce
import operator

import regex

from .operations import REGISTRY
from .util import BrainError


class Lexer:
    '''
    Lexer for calculator keystrokes typed as words.

    Each lexeme stands for exactly one button press: a number, a constant or
    operator, a variable, storing to a variable, or a command. There is no
    infix grammar here.
    '''

    # ASCII spellings of the registry's symbols.
    ALIASES = {
        '*': '×',
        '/': '÷',
        '-': '−',
        # Like dc, _ is unary minus.
        '_': '±',
        'sqrt': '√',
        'pi': 'π',
    }
    COMMANDS = {
        'c': 'clear',
        'u': 'undo',
    }

    # Integral part of a number
    INTEGRAL = r'''
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        \d
                        |
                        # Thousands separators
                        _\d{3}
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  (?:
                      \d+
                  )
                  '''
    # 1, 1_200, 1_200. (notice trailing dot), 1.5, .5
    NUMBER = r'''
              (?:
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)

    # Longest first, and words must end on a word boundary: cos isn't c os.
    SYMBOL = r'(?:' + r'|'.join(
        regex.escape(symbol) + (r'(?!\w)' if symbol[-1].isalnum() else '')
        for symbol
        in sorted(REGISTRY.keys() | ALIASES.keys(), key=len, reverse=True)
    ) + r')'
    # Variables are capitalized so they never collide with commands.
    NAME = r'\p{Lu}\w*'
    STORE = r'[→>]'
    COMMAND = r'(?:' + r'|'.join(map(regex.escape, COMMANDS)) + r')(?!\w)'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<symbol>' + SYMBOL + r')|' \
             r'(?<store>' + STORE + r')(?<register>' + NAME + r')|' \
             r'(?<variable>' + NAME + r')|' \
             r'(?<command>' + COMMAND + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises on the first bad lexeme, after yielding the good ones before it.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise BrainError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a console.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the groups a lexeme matched, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
