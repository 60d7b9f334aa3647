from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import BrainError, wrap_user_errors
from .machine import Machine
from .operations import arity, format_number, lookup
from .result import Ok
from .lexer import Lexer


logger = logging.getLogger(__name__)

_LOGGING_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        history = None
        if self.history_file is not None:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class Console:
    '''
    What a calculator's buttons and display do, on top of a Machine.

    Turns lexemes into calls on the machine and keeps the result on display.
    '''

    # Variable that memory store/recall buttons use.
    MEMORY = 'M'
    DEFAULT_VALUE = 0.0

    def __init__(self, machine=None):
        self.machine = Machine() if machine is None else machine
        self.result = Ok(self.DEFAULT_VALUE)

    @wrap_user_errors('Cannot convert {1}')
    def _convert(self, number):
        return float(number.replace('_', ''))

    def feed(self, groups):
        '''
        Press the button a lexeme stands for.

        :param groups: Matched lexeme groups, as Lexer.matchedgroups.
        '''
        if 'number' in groups:
            self.result = self.machine.push_operand(
                self._convert(groups['number']))
        elif 'store' in groups:
            self.store(groups['register'])
        elif 'variable' in groups:
            self.result = self.machine.push_variable(groups['variable'])
        elif 'symbol' in groups:
            symbol = groups['symbol']
            self.result = self.machine.push_symbol(
                Lexer.ALIASES.get(symbol, symbol))
        elif 'command' in groups:
            getattr(self, Lexer.COMMANDS[groups['command']])()

    def store(self, name=None):
        '''
        Store the displayed value into a variable, then re-evaluate.
        '''
        if self.result.ok:
            self.machine.set_binding(name or self.MEMORY, self.result.value)
        self.result = self.machine.evaluate()

    def undo(self):
        self.machine.pop_last()
        self.result = self.machine.evaluate()

    def clear(self):
        '''
        Clear the stack and every variable.
        '''
        self.machine.clear()
        self.machine.clear_bindings()
        self.result = Ok(self.DEFAULT_VALUE)

    def history(self):
        description = self.machine.describe()
        if description:
            return description + ' ='
        return ''

    def display(self):
        if self.result.ok:
            return format_number(self.result.value)
        return 'Error: ' + self.result.message

    def __str__(self):
        history = self.history()
        if history:
            return history + ' ' + self.display()
        return self.display()


class CLI:
    '''
    Command line interface to the calculator brain.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpnbrain_history'

    def dumper(self):
        '''
        Dump all lexeme matches and their arity.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<arity>')
        for line in self._lines():
            for match in lexer.lex(line):
                groups = lexer.matchedgroups(match)
                symbol = groups.get('symbol')
                op = lookup(Lexer.ALIASES.get(symbol, symbol))
                print(*groups.keys(),
                      repr(match.group(0)),
                      None if op is None else arity(op),
                      sep='\t')

    def executor(self):
        '''
        Run a console, printing history and display after each line.
        '''
        console = Console()
        lexer = Lexer()
        for line in self._lines():
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        console.feed(lexer.matchedgroups(match))
            # Abort entire rest of line
            except BrainError as e:
                print(e.args[0], file=stderr)
                if self.args.verbose:
                    logger.exception('Bad input')
            print(console, flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting input if a prompt was explicitly asked for, or both
        stdin and stdout are a tty; plain stdin otherwise.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE)
        else:
            return stdin

    def _lines(self):
        '''
        Return input lines: the -e expressions, or (prompting) stdin.
        '''
        if self.args.expressions is stdin:
            return self._prompting_input()
        return self.args.expressions

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Postfix calculator brain')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='count', default=0)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or the process's command line.
        '''
        self.args = self.argument_parser.parse_args(args)
        level = _LOGGING_LEVELS[min(self.args.verbose,
                                    len(_LOGGING_LEVELS) - 1)]
        logging.basicConfig(level=level, stream=stderr,
                            format='%(name)s: %(message)s')
        try:
            self.args.action()
        except BrainError as e:
            print(e.args[0], file=stderr)
            exit(2)
        except KeyboardInterrupt:
            exit(1)
