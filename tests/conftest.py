from pytest import fixture

from rpnbrain.machine import Machine


@fixture
def machine():
    return Machine()


@fixture
def push(machine):
    '''
    Push words in order: numbers as operands, registered symbols as
    operations, anything else as a variable. Return the last result.
    '''
    def push(*words):
        result = machine.evaluate()
        for word in words:
            if isinstance(word, (int, float)):
                result = machine.push_operand(word)
            elif word in machine.registry:
                result = machine.push_symbol(word)
            else:
                result = machine.push_variable(word)
        return result
    return push
