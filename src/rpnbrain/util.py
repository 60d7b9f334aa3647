from functools import wraps
import math


class BrainError(Exception):
    pass


class EvaluationError(BrainError):
    '''
    Raised while walking the stack; never escapes Machine.evaluate().
    '''
    def __init__(self, kind, message, name=None):
        super().__init__(message)
        self.kind = kind
        self.name = name


def wrap_user_errors(fmt):
    '''
    Decorator that converts foreign exceptions to BrainErrors.

    Passes through BrainErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BrainError:
                raise
            except Exception as e:
                raise BrainError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def ieee(f):
    '''
    Make a math function answer NaN rather than raise on a domain error.
    '''
    @wraps(f)
    def wrapper(*args):
        try:
            return f(*args)
        except ValueError:
            return math.nan
    return wrapper
