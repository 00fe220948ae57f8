"""
Coroutine exceptions and the tags passed between chained coroutines.
"""
__all__ = [
    'CoroutineError', 'SinkExhausted', 'CoroutineExit', 'ContractViolation',
    'NotASink', 'NotASource', 'Yielding', 'awaiting'
]


class CoroutineError(Exception):
    """Base class for the errors raised by costream. Raised as is when a
    coroutine is misused at runtime: awaiting again after the cancellation
    signal, feeding a coroutine from inside its own body, calling the ambient
    functions outside of a coroutine body."""


class SinkExhausted(CoroutineError):
    """Raised when feeding a coroutine that has already terminated."""


class CoroutineExit(Exception):
    """The cancellation signal. It is raised at the point where a coroutine
    last requested an input value (or, when the input is exhausted, at the
    next request).

    The coroutine is expected to terminate without awaiting again. It can
    either let the exception propagate (the coroutine result is then *value*)
    or catch it, clean up, and return a result.
    """
    def __init__(self, value=None):
        super(CoroutineExit, self).__init__(value)
        self.value = value


class ContractViolation(CoroutineError, TypeError):
    """Raised when wiring an object that lacks the required capability."""


class NotASink(ContractViolation):
    "The object doesn't accept values (no `accept` and no known adapter)."


class NotASource(ContractViolation):
    "The object can't be iterated."


class Yielding(object):
    """Tag sent by an upstream coroutine in a chain when it emits a value."""
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.value)


class Awaiting(object):
    """Tag sent by an upstream coroutine in a chain when it needs input."""
    __slots__ = ()

    def __repr__(self):
        return "<Awaiting>"

awaiting = Awaiting()
