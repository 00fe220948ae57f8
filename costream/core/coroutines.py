"""
Coroutine wrappers: the yielder handed to coroutine bodies, the coroutine
base class and the Consumer.

A Consumer is started right away (the body runs up to its first
`await_`) and is resumed by feeding it values:

.. sourcecode:: python

    def pair(y):
        return [y.await_(), y.await_()]

    c = Consumer(pair)
    c.feed('first').feed('second')
    c.close() # => ['first', 'second']
"""
__all__ = [
    'Yielder', 'Coroutine', 'Consumer', 'DebugConsumer', 'Launcher',
    'consumer', 'debug_consumer', 'getdefaultdebug', 'setdefaultdebug',
    'getdefaultoutput', 'setdefaultoutput'
]

import sys
import functools

from costream.core import corolets
from costream.core.events import CoroutineError, CoroutineExit, SinkExhausted
from costream.core.sinks import Sink

_DEBUG = False
_OUTPUT = None


def getdefaultdebug():
    return _DEBUG


def setdefaultdebug(flag):
    """Set the default `debug` flag of new coroutines. Coroutines with the
    flag set print a trace line for every resume and for their termination
    (see :func:`setdefaultoutput`)."""
    global _DEBUG
    _DEBUG = bool(flag)


def getdefaultoutput():
    return _OUTPUT or sys.stderr


def setdefaultoutput(stream):
    """Set the stream the debug traces are written to. `None` means
    sys.stderr."""
    global _OUTPUT
    _OUTPUT = stream


class Yielder(object):
    """The object passed as the first argument to a coroutine body.

    * `await_()` suspends the body and evaluates to the next input value;
    * `emit(value)` hands a value downstream (transformer bodies only);
    * iterating the yielder awaits values until the coroutine is cancelled.

    After the cancellation signal (:class:`CoroutineExit`) was raised by
    `await_`, awaiting again is an error.
    """
    __slots__ = ('coroutine', 'cancelled')

    def __init__(self, coroutine=None):
        self.coroutine = coroutine
        self.cancelled = False

    def await_(self):
        if self.cancelled:
            raise CoroutineError(
                "%r awaited again after being cancelled" % self.coroutine)
        try:
            return self._receive()
        except CoroutineExit:
            self.cancelled = True
            raise

    def _receive(self):
        return self.coroutine._suspend()

    def emit(self, value):
        raise CoroutineError("%r can't emit values" % self.coroutine)

    def __iter__(self):
        while True:
            try:
                value = self.await_()
            except CoroutineExit:
                return
            yield value

    def __repr__(self):
        return "<%s for %r%s>" % (
            self.__class__.__name__,
            self.coroutine,
            self.cancelled and " (cancelled)" or ""
        )


class Coroutine(object):
    """
    Wraps a body running in a greenlet. Handles the state, the result and
    the debug traces; subclasses decide when and how the body gets resumed.

    A body that lets :class:`CoroutineExit` propagate terminates normally, its
    result being the value carried by the exception. Any other exception
    terminates the coroutine and propagates to the caller that resumed it.
    """
    STATE_RUNNING, STATE_SUSPENDED, STATE_TERMINATED = range(3)
    _state_names = "RUNNING", "SUSPENDED", "TERMINATED"
    __slots__ = (
        'name', 'state', 'result', 'coro', 'yielder', 'debug', '__weakref__'
    )
    running = property(lambda self: self.state == self.STATE_RUNNING)
    terminated = property(lambda self: self.state == self.STATE_TERMINATED)
    state_name = property(lambda self: self._state_names[self.state])

    def __init__(self, body, yielder, name=None):
        self.name = name or getattr(body, '__name__', None) or repr(body)
        self.state = self.STATE_SUSPENDED
        self.result = None
        self.debug = self.default_debug()
        self.yielder = yielder
        yielder.coroutine = self
        self.coro = corolets.CoroGreenlet(body, yielder)

    @staticmethod
    def default_debug():
        return getdefaultdebug()

    def trace(self, message):
        print(message, file=getdefaultoutput())

    def _suspend(self, value=None):
        return corolets.suspend(self.coro, value)

    def _resume(self, switch, *args, **kwargs):
        """Runs the body with `switch` (resume or throw) and returns what the
        body suspended with, or its result if it terminated."""
        if self.debug:
            self.trace("Running %r with: %r" % (self, args))
        self.state = self.STATE_RUNNING
        try:
            rv = switch(self.coro, *args, **kwargs)
        except CoroutineExit as exc:
            rv = exc.value
        except BaseException:
            self._terminate(None)
            raise
        if self.coro.dead:
            self._terminate(rv)
        else:
            self.state = self.STATE_SUSPENDED
        return rv

    def _terminate(self, result):
        self.state = self.STATE_TERMINATED
        self.result = result
        if self.debug:
            self.trace("%r terminated with: %r" % (self, result))

    def __repr__(self):
        return "<%s: %s at 0x%08X (%s)>" % (
            self.__class__.__name__,
            self.name,
            id(self),
            self.terminated and repr(self.result) or self.state_name.lower()
        )
    __str__ = __repr__


class Consumer(Coroutine, Sink):
    """
    A coroutine that only consumes values.

    The body is called immediately as `body(yielder, *args, **kwargs)` and
    runs until it calls `yielder.await_()` (or returns). Feeding a value
    resumes it at that point, `await_` evaluating to the fed value.

    Closing the consumer raises :class:`CoroutineExit` at the point where it
    last awaited; it is expected to terminate without awaiting again. The
    result of `close` is what the body returned (or the value carried by the
    exception if the body let it propagate).
    """
    __slots__ = ()

    def __init__(self, body, *args, **kwargs):
        super(Consumer, self).__init__(body, Yielder())
        self._resume(corolets.resume, *args, **kwargs)

    exhausted = Coroutine.terminated

    def feed(self, value):
        """Feeds `value` as an input to the consumer. Returns the consumer so
        feeds can be chained."""
        if self.state == self.STATE_TERMINATED:
            raise SinkExhausted("%r has terminated" % self)
        if self.state == self.STATE_RUNNING:
            raise CoroutineError("%r is already running" % self)
        self._resume(corolets.resume, value)
        return self
    accept = feed

    def close(self):
        """Terminates the consumer. Returns its result; closing a terminated
        consumer just returns the result again."""
        if self.state == self.STATE_RUNNING:
            raise CoroutineError("%r can't close itself" % self)
        if self.state == self.STATE_SUSPENDED:
            self._resume(corolets.throw, CoroutineExit())
        return self.result


class DebugConsumer(Consumer):
    "A Consumer that always traces."
    __slots__ = ()

    @staticmethod
    def default_debug():
        return True


def ambient(func):
    """Adapts a function that uses the ambient `await_`/`emit` functions to
    the body signature (yielder first)."""
    @functools.wraps(func)
    def body(yielder, *args, **kwargs):
        return func(*args, **kwargs)
    return body


class LauncherDocstring(object):
    """
    Makes the wrapped function's docstring visible on the launcher instance
    while keeping the class docstring on the class.
    """
    def __init__(self, doc):
        self.doc = doc

    def __get__(self, inst, ownr):
        if inst:
            return inst.wrapped_func.__doc__
        else:
            return self.doc


class Launcher(object):
    __doc__ = LauncherDocstring("""
    A decorator that turns a plain function using the ambient `await_`,
    `emit` and `inputs` functions into a coroutine constructor. Example::

        @consumer
        def counter(start):
            result = start
            for value in inputs():
                result += value
            return "Final value: %s" % result

        counter(10) # => a started Consumer
    """)
    __slots__ = ('wrapped_func', 'constructor')

    def __init__(self, func, constructor=Consumer):
        self.wrapped_func = func
        self.constructor = constructor

    @property
    def __name__(self):
        return self.wrapped_func.__name__

    def __repr__(self):
        return "<%s constructor at 0x%08X wrapping %r>" % (
            self.constructor.__name__,
            id(self),
            self.wrapped_func,
        )
    __str__ = __repr__

    def __get__(self, instance, owner):
        """
        Decorating methods with a class needs the class to be a descriptor,
        __call__ doesn't get bound to the instance like with functions.
        """
        if instance is None:
            return self
        return self.__class__(
            self.wrapped_func.__get__(instance, owner), self.constructor)

    def __call__(self, *args, **kwargs):
        return self.constructor(ambient(self.wrapped_func), *args, **kwargs)


def consumer(func):
    return Launcher(func, Consumer)


def debug_consumer(func):
    return Launcher(func, DebugConsumer)
