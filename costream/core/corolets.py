"""
Greenlet glue for coroutine bodies.

Every coroutine body runs in a greenlet, so a body can suspend from any
depth of ordinary function calls: `await_` and `emit` are plain calls that
switch back to whoever resumed the body.

The yielder of the body that is currently running is attached to the
greenlet, this is what makes the ambient functions work:

.. sourcecode:: python

    @consumer
    def counter(start):
        total = start
        for value in inputs():
            total += value
        return "Final value: %s" % total

    c = counter(10)
    c.feed(10).feed(1000).feed(10000)
    c.close() # => 'Final value: 11020'
"""
__all__ = [
    'CoroGreenlet', 'getcurrent', 'resume', 'throw', 'suspend', 'run_body',
    'current_yielder', 'await_', 'emit', 'inputs'
]

from greenlet import greenlet, getcurrent

from costream.core.events import CoroutineError


class CoroGreenlet(greenlet):
    """A greenlet that runs a coroutine body with its yielder as the first
    argument. The parent is reassigned on every resume so control always
    goes back to whoever resumed the body (when the body suspends or
    when it returns)."""

    def __init__(self, body, yielder):
        super(CoroGreenlet, self).__init__(parent=getcurrent())
        self.body = body
        self.yielder = yielder

    def run(self, *args, **kwargs):
        """This runs in a greenlet"""
        return run_body(self.yielder, self.body, args, kwargs)

    def __repr__(self):
        return "<%s instance at 0x%08X wrapping %r>" % (
            self.__class__.__name__,
            id(self),
            getattr(self, 'body', 'N/A'),
        )
    __str__ = __repr__


def resume(coro, *args, **kwargs):
    "Switch to `coro` from the current greenlet, it will switch back here."
    coro.parent = getcurrent()
    return coro.switch(*args, **kwargs)


def throw(coro, exc):
    "Raise `exc` in `coro` at the point where it last suspended."
    coro.parent = getcurrent()
    return coro.throw(exc)


def suspend(coro, value=None):
    """Suspend `coro` (which must be the running greenlet) and hand `value`
    to whoever resumed it. Returns what the next resume sends."""
    current = getcurrent()
    if current is not coro:
        raise CoroutineError(
            "Yielder used outside of its coroutine: current is %r but it "
            "should be %r" % (current, coro))
    return coro.parent.switch(value)


def run_body(yielder, body, args=(), kwargs=None):
    """Call `body(yielder, *args, **kwargs)` with `yielder` being the
    ambient yielder of the current greenlet for the duration of the call."""
    current = getcurrent()
    previous = getattr(current, 'yielder', None)
    current.yielder = yielder
    try:
        return body(yielder, *args, **(kwargs or {}))
    finally:
        current.yielder = previous


def current_yielder():
    yielder = getattr(getcurrent(), 'yielder', None)
    if yielder is None:
        raise CoroutineError(
            "await_/emit/inputs can only be used inside a coroutine body")
    return yielder


def await_():
    """Evaluates to the next input value of the running coroutine body."""
    return current_yielder().await_()


def emit(value):
    """Hands `value` downstream from the running transformer body."""
    return current_yielder().emit(value)


def inputs():
    """Iterates over the input values of the running coroutine body. The
    iteration ends quietly when the coroutine is cancelled."""
    return iter(current_yielder())
