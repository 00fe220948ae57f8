"""
Transformer coroutines.

A transformer accepts input values and produces output values without
returning from its execution context. It is used by connecting its input to
a source (any iterable) or its output to a sink, or both:

.. sourcecode:: python

    def running_sum(y, start=0):
        result = start
        for value in y:
            result += value
            y.emit(result)

    rs = Transformer(running_sum)
    list(rs.in_connect([1, 2, 3]))           # => [1, 3, 6]
    rs.out_connect([]).in_connect([1, 2, 3]) # => [1, 3, 6]

`trans.in_connect(source)` returns a :class:`PullConnection`, an iterable
that starts a run of the transformer every time it's iterated. Each time the
transformer awaits, the next element is pulled from the source; each time it
emits, the value is yielded to the iterating code. When the source is
exhausted :class:`CoroutineExit` is raised at the point where the transformer
awaits; it is expected to terminate without awaiting again (values emitted
while unwinding are still delivered).

`trans.out_connect(sink)` returns a new :class:`Consumer` which runs the
transformer right away. Values fed to the consumer are forwarded to the
transformer, values emitted by the transformer are passed to
`sink.accept`. When the transformer terminates, the sink is closed and its
result becomes the result of the consumer.

Transformers are chained by connecting the output of one to the input of the
next: `first.chain(second)`, which is the same as `first.out_connect(second)`
and `second.in_connect(first)`.
"""
__all__ = [
    'Transformer', 'DebugTransformer', 'PullConnection', 'transformer',
    'debug_transformer'
]

from costream.core import corolets
from costream.core.coroutines import (
    Coroutine, Consumer, DebugConsumer, Yielder, Launcher
)
from costream.core.events import CoroutineExit, Yielding, awaiting
from costream.core.sinks import as_sink, as_source
from costream.core.util import describe

_exhausted = object()


class PullYielder(Yielder):
    "Awaits by pulling from an iterator, emits by suspending the body."
    __slots__ = ('source',)

    def __init__(self, source):
        super(PullYielder, self).__init__()
        self.source = source

    def _receive(self):
        value = next(self.source, _exhausted)
        if value is _exhausted:
            raise CoroutineExit()
        return value

    def emit(self, value):
        self.coroutine._suspend(value)
        return self


class PushYielder(Yielder):
    """Awaits from the enclosing consumer, emits by passing the value to
    the sink. An exhausted sink cancels the transformer."""
    __slots__ = ('outer', 'sink')

    def __init__(self, outer, sink):
        super(PushYielder, self).__init__(outer.coroutine)
        self.outer = outer
        self.sink = sink

    def _receive(self):
        return self.outer.await_()

    def emit(self, value):
        self.sink.accept(value)
        if getattr(self.sink, 'exhausted', False):
            raise CoroutineExit()
        return self


class TaggedYielder(Yielder):
    """Used by the upstream transformer of a chain: both awaiting and
    emitting suspend its greenlet, with a tag telling which one it was."""
    __slots__ = ()

    def _receive(self):
        return self.coroutine._suspend(awaiting)

    def emit(self, value):
        self.coroutine._suspend(Yielding(value))
        return self


class ChainYielder(Yielder):
    """Used by the downstream transformer of a chain. Awaiting drives the
    upstream transformer until it emits something, feeding it from the
    outer yielder whenever it awaits."""
    __slots__ = ('outer', 'upstream')

    def __init__(self, outer, upstream):
        super(ChainYielder, self).__init__(outer.coroutine)
        self.outer = outer
        self.upstream = upstream

    def _receive(self):
        upstream = self.upstream
        if upstream.terminated:
            raise CoroutineExit()
        tag = upstream.advance()
        while not upstream.terminated and tag is awaiting:
            try:
                value = self.outer.await_()
            except Exception as exc:
                # the upstream sees the same error (or cancellation) the
                # downstream would
                tag = upstream.throw(exc)
            else:
                tag = upstream.send(value)
        if upstream.terminated:
            raise CoroutineExit()
        return tag.value

    def emit(self, value):
        self.outer.emit(value)
        return self


class TransformerCoroutine(Coroutine):
    """A run of a transformer body in its own greenlet. Not started until
    the first `advance`."""
    __slots__ = ('transformer', 'started')

    def __init__(self, transformer, yielder):
        super(TransformerCoroutine, self).__init__(
            transformer.body, yielder, name=transformer.name)
        self.transformer = transformer
        self.started = False
        if transformer.debug:
            self.debug = True

    def advance(self):
        "Start the body or resume it after an emit."
        if self.started:
            return self._resume(corolets.resume, None)
        self.started = True
        return self._resume(
            corolets.resume, *self.transformer.args, **self.transformer.kwargs)

    def send(self, value):
        return self._resume(corolets.resume, value)

    def throw(self, exc):
        return self._resume(corolets.throw, exc)


class PullConnection(object):
    """The result of `transformer.in_connect(source)`: an iterable over the
    values emitted by the transformer while it consumes `source`."""
    __slots__ = ('transformer', 'source')

    def __init__(self, transformer, source):
        self.transformer = transformer
        self.source = as_source(source)

    def __iter__(self):
        coro = TransformerCoroutine(
            self.transformer, PullYielder(iter(self.source)))
        value = coro.advance()
        while not coro.terminated:
            yield value
            value = coro.advance()

    def __repr__(self):
        return "<PullConnection: %r <= %s>" % (
            self.transformer, describe(self.source))
    __str__ = __repr__


class Transformer(object):
    """
    `Transformer(body, *args, **kwargs)` creates a transformer; the body is
    not executed until the transformer is connected. It is then called as
    `body(yielder, *args, **kwargs)`; `yielder.await_()` reads the next input
    value and `yielder.emit(value)` produces an output value.
    """
    __slots__ = ('body', 'args', 'kwargs', 'name', 'debug')

    def __init__(self, body, *args, **kwargs):
        self.body = body
        self.args = args
        self.kwargs = kwargs
        self.name = getattr(body, '__name__', None) or repr(body)
        self.debug = False

    @classmethod
    def wrap(cls, func):
        """A transformer that passes each input value through `func` and
        emits the results that are not None (a map and a filter at once)."""
        def wrapped(y):
            for value in y:
                result = func(value)
                if result is not None:
                    y.emit(result)
        wrapped.__name__ = getattr(func, '__name__', None) or repr(func)
        return cls(wrapped)

    def to_transformer(self):
        return self

    def run(self, yielder):
        "Run the body in the current greenlet with the given yielder."
        return corolets.run_body(yielder, self.body, self.args, self.kwargs)

    def in_connect(self, source):
        """
        `trans.in_connect(other_trans)` returns a new transformer that has
        the input of `trans` connected to the output of `other_trans`.

        `trans.in_connect(source)` returns a :class:`PullConnection` over the
        output of `trans` fed from `source`.
        """
        if hasattr(source, 'to_transformer'):
            return source.to_transformer().chain(self)
        return PullConnection(self, source)

    def out_connect(self, sink):
        """
        `trans.out_connect(other_trans)` returns a new transformer that has
        the output of `trans` connected to the input of `other_trans`.

        `trans.out_connect(sink)` returns a new :class:`Consumer` feeding the
        output of `trans` to `sink`.
        """
        if hasattr(sink, 'to_transformer'):
            return self.chain(sink.to_transformer())
        sink = as_sink(sink)
        transformer = self

        def push(y):
            try:
                transformer.run(PushYielder(y, sink))
            except CoroutineExit:
                pass
            if hasattr(sink, 'close'):
                return sink.close()
            return sink
        push.__name__ = "%s >= %s" % (self.name, describe(sink))
        if self.debug:
            return DebugConsumer(push)
        return Consumer(push)

    def chain(self, other):
        """Returns a new transformer that feeds the output of this one to
        the input of `other`. No values are buffered: the upstream body runs
        in a nested greenlet, driven every time the downstream awaits."""
        first, second = self, other.to_transformer()

        def chained(y):
            upstream = TransformerCoroutine(first, TaggedYielder())
            return second.run(ChainYielder(y, upstream))
        chained.__name__ = "%s >= %s" % (first.name, second.name)
        result = Transformer(chained)
        result.debug = first.debug or second.debug
        return result

    def lazy(self):
        """Returns a lazy view of the transformer which implements work-alikes
        of the usual sequence operations (map, select, take, reduce, ...).
        Where the operation returns a sequence the lazy view returns a new
        transformer; where it returns a single value it returns a
        :class:`Consumer`. See :class:`costream.core.lazy.Lazy`."""
        from costream.core.lazy import Lazy
        lazy = Lazy(self.body, *self.args, **self.kwargs)
        lazy.name = self.name
        lazy.debug = self.debug
        return lazy

    def __repr__(self):
        return "<%s: %s>" % (self.__class__.__name__, self.name)
    __str__ = __repr__


class DebugTransformer(Transformer):
    "A Transformer whose runs always trace."
    __slots__ = ()

    def __init__(self, body, *args, **kwargs):
        super(DebugTransformer, self).__init__(body, *args, **kwargs)
        self.debug = True


def transformer(func):
    """
    A decorator for functions that use the ambient `await_`, `emit` and
    `inputs`. Calling the decorated function returns a Transformer.

    .. sourcecode:: python

        @transformer
        def running_sum(start):
            result = start
            for value in inputs():
                result += value
                emit(result)

        list(running_sum(3).in_connect([1, 2, 3])) # => [4, 6, 9]
    """
    return Launcher(func, Transformer)


def debug_transformer(func):
    return Launcher(func, DebugTransformer)
