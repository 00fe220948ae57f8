"""
Lazy sequence operations over transformers.

`trans.lazy()` returns a :class:`Lazy` transformer which can be used in many
situations as if it were the iterable returned by `trans.in_connect`, as it
implements work-alikes of the usual sequence operations. The return types
differ though: where the sequence operation returns a new sequence the lazy
transformer returns a new (lazy) transformer; where the operation returns a
single value the lazy transformer returns a :class:`Consumer` with that value
as its result.

.. sourcecode:: python

    sums = Transformer(running_sum).lazy().map(str)
    list(sums.in_connect(range(1, 5)))        # => ['1', '3', '6', '10']

    total = Transformer(running_sum).lazy().reduce(max)
    total.feed(1).feed(2).feed(3).close()     # => 6

No intermediate sequence is built: every operation runs the original body
with a yielder whose emit does something else than forwarding the value.
"""
__all__ = ['Lazy', 'LazyYielder']

from costream.core.coroutines import Consumer, DebugConsumer, Yielder
from costream.core.events import CoroutineExit
from costream.core.transformers import Transformer

_missing = object()


class LazyYielder(Yielder):
    """A yielder awaiting from another yielder and emitting through the
    `on_emit` strategy."""
    __slots__ = ('outer', 'on_emit')

    def __init__(self, outer, on_emit):
        super(LazyYielder, self).__init__(outer.coroutine)
        self.outer = outer
        self.on_emit = on_emit

    def _receive(self):
        return self.outer.await_()

    def emit(self, value):
        self.on_emit(value)
        return self


def iterable(value):
    return hasattr(value, '__iter__') and not isinstance(value, (str, bytes))


class Lazy(Transformer):
    __slots__ = ()

    def lazy(self):
        return self

    def _transform(self, label, emitter):
        """A new lazy transformer. For every run, `emitter` gets the
        downstream yielder and returns the emit strategy for the run."""
        original = self

        def body(y):
            return original.run(LazyYielder(y, emitter(y)))
        body.__name__ = "%s.%s" % (self.name, label)
        lazy = Lazy(body)
        lazy.debug = self.debug
        return lazy

    def _summarize(self, label, collector):
        """A new consumer. For every run, `collector` returns the emit
        strategy and the function computing the result once the original
        body has terminated."""
        original = self

        def body(y):
            on_emit, finish = collector()
            try:
                original.run(LazyYielder(y, on_emit))
            except CoroutineExit:
                pass
            return finish()
        body.__name__ = "%s.%s" % (self.name, label)
        if self.debug:
            return DebugConsumer(body)
        return Consumer(body)

    def map(self, func):
        def emitter(y):
            return lambda value: y.emit(func(value))
        return self._transform('map', emitter)
    collect = map

    def select(self, func):
        def emitter(y):
            def on_emit(value):
                if func(value):
                    y.emit(value)
            return on_emit
        return self._transform('select', emitter)
    filter = select

    def reject(self, func):
        def emitter(y):
            def on_emit(value):
                if not func(value):
                    y.emit(value)
            return on_emit
        return self._transform('reject', emitter)

    def filter_map(self, func):
        def emitter(y):
            def on_emit(value):
                result = func(value)
                if result is not None:
                    y.emit(result)
            return on_emit
        return self._transform('filter_map', emitter)

    def flat_map(self, func):
        """Emits every element of `func(value)`. Results that are not
        iterable (strings included) are emitted as they are."""
        def emitter(y):
            def on_emit(value):
                result = func(value)
                if iterable(result):
                    for item in result:
                        y.emit(item)
                else:
                    y.emit(result)
            return on_emit
        return self._transform('flat_map', emitter)
    collect_concat = flat_map

    def each(self, func):
        "Calls `func` with every value, then passes the value on."
        def emitter(y):
            def on_emit(value):
                func(value)
                y.emit(value)
            return on_emit
        return self._transform('each', emitter)

    def take(self, n):
        """Passes the first `n` values on, then cancels the original body
        (right after the n-th value, so no more input is awaited)."""
        if n <= 0:
            def nothing(y):
                return None
            nothing.__name__ = "%s.take" % self.name
            return Lazy(nothing)

        def emitter(y):
            left = [n]

            def on_emit(value):
                if left[0] <= 0:
                    raise CoroutineExit()
                y.emit(value)
                left[0] -= 1
                if left[0] == 0:
                    raise CoroutineExit()
            return on_emit
        return self._transform('take', emitter)

    def take_while(self, func):
        def emitter(y):
            def on_emit(value):
                if not func(value):
                    raise CoroutineExit()
                y.emit(value)
            return on_emit
        return self._transform('take_while', emitter)

    def drop(self, n):
        def emitter(y):
            left = [n]

            def on_emit(value):
                if left[0] > 0:
                    left[0] -= 1
                else:
                    y.emit(value)
            return on_emit
        return self._transform('drop', emitter)

    def drop_while(self, func):
        def emitter(y):
            dropping = [True]

            def on_emit(value):
                if dropping[0] and func(value):
                    return
                dropping[0] = False
                y.emit(value)
            return on_emit
        return self._transform('drop_while', emitter)

    def count(self):
        def collector():
            n = [0]

            def on_emit(value):
                n[0] += 1
            return on_emit, lambda: n[0]
        return self._summarize('count', collector)

    def reduce(self, func, initial=_missing):
        """Reduces the values as functools.reduce does. Without `initial` the
        first value is the initial one (and the result is None if there are
        no values at all)."""
        def collector():
            memo = [initial]

            def on_emit(value):
                if memo[0] is _missing:
                    memo[0] = value
                else:
                    memo[0] = func(memo[0], value)

            def finish():
                if memo[0] is _missing:
                    return None
                return memo[0]
            return on_emit, finish
        return self._summarize('reduce', collector)
    inject = reduce

    def _buffer(self, label, finish):
        def collector():
            values = []
            return values.append, lambda: finish(values)
        return self._summarize(label, collector)

    def sort(self, key=None, reverse=False):
        return self._buffer(
            'sort', lambda values: sorted(values, key=key, reverse=reverse))

    def sort_by(self, key):
        return self._buffer('sort_by', lambda values: sorted(values, key=key))

    def to_list(self):
        return self._buffer('to_list', list)

    def to_dict(self):
        return self._buffer('to_dict', dict)
