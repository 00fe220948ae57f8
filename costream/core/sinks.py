"""
The sink side of a pipeline.

A sink is any object with an `accept(value)` method returning the sink
(so calls can be chained) and, optionally, a `close()` method that signals
the end of the input and returns a result. The :class:`Sink` base class
provides the default `close` (returning the sink itself) and the
utility methods below.

Standard containers don't have `accept`, :func:`as_sink` wraps them:

=========== =================== =========================================
Object      Adapter             Result of close()
=========== =================== =========================================
list        :class:`ListSink`   the list (values appended in place)
str         :class:`StringSink` the concatenated text
dict        :class:`DictSink`   the dict (accepts key, value pairs)
file-like   :class:`FileSink`   the file (values written with str())
callable    :class:`CallSink`   the callable (tuples are splatted)
=========== =================== =========================================
"""
__all__ = [
    'Sink', 'ListSink', 'StringSink', 'DictSink', 'FileSink', 'CallSink',
    'Multicast', 'as_sink', 'as_source', 'drain'
]

import warnings

from costream.core.events import CoroutineExit, NotASink, NotASource
from costream.core.util import fmt_list, describe

_done = object()


def as_source(obj):
    """Check that `obj` can be iterated. Returns `obj` unchanged."""
    try:
        iter(obj)
    except TypeError:
        raise NotASource("%r can't be used as a source, it's not iterable"
                         % (obj,))
    return obj


def as_sink(obj):
    """Returns `obj` if it already accepts values, otherwise an adapter
    around it (see the module docstring)."""
    if hasattr(obj, 'accept'):
        return obj
    elif isinstance(obj, list):
        return ListSink(obj)
    elif isinstance(obj, str):
        return StringSink(obj)
    elif isinstance(obj, dict):
        return DictSink(obj)
    elif hasattr(obj, 'write'):
        return FileSink(obj)
    elif callable(obj):
        return CallSink(obj)
    raise NotASink("%r can't be used as a sink, it has no accept method"
                   % (obj,))


def drain(source, sink):
    """Feed every element of `source` to `sink`, then close the sink and
    return what close returned.

    Stops pulling from `source` as soon as the sink is exhausted (eg: a
    consumer that terminated on its own), so no element is lost in between.
    A sink can also stop the iteration by raising :class:`CoroutineExit`
    from `accept`; it is closed all the same. Other errors, SinkExhausted
    included, propagate and the sink is not closed.
    """
    sink = as_sink(sink)
    iterator = iter(as_source(source))
    while not getattr(sink, 'exhausted', False):
        value = next(iterator, _done)
        if value is _done:
            break
        try:
            sink.accept(value)
        except CoroutineExit:
            break
    if hasattr(sink, 'close'):
        return sink.close()
    return sink


class Sink(object):
    __slots__ = ()
    exhausted = False

    def accept(self, value):
        raise NotImplementedError()

    def close(self):
        """May be overridden. The default implementation just returns the
        sink."""
        return self

    def in_connect(self, other):
        """
        `sink.in_connect(source)` feeds every element of `source` to the
        sink and returns the result of closing it. The sink can stop the
        iteration early by raising :class:`CoroutineExit` from `accept`.

        `sink.in_connect(transformer)` connects the output of `transformer`
        to the sink and returns the new :class:`Consumer`.
        """
        if hasattr(other, 'to_transformer'):
            return other.to_transformer().out_connect(self)
        return drain(other, self)

    def input_map(self, func):
        """Returns a new sink which passes each input value through `func`
        and feeds the result to this sink."""
        return InputMapWrapper(self, func)

    def input_select(self, func):
        """Returns a new sink which feeds this sink the inputs for which
        `func` returns a true value and discards the others."""
        return InputSelectWrapper(self, func)

    def input_reject(self, func):
        """Returns a new sink which feeds this sink the inputs for which
        `func` returns a false value and discards the others."""
        return InputRejectWrapper(self, func)

    def input_reduce(self, func, initial=None):
        """Returns a new sink which reduces its input values to a single
        value, as in functools.reduce. On close, the reduced value is fed to
        this sink and this sink is closed."""
        return InputReduceWrapper(self, func, initial)


class InputWrapper(Sink):
    __slots__ = ('target', 'func')
    label = 'input_wrapper'

    def __init__(self, target, func):
        self.target = target
        self.func = func

    exhausted = property(lambda self: getattr(self.target, 'exhausted', False))

    def close(self):
        return self.target.close()

    def __repr__(self):
        return "<%r#%s>" % (self.target, self.label)


class InputMapWrapper(InputWrapper):
    __slots__ = ()
    label = 'input_map'

    def accept(self, value):
        self.target.accept(self.func(value))
        return self


class InputSelectWrapper(InputWrapper):
    __slots__ = ()
    label = 'input_select'

    def accept(self, value):
        if self.func(value):
            self.target.accept(value)
        return self


class InputRejectWrapper(InputWrapper):
    __slots__ = ()
    label = 'input_reject'

    def accept(self, value):
        if not self.func(value):
            self.target.accept(value)
        return self


class InputReduceWrapper(InputWrapper):
    __slots__ = ('memo',)
    label = 'input_reduce'

    def __init__(self, target, func, initial=None):
        super(InputReduceWrapper, self).__init__(target, func)
        self.memo = initial

    exhausted = False

    def accept(self, value):
        if self.memo is None:
            self.memo = value
        else:
            self.memo = self.func(self.memo, value)
        return self

    def close(self):
        self.target.accept(self.memo)
        return self.target.close()


class ListSink(Sink):
    "Appends the values to a list."
    __slots__ = ('target',)

    def __init__(self, target=None):
        self.target = [] if target is None else target

    def accept(self, value):
        self.target.append(value)
        return self

    def close(self):
        return self.target

    def __repr__(self):
        return "<ListSink %s>" % fmt_list(self.target)


class StringSink(Sink):
    "Concatenates the str() of the values."
    __slots__ = ('parts',)

    def __init__(self, initial=''):
        self.parts = [initial] if initial else []

    @property
    def value(self):
        return ''.join(self.parts)

    def accept(self, value):
        self.parts.append(str(value))
        return self

    def close(self):
        return self.value

    def __repr__(self):
        return "<StringSink %s>" % describe(self.value)


class DictSink(Sink):
    "Stores (key, value) pairs in a dict."
    __slots__ = ('target',)

    def __init__(self, target=None):
        self.target = {} if target is None else target

    def accept(self, pair):
        key, value = pair
        self.target[key] = value
        return self

    def close(self):
        return self.target

    def __repr__(self):
        return "<DictSink %s>" % describe(self.target)


class FileSink(Sink):
    """Writes the str() of the values to a file-like object. Closing the sink
    doesn't close the file."""
    __slots__ = ('stream',)

    def __init__(self, stream):
        self.stream = stream

    def accept(self, value):
        self.stream.write(str(value))
        return self

    def close(self):
        return self.stream

    def __repr__(self):
        return "<FileSink %r>" % (self.stream,)


class CallSink(Sink):
    """Calls a function with every value. Tuples are passed as positional
    arguments."""
    __slots__ = ('func',)

    def __init__(self, func):
        self.func = func

    def accept(self, args):
        if isinstance(args, tuple):
            self.func(*args)
        else:
            self.func(args)
        return self

    def close(self):
        return self.func

    def __repr__(self):
        return "<CallSink %r>" % (self.func,)


class Multicast(Sink):
    """Collects multiple sinks into a multicast group. Every input value of
    the group is supplied to each of its members, in order. When the group
    is closed, all members are closed as well.

    There is no single result: `close` returns None and the members are
    to be inspected individually.

    Errors are not isolated: if a member raises while accepting a value
    (eg: SinkExhausted from a consumer that already terminated), the
    members after it don't get that value and the error propagates to
    whoever fed the group.
    """
    __slots__ = ('members', 'closed')

    def __init__(self, *members):
        self.members = [as_sink(member) for member in members]
        self.closed = False

    def accept(self, value):
        for member in self.members:
            member.accept(value)
        return self

    def close(self):
        if self.closed:
            warnings.warn("%r closed twice." % self, RuntimeWarning)
            return None
        self.closed = True
        for member in self.members:
            if hasattr(member, 'close'):
                member.close()
        return None

    def __repr__(self):
        return "<Multicast %s>" % fmt_list(self.members)
