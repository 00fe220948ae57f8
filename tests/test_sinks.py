__doc_all__ = []

import sys
import unittest
import warnings
from io import StringIO

from costream.common import *
from base import running_sum, naturals, CountingSink


class Picky(Sink):
    "Takes two values, then stops the iteration feeding it."
    __slots__ = ('values', 'closes')

    def __init__(self):
        self.values = []
        self.closes = 0

    def accept(self, value):
        if len(self.values) == 2:
            raise CoroutineExit()
        self.values.append(value)
        return self

    def close(self):
        self.closes += 1
        return tuple(self.values)


class SinkTest(unittest.TestCase):
    def test_default_close(self):
        class Null(Sink):
            def accept(self, value):
                return self
        sink = Null()
        self.assertTrue(sink.accept(1) is sink)
        self.assertTrue(sink.close() is sink)
        self.assertFalse(sink.exhausted)
        self.assertRaises(NotImplementedError, Sink().accept, 1)

    def test_in_connect_source(self):
        self.assertEqual(ListSink().in_connect([1, 2]), [1, 2])
        self.assertEqual(StringSink('>').in_connect('abc'), '>abc')

    def test_in_connect_transformer(self):
        c = ListSink().in_connect(Transformer(running_sum))
        self.assertTrue(isinstance(c, Consumer))
        self.assertEqual(c.feed(1).feed(2).close(), [1, 3])

    def test_stops_when_exhausted(self):
        pulled = []
        c = Consumer(lambda y: [y.await_() for i in range(3)])
        self.assertEqual(c.in_connect(naturals(pulled)), [1, 2, 3])
        self.assertEqual(pulled, [1, 2, 3])

    def test_exhausted_before_start(self):
        pulled = []
        c = Consumer(lambda y: 'nothing needed')
        self.assertEqual(c.in_connect(naturals(pulled)), 'nothing needed')
        self.assertEqual(pulled, [])

    def test_stops_on_exit(self):
        sink = Picky()
        self.assertEqual(sink.in_connect('abcdef'), ('a', 'b'))
        self.assertEqual(sink.closes, 1)

    def test_exit_stops_pulling(self):
        pulled = []
        sink = Picky()
        self.assertEqual(pump(naturals(pulled), sink), (1, 2))
        self.assertEqual(connect(naturals([]), Picky()), (1, 2))
        self.assertEqual(pulled, [1, 2, 3])
        self.assertEqual(sink.closes, 1)

    def test_sink_exhausted_propagates(self):
        dead = Consumer(lambda y: None)
        self.assertTrue(dead.terminated)

        def forward(y):
            for value in y:
                dead.feed(value)
        c = Consumer(forward)
        self.assertRaises(SinkExhausted, pump, [1, 2, 3], c)
        self.assertTrue(c.terminated)

    def test_errors_propagate_unclosed(self):
        class Broken(CountingSink):
            __slots__ = ()

            def accept(self, value):
                raise ValueError(value)
        sink = Broken()
        self.assertRaises(ValueError, pump, [1], sink)
        self.assertEqual(sink.closes, 0)


class InputWrapperTest(unittest.TestCase):
    def test_input_map(self):
        self.assertEqual(
            StringSink().input_map(lambda v: v + 1).in_connect([0, 1, 2, 3]),
            '1234')

    def test_input_select(self):
        self.assertEqual(
            ListSink().input_select(lambda v: v % 2).in_connect(range(8)),
            [1, 3, 5, 7])

    def test_input_reject(self):
        sink = StringSink().input_reject(lambda c: c in 'aeiou')
        self.assertEqual(sink.in_connect('word shortener'), 'wrd shrtnr')

    def test_input_reduce(self):
        self.assertEqual(
            ListSink().input_reduce(lambda a, b: a + b).in_connect(range(1, 11)),
            [55])
        self.assertEqual(
            ListSink().input_reduce(lambda a, b: a + b, 100).in_connect([1, 2]),
            [103])

    def test_wrappers_stack(self):
        sink = ListSink().input_map(str).input_select(lambda v: v > 1)
        self.assertEqual(sink.in_connect([1, 2, 3]), ['2', '3'])

    def test_close_closes_target(self):
        target = CountingSink()
        wrapper = target.input_map(str)
        wrapper.accept(1).accept(2)
        self.assertEqual(wrapper.close(), ['1', '2'])
        self.assertEqual(target.closes, 1)

    def test_exhausted_follows_target(self):
        c = Consumer(lambda y: y.await_())
        wrapper = c.input_map(lambda v: v * 2)
        self.assertFalse(wrapper.exhausted)
        wrapper.accept(21)
        self.assertTrue(wrapper.exhausted)
        self.assertEqual(wrapper.close(), 42)

    def test_feeds_transformers(self):
        c = Transformer(running_sum).out_connect([])
        self.assertEqual(c.input_map(int).in_connect('123'), [1, 3, 6])

    def test_repr(self):
        self.assertEqual(repr(ListSink().input_map(str)),
                         "<<ListSink []>#input_map>")


class AdapterTest(unittest.TestCase):
    def test_as_sink(self):
        sink = ListSink()
        self.assertTrue(as_sink(sink) is sink)
        self.assertTrue(isinstance(as_sink([]), ListSink))
        self.assertTrue(isinstance(as_sink(''), StringSink))
        self.assertTrue(isinstance(as_sink({}), DictSink))
        self.assertTrue(isinstance(as_sink(StringIO()), FileSink))
        self.assertTrue(isinstance(as_sink(len), CallSink))
        self.assertRaises(NotASink, as_sink, 1.5)

    def test_list(self):
        target = [0]
        self.assertTrue(pump([1, 2], target) is target)
        self.assertEqual(target, [0, 1, 2])

    def test_string(self):
        sink = StringSink('x')
        sink.accept(1).accept('y')
        self.assertEqual(sink.value, 'x1y')
        self.assertEqual(sink.close(), 'x1y')

    def test_dict(self):
        target = {'a': 0}
        self.assertEqual(pump([('b', 1), ('c', 2)], target),
                         {'a': 0, 'b': 1, 'c': 2})
        self.assertEqual(DictSink().in_connect(zip('xy', 'XY')),
                         {'x': 'X', 'y': 'Y'})

    def test_file(self):
        stream = StringIO()
        self.assertTrue(pump([1, 'a', None], stream) is stream)
        self.assertEqual(stream.getvalue(), '1aNone')
        self.assertFalse(stream.closed)

    def test_call(self):
        calls = []

        def record(*args):
            calls.append(args)
        self.assertTrue(pump([(1, 2), 3], record) is record)
        self.assertEqual(calls, [(1, 2), (3,)])

    def test_repr(self):
        self.assertEqual(repr(ListSink([1, 2])), "<ListSink [1, 2]>")
        self.assertEqual(repr(StringSink('ab')), "<StringSink 'ab'>")


class MulticastTest(unittest.TestCase):
    def test_multicast(self):
        first, text, last = [], StringSink(), CountingSink()
        group = Multicast(first, text, last)
        self.assertEqual(group.in_connect('abcde'), None)
        self.assertEqual(first, list('abcde'))
        self.assertEqual(text.value, 'abcde')
        self.assertEqual(last.values, list('abcde'))
        self.assertEqual(last.closes, 1)
        self.assertTrue(group.closed)

    def test_order(self):
        msgs = []
        group = Multicast(lambda v: msgs.append(('one', v)),
                          lambda v: msgs.append(('two', v)))
        self.assertTrue(group.accept(1) is group)
        group.accept(2)
        self.assertEqual(msgs, [('one', 1), ('two', 1), ('one', 2), ('two', 2)])

    def test_close_twice(self):
        member = CountingSink()
        group = Multicast(member)
        group.close()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            self.assertEqual(group.close(), None)
        self.assertEqual(len(caught), 1)
        self.assertTrue(issubclass(caught[0].category, RuntimeWarning))
        self.assertEqual(member.closes, 1)

    def test_consumers(self):
        sums = Transformer(running_sum).out_connect([])
        counts = Consumer(lambda y: len(list(y)))
        pump([1, 2, 3], Multicast(sums, counts))
        self.assertEqual(sums.result, [1, 3, 6])
        self.assertEqual(counts.result, 3)

    def test_member_errors_propagate(self):
        first, last = [], []
        done = Consumer(lambda y: [y.await_(), y.await_(), y.await_()])
        group = Multicast(first, done, last)
        self.assertRaises(SinkExhausted, pump, 'abcde', group)
        self.assertEqual(first, list('abcd'))
        self.assertEqual(done.result, list('abc'))
        self.assertEqual(last, list('abc'))
        self.assertFalse(group.closed)

    def test_bad_member(self):
        self.assertRaises(NotASink, Multicast, [], 42)


if __name__ == "__main__":
    sys.argv.insert(1, '-v')
    unittest.main()
