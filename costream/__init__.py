# -*- coding: utf-8 -*-
'''
This is a library for composing stream processing pipelines out of
coroutines: a producer, any number of transforming stages and a consumer,
written independently, connected into a single pass over the data.

costream uses `greenlets <https://greenlet.readthedocs.io/>`_: every stage is
a plain function that asks for its next input value (`await_`) and hands out
output values (`emit`) whenever it wants to, from any depth of function
calls. Control and data flow back and forth between the stages, no stage
ever holds the whole stream.

::

    Roughly the costream internals works like this:

    +--------------------------+
    | def stage(y):            |            drive: next() / feed()
    |     ...                  |<------------------------------+
    |  +->value = y.await_() --|--> suspend, wait for input    |
    |  |  ...                  |                               |
    |  |  y.emit(result) ------|--> suspend, pass downstream   |
    +--|-----------------------+                               |
       |                                                       |
      the yielder decides what await_ and emit do:             |
       - pull wiring: await_ pulls from an iterable,           |
         emit yields from the connection iterator -------------+
       - push wiring: await_ waits for feed(), emit calls sink.accept()
       - chaining: await_ drives the upstream stage until it emits
       - lazy operations: emit maps/filters/counts... before passing on

Example::

    from costream.common import *

    @transformer
    def running_sum(start):
        result = start
        for value in inputs():
            result += value
            emit(result)

    list(running_sum(0).in_connect([1, 2, 3]))       # => [1, 3, 6]
    pipeline([1, 2, 3], running_sum(0), [])          # => [1, 3, 6]
    running_sum(0).lazy().take(2).to_list().in_connect(range(10)) # => [0, 1]
'''

__license__ = '''
Copyright (c) 2026, the costream authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
'''

__version__ = '0.1.0'

from costream import core
from costream import common
