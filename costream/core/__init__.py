'''
The coroutine core: suspendable bodies and the ways to wire them.

A coroutine body is a plain function taking a *yielder* as its first
argument. Inside the body:

* `yielder.await_()` suspends the body until the next input value is
  available and evaluates to it;
* `yielder.emit(value)` (transformers only) hands a value to whatever is
  downstream and suspends until control comes back.

Bodies run in greenlets, so the suspension can happen at any depth of
ordinary function calls. Nothing else ever suspends a body and only one body
runs at any time.

::

      source                 transformer                      sink
    +--------+  next()  +----------------------+  accept()  +--------+
    | [1,2,3]|--------->| v = y.await_()       |----------->| []     |
    +--------+          | y.emit(f(v))         |            +--------+
                        +----------------------+
         ^                                                     |
         |        pull wiring (in_connect)   push wiring (out_connect)

* :mod:`costream.core.coroutines` - the yielder, the coroutine base and the
  Consumer
* :mod:`costream.core.transformers` - the Transformer, pull and push wiring,
  chaining
* :mod:`costream.core.lazy` - map/select/take/reduce/... over transformers
* :mod:`costream.core.sinks` - the sink capability, adapters, Multicast
* :mod:`costream.core.pipe` - connect/pipeline/pump
'''
