"""
Connecting sources, transformers and sinks.

:func:`connect` takes the upstream and the downstream end of a connection
and does what makes sense for the pair:

================ ================ ==========================================
upstream         downstream       result
================ ================ ==========================================
source           sink             every element is fed to the sink, the
                                  result of closing the sink is returned
source           transformer      a :class:`PullConnection` (iterable)
transformer      transformer      the chained transformer
transformer      sink             a :class:`Consumer` feeding the sink
================ ================ ==========================================

A source is anything iterable, a sink is anything :func:`as_sink` accepts
(consumers included). :func:`pipeline` folds a whole list of stages:

.. sourcecode:: python

    pipeline([1, 2, 3], Transformer(running_sum), Transformer(comma), '')
    # => '1,3,6,'
"""
__all__ = ['as_source', 'as_sink', 'pump', 'connect', 'pipeline']

from costream.core.sinks import as_sink, as_source, drain


def is_transformer(obj):
    return hasattr(obj, 'to_transformer')


def pump(source, sink):
    """Feed every element of `source` to `sink` and return the result of
    closing the sink."""
    return drain(source, sink)


def connect(upstream, downstream):
    """Connect the output of `upstream` to the input of `downstream`. The
    capabilities of both ends are checked right away."""
    if is_transformer(downstream):
        if is_transformer(upstream):
            return upstream.to_transformer().chain(downstream)
        return downstream.to_transformer().in_connect(as_source(upstream))
    sink = as_sink(downstream)
    if is_transformer(upstream):
        return upstream.to_transformer().out_connect(sink)
    return drain(as_source(upstream), sink)


def pipeline(*stages):
    """`pipeline(a, b, c)` is `connect(connect(a, b), c)`."""
    if not stages:
        raise TypeError("pipeline() needs at least one stage")
    result = stages[0]
    for stage in stages[1:]:
        result = connect(result, stage)
    return result
