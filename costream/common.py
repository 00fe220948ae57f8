"""
A module for quick importing the essential core stuff.
(Consumer, Transformer, the decorators, the ambient functions, sinks and
the connection functions)
"""
from .core.coroutines import (
    Consumer, consumer, debug_consumer, getdefaultdebug, setdefaultdebug,
    getdefaultoutput, setdefaultoutput
)
from .core.transformers import Transformer, transformer, debug_transformer
from .core.corolets import await_, emit, inputs
from .core.events import (
    CoroutineError, CoroutineExit, SinkExhausted, ContractViolation,
    NotASink, NotASource
)
from .core.sinks import (
    Sink, ListSink, StringSink, DictSink, FileSink, CallSink, Multicast
)
from .core.pipe import as_sink, as_source, pump, connect, pipeline
from .core import events
