"""
Unwrapping frames from a byte stream: a state machine written as a plain
loop. Frames start with a header byte, end with a footer byte and use an
escape byte for data bytes that would otherwise be taken for markers.
"""
from costream.common import *


@transformer
def unwrap(header=0x61, footer=0x62, escape=0xAB):
    while True:
        byte = await_()
        if byte != header:
            continue

        frame = ""
        while True:
            byte = await_()
            if byte == footer:
                emit(frame)
                break
            elif byte == escape:
                frame += "%x" % await_()
            else:
                frame += "%x" % byte

data = b"\x70\x24\x61\x99\xAF\xD1xyzz\x62\x56\x62\x61\xAB\xAB\x14\x62\x07"

if __name__ == "__main__":
    pipeline(data, unwrap(), print)
