"""
Apache access log statistics, every statistic is a separate pipeline
branch fed from a single pass over the log.

Usage: parse_apache.py [access.log]
"""
import re
import sys
from datetime import datetime

from costream.common import *

LINE = re.compile(r'(\S+) (\S+) (\S+) \[(.*?)\] "(\S+) (\S+) (\S+)" (\S+) (\S+)')

COLUMNS = [
    ('host', str), ('referrer', str), ('user', str),
    ('datetime', lambda v: datetime.strptime(v, '%d/%b/%Y:%H:%M:%S %z')),
    ('method', str), ('request', str), ('proto', str),
    ('status', int), ('bytes', lambda v: 0 if v == '-' else int(v)),
]


@transformer
def parse():
    for line in inputs():
        match = LINE.match(line)
        if match:
            emit(pipeline(
                ((name, conv(value))
                 for (name, conv), value in zip(COLUMNS, match.groups())),
                {}
            ))


@transformer
def find_404():
    for entry in inputs():
        if entry['status'] == 404:
            emit(" ".join(str(entry[col])
                          for col in ('status', 'datetime', 'request')))


@transformer
def bytes_transferred():
    total = 0
    for entry in inputs():
        total += entry['bytes']
        emit(total)


@transformer
def request_rate():
    last = await_()['datetime']
    while True:
        n = 0
        this = last
        while this == last:
            this = await_()['datetime']
            n += 1
        emit(n / (this - last).total_seconds())
        last = this


@consumer
def dump(label):
    for value in inputs():
        print("%s: %s" % (label, value))


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "/var/log/apache2/access.log"
    with open(path) as log:
        pipeline(log, parse(), Multicast(
            connect(find_404(), dump("404        ")),
            connect(bytes_transferred(), dump("Total bytes")),
            connect(request_rate(), dump("Requests/s ")),
        ))
