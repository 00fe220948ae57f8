"""
Miscellaneous helpers.
"""
__all__ = ['fmt_list', 'describe']


def fmt_list(lst, lim=60):
    """Like repr(list) but cut after about `lim` characters, for use in the
    reprs of sinks and connections."""
    items = [repr(i) for i in lst]
    if sum(len(i) for i in items) > lim:
        ret = []
        length = 0
        for i in items:
            if length + len(i) > lim:
                ret.append(i[:lim - length] + ' ...')
                break
            else:
                ret.append(i)
            length += len(i)
        post = ''
        if len(ret) < len(items):
            post = " .. %s more" % (len(items) - len(ret))
        return "[%s%s]" % (', '.join(ret), post)
    else:
        return "[%s]" % ', '.join(items)


def describe(obj, lim=60):
    "Short description of a pipeline endpoint."
    if isinstance(obj, (list, tuple)):
        return fmt_list(obj, lim)
    text = repr(obj)
    if len(text) > lim:
        return text[:lim] + ' ...'
    return text
