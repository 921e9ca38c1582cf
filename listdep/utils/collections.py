class ImmutableDict(dict):
    """dict whose contents are fixed once constructed"""

    def _readonly(self, *args, **kwargs):
        raise TypeError("'{}' object is read-only"
                        .format(type(self).__name__))

    __setitem__ = _readonly
    __delitem__ = _readonly
    clear = _readonly
    update = _readonly
    setdefault = _readonly
    pop = _readonly
    popitem = _readonly

    def __reduce__(self):
        return (type(self), (dict(self),))

    def copy(self):
        return self

    @classmethod
    def fromkeys(cls, iterable, value=None):
        return cls((key, value) for key in iterable)
