import dill

from listdep.utils import collections  # NOQA
from listdep.utils import progressbar  # NOQA


def dump(obj, file, **kwargs):
    return dill.dump(obj, file, **kwargs)


def load(file):
    return dill.load(file)


def save(obj, path):
    with open(path, 'wb') as f:
        dump(obj, f)


def restore(path):
    with open(path, 'rb') as f:
        return load(f)
