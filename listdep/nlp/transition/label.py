from collections import namedtuple
from enum import Enum

import numpy as np

from listdep.utils.collections import ImmutableDict


DELIMITER = '-'


class ArcType(Enum):
    NO = 'N'
    LEFT = 'L'
    RIGHT = 'R'


class ListAction(Enum):
    SHIFT = 'S'
    REDUCE = 'R'
    PASS = 'P'


class Label(namedtuple('Label', ('arc', 'list', 'deprel'))):
    """Composite action: arc direction x list action (+ dependency relation).

    Encoded as ``{L,R,N}-{S,R,P}[-deprel]``, e.g. ``L-R-nsubj`` or ``N-S``.
    """
    __slots__ = ()

    def __new__(cls, arc, list, deprel=None):
        arc = ArcType(arc)
        list = ListAction(list)
        if arc is ArcType.NO or not deprel:
            deprel = None
        return super().__new__(cls, arc, list, deprel)

    @classmethod
    def parse(cls, text):
        if isinstance(text, Label):
            return text
        cols = str(text).split(DELIMITER, 2)
        if len(cols) < 2:
            raise ValueError("invalid label: {!r}".format(text))
        try:
            arc, list = ArcType(cols[0]), ListAction(cols[1])
        except ValueError:
            raise ValueError("invalid label: {!r}".format(text)) from None
        deprel = cols[2] if len(cols) == 3 else None
        if deprel == '':
            raise ValueError("invalid label: {!r}".format(text))
        if arc is ArcType.NO and deprel is not None:
            raise ValueError("no-arc label cannot carry a deprel: {!r}"
                             .format(text))
        return cls(arc, list, deprel)

    def is_arc(self, arc):
        return self.arc is arc

    def is_list(self, list):
        return self.list is list

    def __str__(self):
        s = self.arc.value + DELIMITER + self.list.value
        if self.arc is not ArcType.NO and self.deprel is not None:
            s += DELIMITER + self.deprel
        return s


SHIFT = Label(ArcType.NO, ListAction.SHIFT)
REDUCE = Label(ArcType.NO, ListAction.REDUCE)
PASS = Label(ArcType.NO, ListAction.PASS)


class LabelMap(object):
    """Read-only label vocabulary shared across sentences."""

    def __init__(self, labels):
        index = {}
        for label in labels:
            key = str(Label.parse(label))
            if key not in index:
                index[key] = len(index)
        self._label2id = ImmutableDict(index)
        self._id2label = tuple(Label.parse(key) for key in index)

    @classmethod
    def from_sequences(cls, sequences):
        return cls(label for sequence in sequences for label in sequence)

    def __getitem__(self, label):
        return self._label2id[str(label)]

    def get(self, label, default=-1):
        return self._label2id.get(str(label), default)

    def __contains__(self, label):
        return str(label) in self._label2id

    def __len__(self):
        return len(self._id2label)

    def __iter__(self):
        return iter(self._id2label)

    def lookup(self, id):
        return self._id2label[id]

    def encode(self, labels, dtype=np.int32):
        return np.array([self[label] for label in labels], dtype)

    def decode(self, ids):
        return [self._id2label[int(id)] for id in ids]

    @property
    def labels(self):
        return self._id2label

    def __repr__(self):
        return "LabelMap({})".format(list(self._label2id))
