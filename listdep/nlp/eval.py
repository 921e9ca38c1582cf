from collections import OrderedDict

import numpy as np


class DependencyEval(object):
    """Accumulates attachment counts reported per sentence."""

    def __init__(self):
        self._counts = np.zeros(3, dtype=np.int64)
        self._sentences = 0

    def add(self, las, uas, total):
        if not (0 <= las <= uas <= total):
            raise ValueError("invalid counts: las={}, uas={}, total={}"
                             .format(las, uas, total))
        self._counts += (las, uas, total)
        self._sentences += 1

    def reset(self):
        self._counts[:] = 0
        self._sentences = 0

    def _score(self, correct):
        total = self._counts[2]
        if total == 0:
            return np.nan
        return float(correct) / float(total) * 100

    @property
    def las(self):
        return self._score(self._counts[0])

    @property
    def uas(self):
        return self._score(self._counts[1])

    @property
    def total(self):
        return int(self._counts[2])

    @property
    def num_sentences(self):
        return self._sentences

    def summary(self):
        return OrderedDict([
            ('sentences', self._sentences),
            ('tokens', self.total),
            ('LAS', self.las),
            ('UAS', self.uas),
        ])

    def __str__(self):
        return "LAS: {:.2f}, UAS: {:.2f} ({} tokens, {} sentences)".format(
            self.las, self.uas, self.total, self._sentences)
