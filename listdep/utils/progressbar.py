import sys

from progressbar import ProgressBar as PBar


class ProgressBar(object):

    def __init__(self, fd=sys.stderr, enabled=True):
        self._fd = fd
        self._enabled = enabled
        self._pbar = None

    def start(self, max_value):
        if self._enabled:
            self._pbar = \
                PBar(min_value=0, max_value=max_value, fd=self._fd).start()

    def update(self, count):
        if self._pbar is not None:
            self._pbar.update(count)

    def finish(self):
        if self._pbar is not None:
            self._pbar.finish()
            self._pbar = None
