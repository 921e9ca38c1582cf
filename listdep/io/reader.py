from collections.abc import Iterator
import os
import pathlib


class Reader(Iterator):

    def __init__(self, file=None):
        if file is not None:
            self.set_file(file)
        else:
            self.file = None
            self.reset()

    def set_file(self, file):
        if isinstance(file, pathlib.PurePath):
            file = str(file)
        file = os.path.expanduser(file)
        if not os.path.exists(file):
            raise FileNotFoundError("file was not found: '{}'"
                                    .format(file))
        self.file = file
        self.reset()

    def __iter__(self):
        self._iterator = self._get_iterator()
        return self

    def __next__(self):
        if self._iterator is None:
            self._iterator = self._get_iterator()
        try:
            return next(self._iterator)
        except Exception:
            self.reset()
            raise

    def read(self, file=None):
        if file is not None:
            self.set_file(file)
        return [item for item in self]

    def reset(self):
        self._iterator = None

    def _get_iterator(self):
        raise NotImplementedError

    def __getstate__(self):
        state = self.__dict__.copy()
        state['_iterator'] = None
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)


CONLL_FIELDS = ('id', 'form', 'lemma', 'cpostag', 'postag', 'feats',
                'head', 'deprel', 'phead', 'pdeprel')


def _create_root():
    return {
        'id': 0,
        'form': "<ROOT>",
        'lemma': "<ROOT>",
        'cpostag': "ROOT",
        'postag': "ROOT",
        'feats': "_",
        'head': None,
        'deprel': None,
        'phead': "_",
        'pdeprel': "_",
    }


def _parse_head(value):
    return None if value == '_' else int(value)


def _parse_conll(text):
    tokens = [_create_root()]
    for line in [text] if isinstance(text, str) else text:
        line = line.strip()
        if not line:
            if len(tokens) > 1:
                yield tokens
                tokens = [_create_root()]
        elif line.startswith('#'):
            continue
        else:
            cols = line.split("\t")
            if len(cols) < 8:
                raise ValueError("too few columns in line: {!r}"
                                 .format(line))
            # multiword ranges (1-2) and empty nodes (1.1)
            if not cols[0].isdigit():
                continue
            cols += ['_'] * (len(CONLL_FIELDS) - len(cols))
            token = dict(zip(CONLL_FIELDS, cols))
            token['id'] = int(cols[0])
            token['head'] = _parse_head(cols[6])
            token['deprel'] = None if cols[7] == '_' else cols[7]
            tokens.append(token)
    if len(tokens) > 1:
        yield tokens


class ConllReader(Reader):

    def _get_iterator(self):
        with open(self.file, mode='r', encoding='utf-8') as f:
            yield from _parse_conll(f)


def read_conll(file):
    if isinstance(file, pathlib.PurePath):
        file = str(file)
    with open(os.path.expanduser(file), mode='r', encoding='utf-8') as f:
        return list(_parse_conll(f))


def parse_conll(text):
    return list(_parse_conll(text))
