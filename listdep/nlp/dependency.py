from collections import namedtuple
from collections.abc import Sequence


ROOT_FORM = "<ROOT>"
ROOT_POSTAG = "ROOT"


class CyclicDependencyError(RuntimeError):
    pass


class Arc(namedtuple('Arc', ('head', 'label'))):
    """Immutable snapshot of a dependency edge: (head index or None, label)"""
    __slots__ = ()

    def is_head(self, index):
        return self.head == index

    def is_label(self, label):
        return self.label == label


class Node(object):

    def __init__(self, id, form=None, postag=None, head=None, label=None):
        self.id = id
        self.form = form
        self.postag = postag
        self.head = head
        self.label = label

    def set_head(self, head, label=None):
        if head == self.id:
            raise ValueError("node {} cannot be its own head".format(self.id))
        self.head = head
        self.label = label

    def has_head(self):
        return self.head is not None

    def clear(self):
        arc = Arc(self.head, self.label)
        self.head = None
        self.label = None
        return arc

    def __repr__(self):
        return "Node(id={}, form={!r}, head={}, label={!r})".format(
            self.id, self.form, self.head, self.label)


class Sentence(Sequence):
    """Node sequence with an artificial root at index 0.

    Heads are stored as plain indices into this sequence, so a node never
    holds a reference to its governor.
    """

    def __init__(self, nodes):
        self._nodes = list(nodes)
        if not self._nodes or self._nodes[0].id != 0:
            raise ValueError("sentence must begin with the root node")

    @classmethod
    def from_words(cls, words, postags=None):
        nodes = [Node(0, ROOT_FORM, ROOT_POSTAG)]
        if postags is None:
            postags = [None] * len(words)
        for i, (word, postag) in enumerate(zip(words, postags), start=1):
            nodes.append(Node(i, word, postag))
        return cls(nodes)

    @classmethod
    def from_conll(cls, tokens):
        nodes = [Node(0, ROOT_FORM, ROOT_POSTAG)]
        for token in tokens:
            if token['id'] == 0:
                continue
            nodes.append(Node(token['id'], token['form'], token['postag'],
                              token['head'], token['deprel']))
        return cls(nodes)

    def __getitem__(self, index):
        return self._nodes[index]

    def __len__(self):
        return len(self._nodes)

    def get(self, index, default=None):
        if index is None or index < 0 or index >= len(self._nodes):
            return default
        return self._nodes[index]

    def head_of(self, index):
        node = self.get(index)
        return None if node is None else self.get(node.head)

    def is_descendant_of(self, index, ancestor):
        """Walk the live head links upward from `index`.

        Raises CyclicDependencyError if the walk does not reach a headless
        node within len(self) steps.
        """
        head = self._nodes[index].head
        for _ in range(len(self._nodes)):
            if head is None:
                return False
            if head == ancestor:
                return True
            head = self._nodes[head].head
        raise CyclicDependencyError(
            "head links starting from node {} form a cycle: {}"
            .format(index, self.heads))

    def leftmost_dependent(self, index):
        for i in range(1, index):
            if self._nodes[i].head == index:
                return self._nodes[i]
        return None

    def rightmost_dependent(self, index):
        for i in range(len(self._nodes) - 1, index, -1):
            if self._nodes[i].head == index:
                return self._nodes[i]
        return None

    @property
    def heads(self):
        return [node.head for node in self._nodes]

    @property
    def labels(self):
        return [node.label for node in self._nodes]

    @property
    def words(self):
        return [node.form for node in self._nodes]

    def __repr__(self):
        return "Sentence({})".format(self._nodes)
