from enum import Enum


class Source(Enum):
    STACK = 'i'
    INPUT = 'j'
    PEEK = 'k'


class Relation(Enum):
    HEAD = 'h'
    GRANDHEAD = 'h2'
    LEFTMOST = 'lmd'
    RIGHTMOST = 'rmd'


class State:

    def __init__(self, sentence):
        self._sentence = sentence
        self._num_tokens = len(sentence)
        self._stack = []
        self._inter = []
        self._input = 0
        self._oracle = None
        self._history = []
        self.shift()

    def save_oracle(self):
        """Move the current edges into the gold table.

        Returns False when no node had a head, i.e. there is no tree to
        learn from.
        """
        self._oracle = [node.clear() for node in self._sentence]
        return any(arc.head is not None for arc in self._oracle)

    def reset_oracle(self):
        for node in self._sentence[1:]:
            node.clear()
        for node in self._sentence[1:]:
            arc = self._oracle[node.id]
            node.set_head(arc.head, arc.label)

    def gold(self, index):
        if self._oracle is None:
            raise RuntimeError("oracle has not been saved")
        return self._oracle[index]

    @property
    def oracle(self):
        return self._oracle

    def shift(self):
        while self._inter:
            self._stack.append(self._inter.pop())
        self._stack.append(self._input)
        self._input += 1

    def reduce(self):
        return self._stack.pop()

    def pass_(self):
        self._inter.append(self._stack.pop())

    def reset(self, stack_id, input_id):
        self._stack.clear()
        self._inter.clear()
        self._stack.append(stack_id)
        self._input = input_id

    def record(self, label):
        self._history.append(label)

    def is_terminal(self):
        return self._input >= self._num_tokens

    def _get(self, index, window):
        index += window
        if 0 <= index < self._num_tokens:
            return self._sentence[index]
        return None

    def stack_node(self, window=0):
        """Node at `window` ids away from the stack top in the sentence."""
        if not self._stack:
            return None
        return self._get(self._stack[-1], window)

    def input_node(self, window=0):
        """Node at `window` ids away from the input in the sentence."""
        return self._get(self._input, window)

    def peek(self, window):
        """Structural lookup.

        window <= 0: the |window|-th node below the stack top in the stack.
        window > 0: the (window-1)-th node of the pass-list, counted from
        the most recently passed one.
        """
        if window <= 0:
            window = -window
            if window < len(self._stack):
                return self._sentence[self._stack[-1 - window]]
        elif window <= len(self._inter):
            return self._sentence[self._inter[-window]]
        return None

    def get_node(self, source, window=0, relation=None):
        source = Source(source)
        if source is Source.STACK:
            node = self.stack_node(window)
        elif source is Source.INPUT:
            node = self.input_node(window)
        else:
            node = self.peek(window)
        if node is None or relation is None:
            return node
        return self._relative_node(node, Relation(relation))

    def _relative_node(self, node, relation):
        sentence = self._sentence
        if relation is Relation.HEAD:
            return sentence.head_of(node.id)
        elif relation is Relation.GRANDHEAD:
            head = sentence.head_of(node.id)
            return None if head is None else sentence.head_of(head.id)
        elif relation is Relation.LEFTMOST:
            return sentence.leftmost_dependent(node.id)
        else:
            return sentence.rightmost_dependent(node.id)

    def is_descendant_of(self, node, ancestor):
        return self._sentence.is_descendant_of(node.id, ancestor.id)

    @property
    def sentence(self):
        return self._sentence

    @property
    def num_tokens(self):
        return self._num_tokens

    @property
    def stack(self):
        return tuple(self._stack)

    @property
    def inter(self):
        return tuple(self._inter)

    @property
    def input(self):
        return self._input

    @property
    def stack_size(self):
        return len(self._stack)

    def stack_empty(self):
        return not self._stack

    @property
    def history(self):
        return self._history

    @property
    def step(self):
        return len(self._history)
