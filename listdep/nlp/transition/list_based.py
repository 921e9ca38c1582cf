from listdep import logging
from listdep.nlp.transition.label import ArcType, Label, ListAction, SHIFT
from listdep.nlp.transition.state import State


class ListBased(object):
    """List-based transition system with shift, reduce and pass actions.

    A pass moves the stack top onto a list of nodes set aside; the list is
    put back onto the stack at the next shift. Arcs between the stack top
    and the input can thus be built over nodes that are not adjacent,
    which covers non-projective trees.
    """

    @staticmethod
    def apply(label, state):
        label = Label.parse(label)
        stack = state.stack_node()
        input = state.input_node()
        if label.arc is ArcType.LEFT \
                and label.list is not ListAction.SHIFT:
            stack.set_head(input.id, label.deprel)
            if label.list is ListAction.REDUCE:
                ListBased.reduce(state)
            else:
                ListBased.pass_(state)
        elif label.arc is ArcType.RIGHT \
                and label.list is not ListAction.REDUCE:
            input.set_head(stack.id, label.deprel)
            if label.list is ListAction.SHIFT:
                ListBased.shift(state)
            else:
                ListBased.pass_(state)
        elif label.arc is ArcType.NO:
            if label.list is ListAction.SHIFT:
                ListBased.shift(state)
            elif label.list is ListAction.REDUCE:
                ListBased.reduce(state)
            else:
                ListBased.pass_(state)
        else:
            raise ValueError("undefined transition: {}".format(label))
        state.record(label)

    """Shift: (s, l, i|b) => (s|l|i, [], b)"""
    @staticmethod
    def shift(state):
        state.shift()

    """Reduce: (s|j, l, b) => (s, l, b)"""
    @staticmethod
    def reduce(state):
        state.reduce()

    """Pass: (s|j, l, b) => (s, l|j, b)"""
    @staticmethod
    def pass_(state):
        state.pass_()

    @staticmethod
    def is_allowed(label, state):
        label = Label.parse(label)
        if state.is_terminal():
            return False
        if state.stack_empty():
            return label == SHIFT
        stack = state.stack_node()
        input = state.input_node()
        if label.arc is ArcType.LEFT:
            return (stack.id != 0 and not stack.has_head()
                    and label.list is not ListAction.SHIFT
                    and not state.is_descendant_of(input, stack))
        elif label.arc is ArcType.RIGHT:
            return (not input.has_head()
                    and label.list is not ListAction.REDUCE
                    and not state.is_descendant_of(stack, input))
        elif label.list is ListAction.REDUCE:
            return stack.has_head()
        return True

    @staticmethod
    def is_terminal(state):
        return state.is_terminal()

    @staticmethod
    def get_oracle(state):
        stack = state.stack_node()
        input = state.input_node()

        gold = state.gold(stack.id)
        if gold.is_head(input.id) and not state.is_descendant_of(input, stack):
            list = ListAction.REDUCE \
                if ListBased.is_oracle_reduce(state, True) \
                else ListAction.PASS
            return Label(ArcType.LEFT, list, gold.label)

        gold = state.gold(input.id)
        if gold.is_head(stack.id) and not state.is_descendant_of(stack, input):
            list = ListAction.SHIFT if ListBased.is_oracle_shift(state) \
                else ListAction.PASS
            return Label(ArcType.RIGHT, list, gold.label)

        if ListBased.is_oracle_shift(state):
            list = ListAction.SHIFT
        elif ListBased.is_oracle_reduce(state, False):
            list = ListAction.REDUCE
        else:
            list = ListAction.PASS
        return Label(ArcType.NO, list)

    @staticmethod
    def is_oracle_shift(state):
        stack = state.stack_node()
        input = state.input_node()
        # head(input) lies deeper than the stack top
        head = state.gold(input.id).head
        if head is not None and head < stack.id:
            return False
        # a node under the stack top still waits for input as its head
        window = 0
        while True:
            window -= 1
            node = state.peek(window)
            if node is None:
                break
            if state.gold(node.id).is_head(input.id):
                return False
        return True

    @staticmethod
    def is_oracle_reduce(state, has_head):
        stack = state.stack_node()
        if not has_head and not stack.has_head():
            return False
        # a dependent of the stack top is still ahead of the input
        for index in range(state.input + 1, state.num_tokens):
            if state.gold(index).is_head(stack.id):
                return False
        return True

    @staticmethod
    def evaluate(state):
        las, uas = 0, 0
        sentence = state.sentence
        for index in range(1, len(sentence)):
            gold = state.gold(index)
            node = sentence[index]
            if gold.is_head(node.head):
                uas += 1
                if gold.is_label(node.label):
                    las += 1
        return las, uas, len(sentence) - 1


def oracle(sentence):
    """Run the oracle over `sentence` and return the label sequence.

    The gold tree is kept in the returned state; the live edges hold the
    tree built by the oracle transitions.
    """
    state = State(sentence)
    if not state.save_oracle():
        logging.w("sentence has no gold arcs: {}"
                  .format(' '.join(map(str, sentence.words[1:]))))
        state.reset_oracle()
        return None, state
    while not ListBased.is_terminal(state):
        label = ListBased.get_oracle(state)
        logging.v("oracle step {}: stack={}, inter={}, input={} -> {}"
                  .format(state.step, state.stack, state.inter,
                          state.input, label))
        ListBased.apply(label, state)
    return state.history, state


def parse(sentence, scorer):
    """Decode `sentence` with labels ranked by `scorer(state)`.

    The first allowed label is applied at each step. Existing heads are
    moved to the gold table of the returned state before decoding, so the
    result can be scored with `ListBased.evaluate`.
    """
    state = State(sentence)
    state.save_oracle()
    while not ListBased.is_terminal(state):
        label = None
        for candidate in scorer(state):
            if ListBased.is_allowed(candidate, state):
                label = candidate
                break
        if label is None:
            label = SHIFT
            logging.d("no allowed label in the candidates at step {}, "
                      "fall back to {}".format(state.step, label))
        ListBased.apply(label, state)
    return state
