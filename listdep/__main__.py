from listdep import logging, utils
from listdep.app import App, arg
from listdep.io.reader import ConllReader
from listdep.nlp.dependency import Sentence
from listdep.nlp.eval import DependencyEval
from listdep.nlp.transition.label import LabelMap
from listdep.nlp.transition import list_based
from listdep.utils.progressbar import ProgressBar


def oracle(input_file, save_labels=None):
    """Replay the oracle on every sentence and score the rebuilt trees."""
    logging.i("read sentences from {}".format(input_file))
    sentences = [Sentence.from_conll(tokens)
                 for tokens in ConllReader(input_file)]
    logging.i("# sentences: {}".format(len(sentences)))

    evaluator = DependencyEval()
    sequences = []
    skipped = 0
    pbar = ProgressBar(enabled=App.verbose)
    pbar.start(len(sentences))
    for index, sentence in enumerate(sentences):
        labels, state = list_based.oracle(sentence)
        pbar.update(index + 1)
        if labels is None:
            skipped += 1
            continue
        sequences.append(labels)
        evaluator.add(*list_based.ListBased.evaluate(state))
    pbar.finish()

    if skipped > 0:
        logging.w("{} sentences without gold arcs were skipped"
                  .format(skipped))
    logging.i("# transitions: {}".format(sum(map(len, sequences))))
    logging.i(str(evaluator))

    label_map = LabelMap.from_sequences(sequences)
    logging.i("# labels: {}".format(len(label_map)))
    if save_labels is not None:
        utils.save(label_map, save_labels)
        logging.i("label map saved to {}".format(save_labels))
    return evaluator


def main(args=None):
    App.add_command('oracle', oracle, {
        'input_file': arg('--input', '-i',
                          type=str,
                          required=True,
                          help='CoNLL file with gold trees',
                          metavar='FILE'),
        'save_labels': arg('--save-labels',
                           type=str,
                           default=None,
                           help='File to dump the collected label map',
                           metavar='FILE'),
    }, description='Replay the oracle over gold trees')
    App.run(args)


if __name__ == "__main__":
    main()
