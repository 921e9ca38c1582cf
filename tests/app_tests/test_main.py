import contextlib
import io
import logging as std_logging
import math
import os
import pathlib
import signal
import tempfile
import unittest
from unittest import mock

from listdep import logging, utils
from listdep.__main__ import main, oracle
from listdep.app import App


SAMPLE_DIR = (pathlib.Path(__file__).parent / '../samples').resolve()
CONLL_FILE = SAMPLE_DIR / 'sample.conll'


class TestOracleCommand(unittest.TestCase):

    def setUp(self):
        self.verbose = App.verbose
        App.verbose = False

    def tearDown(self):
        App.verbose = self.verbose

    def test_oracle(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            label_file = os.path.join(tmpdir, 'labels.pkl')
            evaluator = oracle(str(CONLL_FILE), label_file)
            label_map = utils.restore(label_file)
        self.assertEqual(evaluator.num_sentences, 4)
        self.assertEqual(evaluator.total, 56)
        self.assertTrue(math.isclose(evaluator.las, 100.0))
        self.assertTrue(math.isclose(evaluator.uas, 100.0))
        self.assertIn('N-S', label_map)
        self.assertIn('L-R-det', label_map)
        self.assertIn('R-S-root', label_map)
        self.assertIn('N-P', label_map)


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.logdir = os.path.join(self.tmpdir.name, 'log')
        os.mkdir(self.logdir)
        self.env = mock.patch.dict(os.environ, {'HOME': self.tmpdir.name})
        self.env.start()
        self.root = std_logging.root
        self.logger_config = dict(logging.AppLogger._config)
        self.verbose, self.debug = App.verbose, App.debug
        self.signals = {signum: signal.getsignal(signum)
                        for signum in (signal.SIGINT, signal.SIGTERM)}

    def tearDown(self):
        for signum, handler in self.signals.items():
            signal.signal(signum, handler)
        App.verbose, App.debug = self.verbose, self.debug
        logging.AppLogger.configure(**self.logger_config)
        logging.setRootLogger(self.root)
        self.env.stop()
        self.tmpdir.cleanup()

    def run_main(self, *args):
        main(list(args) + ['--quiet',
                           '--logdir', self.logdir,
                           '--logoption', 'n',
                           '--loglevel', 'info'])
        logfiles = os.listdir(self.logdir)
        self.assertEqual(len(logfiles), 1)
        with open(os.path.join(self.logdir, logfiles[0])) as f:
            return f.read()

    def test_run(self):
        label_file = os.path.join(self.tmpdir.name, 'labels.pkl')
        log = self.run_main('--input', str(CONLL_FILE),
                            '--save-labels', label_file)
        self.assertFalse(App.verbose)
        self.assertIn("LAS: 100.00, UAS: 100.00 (56 tokens, 4 sentences)",
                      log)
        self.assertIn("*** [DONE] ***", log)
        self.assertNotIn("App.run called", log)
        self.assertIn('R-S-root', utils.restore(label_file))

    def test_run_error(self):
        missing = os.path.join(self.tmpdir.name, 'missing.conll')
        log = self.run_main('--input', missing)
        self.assertIn("Exception occurred during execution:", log)
        self.assertIn("FileNotFoundError: file was not found", log)
        self.assertNotIn("*** [DONE] ***", log)

    def test_signal(self):
        self.run_main('--input', str(CONLL_FILE))
        handler = signal.getsignal(signal.SIGTERM)
        self.assertRaises(SystemExit,
                          lambda: handler(signal.SIGTERM, None))

    def test_invalid_config(self):
        with open(os.path.join(self.tmpdir.name, '.listdep.conf'), 'w') as f:
            f.write("[listdep.common]\n"
                    "quiet = maybe\n")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as cm:
                main(['--input', str(CONLL_FILE)])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Not a boolean: quiet=maybe", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
