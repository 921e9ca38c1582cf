import io
import os
import tempfile
import unittest

from listdep import logging


class TestLogger(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        self.logger = logging.Logger("listdep.test", logging.TRACE,
                                     [handler])

    def tearDown(self):
        self.logger.finalize()

    def test_levels(self):
        self.assertEqual(logging.getLevelName(logging.TRACE), 'trace')
        self.assertEqual(logging.getLevelName('trace'), logging.TRACE)
        self.assertEqual(logging.getLevelName(logging.INFO), 'info')

    def test_shortcuts(self):
        self.logger.v("step %d", 1)
        self.logger.i("done")
        self.logger.setLevel(logging.DEBUG)
        self.logger.v("hidden")
        self.assertEqual(self.stream.getvalue(),
                         "[trace] step 1\n[info] done\n")

    def test_set_level(self):
        self.logger.setLevel(logging.INFO)
        self.logger.i("shown")
        self.logger.setLevel(logging.WARNING)
        self.logger.i("hidden")
        self.logger.setLevel(logging.TRACE)
        self.logger.v("again")
        self.assertEqual(self.stream.getvalue(),
                         "[info] shown\n[trace] again\n")

    def test_finalize(self):
        self.logger.finalize()
        self.assertEqual(self.logger.handlers, [])
        self.assertTrue(self.logger.disabled)


class TestAppLogger(unittest.TestCase):

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as logdir:
            logging.AppLogger.configure(logdir=logdir, filemode='n',
                                        filename="test.log",
                                        verbosity=logging.DISABLE)
            try:
                logger = logging.AppLogger("listdep.app.test")
                logger.i("oracle finished")
                accessid = logger.accessid
                logger.finalize()
            finally:
                logging.AppLogger.configure(logdir=None, filemode='a',
                                            filename="%Y%m%d.log",
                                            verbosity=logging.TRACE)
            self.assertEqual(os.listdir(logdir), ['test-0.log'])
            with open(os.path.join(logdir, 'test-0.log')) as f:
                lines = f.read().splitlines()
        self.assertIn("LOG Start with ACCESSID=[%s]" % accessid, lines[0])
        self.assertTrue(lines[1].endswith("oracle finished"))
        self.assertIn(accessid, lines[1])
        self.assertIn("LOG End", lines[2])


if __name__ == "__main__":
    unittest.main()
