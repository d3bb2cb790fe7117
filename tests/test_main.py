import unittest
import sys
import os
import io
import shutil
import tempfile
from contextlib import redirect_stdout, redirect_stderr

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wilson_maze.main import main, build_parser

class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def out(self, name):
        return os.path.join(self.out_dir, name)

    def test_defaults(self):
        args = build_parser().parse_args(["generate"])
        self.assertEqual((args.height, args.width, args.scale), (125, 125, 20))
        self.assertIsNone(args.seed)
        self.assertFalse(args.solve)

    def test_generate_all_outputs(self):
        main(["generate", "--height", "6", "--width", "12", "--seed", "3", "--solve", "--stats",
              "--scale", "8",
              "--text", self.out("maze.txt"), "--png", self.out("maze.png"), "--svg", self.out("maze.svg")])

        with open(self.out("maze.txt"), encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(len(lines), 13)
        self.assertTrue(all(len(line) == 25 for line in lines))
        self.assertIn('·', "".join(lines))

        with open(self.out("maze.png"), "rb") as f:
            self.assertTrue(f.read().startswith(b"\x89PNG"))
        with open(self.out("maze.svg"), encoding="utf-8") as f:
            self.assertIn("<line", f.read())

    def test_same_seed_same_text(self):
        main(["generate", "--height", "8", "--width", "9", "--seed", "17", "--text", self.out("a.txt")])
        main(["generate", "--height", "8", "--width", "9", "--seed", "17", "--text", self.out("b.txt")])
        with open(self.out("a.txt"), encoding="utf-8") as a, open(self.out("b.txt"), encoding="utf-8") as b:
            self.assertEqual(a.read(), b.read())

    def test_text_to_stdout(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["generate", "--height", "2", "--width", "6", "--seed", "1", "--text", "-"])
        self.assertEqual(len(buf.getvalue().splitlines()), 5)

    def test_config_errors(self):
        for argv in (["generate", "--width", "5"],
                     ["generate", "--height", "0", "--width", "10"],
                     ["generate", "--width", "10", "--scale", "0"],
                     ["generate", "--width", "10", "--steps-per-frame", "0"],
                     ["benchmark", "--sizes", "3"]):
            with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as cm:
                main(argv)
            self.assertEqual(cm.exception.code, 2)

    def test_benchmark(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["benchmark", "--sizes", "6", "10"])
        output = buf.getvalue()
        self.assertIn("6x6", output)
        self.assertIn("10x10", output)

    def test_no_command(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            main([])
        self.assertIn("generate", buf.getvalue())

if __name__ == '__main__':
    unittest.main()
