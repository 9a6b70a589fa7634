import io
import unittest
from contextlib import redirect_stdout
from unittest import mock
import matplotlib
matplotlib.use("Agg")
from function_profiler import FunctionProfiler

class TestFunctionProfiler(unittest.TestCase):
    def setUp(self):
        self.profiler = FunctionProfiler()

    def test_profile_records_each_call(self):
        @self.profiler.profile("square")
        def square(x):
            return x * x

        self.assertEqual([square(i) for i in range(4)], [0, 1, 4, 9])
        self.assertEqual(len(self.profiler.profiles["square"]), 4)
        self.assertGreaterEqual(self.profiler.total("square"), 0.0)
        self.assertEqual(square.__name__, "square")

    def test_profile_records_failing_call(self):
        @self.profiler.profile("fail")
        def fail():
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            fail()
        self.assertEqual(len(self.profiler.profiles["fail"]), 1)

    def test_total_of_unknown_name(self):
        self.assertEqual(self.profiler.total("nothing"), 0.0)

    def test_summary(self):
        self.profiler.record("insert", 0.5)
        self.profiler.record("insert", 1.5)
        out = io.StringIO()
        with redirect_stdout(out):
            self.profiler.summary()
        self.assertIn("insert: 2 call(s), total 2.000000s, mean 1.000000s", out.getvalue())

    def test_plot_unknown_name(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.profiler.plot("query")
        self.assertEqual(out.getvalue(), "No data found for function 'query'\n")

    def test_plot(self):
        for t in (0.1, 0.2, 0.25, 0.3, 0.5):
            self.profiler.record("insert", t)
        with mock.patch("function_profiler.plt.show") as show:
            self.profiler.plot("insert")
        show.assert_called_once()

if __name__ == '__main__':
    unittest.main()
