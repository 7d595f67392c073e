import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

import make_listing_chart as chart


def sample_frame():
    return pd.DataFrame({
        "title": ["A", "B", "C", "D", "E", "F"],
        "runtime": [95, 95, 110, 110, 130, np.nan],
        "rating": [6.1, 7.0, 7.4, 5.9, 8.2, 6.6],
        "genre": ["Action", "Drama", "Action", "Drama", "Comedy", "Comedy"],
    })


class TestRenderBoxplot(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_writes_png(self):
        out = chart.render_boxplot(sample_frame(), "runtime", "rating", "genre", self.dir / "nested" / "box.png")
        self.assertTrue(out.is_file())
        self.assertEqual(out.read_bytes()[:8], b"\x89PNG\r\n\x1a\n")

    def test_unknown_column(self):
        with self.assertRaises(KeyError):
            chart.render_boxplot(sample_frame(), "runtime", "gross", "genre", self.dir / "box.png")

    def test_cli_reads_csv(self):
        csv_path = self.dir / "movies.csv"
        sample_frame().to_csv(csv_path, index=False)
        old = chart.CHART_DIR
        chart.CHART_DIR = str(self.dir / "charts")
        try:
            self.assertEqual(chart.main([str(csv_path)]), 0)
        finally:
            chart.CHART_DIR = old
        self.assertTrue((self.dir / "charts" / chart.CHART_FILE).is_file())

    def test_cli_missing_csv(self):
        self.assertEqual(chart.main([str(self.dir / "nope.csv")]), 1)


if __name__ == "__main__":
    unittest.main()
