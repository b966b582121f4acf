"""
Keyword Chart Tests
"""
from modules.analytics import KeywordFrequency
from modules.charts import chart_label, keyword_chart


class TestChartLabel:

    def test_short_label_unchanged(self):
        assert chart_label("OSI Model") == "OSI Model"

    def test_long_label_truncated(self):
        label = chart_label("Transmission Control Protocol")
        assert label == "Transmission Control..."
        assert len(label) == 23


class TestKeywordChart:
    """Horizontal bar chart of the top keywords"""

    def test_no_data(self):
        assert keyword_chart([]) is None

    def test_top_n_with_rank_one_on_top(self):
        stats = [KeywordFrequency(f"kw{i}", 20 - i) for i in range(12)]
        fig = keyword_chart(stats, top_n=10)
        bar = fig.data[0]
        assert bar.orientation == "h"
        assert len(bar.y) == 10
        assert bar.y[-1] == "kw0"
        assert bar.x[-1] == 20
        assert bar.y[0] == "kw9"
