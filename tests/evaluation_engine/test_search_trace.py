import pytest
import pandas as pd

from crossval.evaluation_engine import SearchTrace, loss_summary


class TestLossSummary:

    def test_statistics(self):
        df = loss_summary([1.0, 2.0, 3.0, 6.0])
        row = df.iloc[0]
        assert row['folds'] == 4
        assert row['mean'] == pytest.approx(3.0)
        assert row['min'] == 1.0
        assert row['max'] == 6.0
        assert row['range'] == 5.0

    def test_empty(self):
        df = loss_summary([])
        assert df.empty
        assert list(df.columns) == ["folds", "mean", "std", "min", "max", "range"]


class TestSearchTrace:

    def test_records_one_row_per_arm(self):
        trace = SearchTrace()
        trace.record("sha", 0, [{'a': 1}, {'a': 2}], [0.5, 0.25], {'epochs': 3})
        trace.record("sha", 1, [{'a': 2}], [0.1], {'epochs': 6})
        assert len(trace) == 3

        df = trace.to_frame()
        assert isinstance(df, pd.DataFrame)
        assert df['param_a'].tolist() == [1, 2, 2]
        assert df['round'].tolist() == [0, 0, 1]
        assert 'params' not in df.columns

    def test_best(self):
        trace = SearchTrace()
        trace.record("brute", 0, [{'a': 1}, {'a': 2}, {'a': 3}], [0.3, 0.1, 0.9])
        assert trace.best()['params'] == {'a': 2}
        assert trace.best(maximize=True)['params'] == {'a': 3}

    def test_params_are_copied(self):
        params = [{'a': 1}]
        trace = SearchTrace()
        trace.record("hc", 0, params, [1.0])
        params[0]['a'] = 99
        assert trace.rows[0]['params'] == {'a': 1}

    def test_empty_frame(self):
        trace = SearchTrace()
        assert trace.best() is None
        assert list(trace.to_frame().columns) == SearchTrace.COLUMNS
