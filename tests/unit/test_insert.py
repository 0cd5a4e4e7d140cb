"""
Unit tests for INSERT rendering from row values.
"""
import logging

import pytest
from dbselector import MappingError, Selector
from tests.fixtures.rows import MeasurementRecord
from tests.fixtures.rows import MeasurementTuple


def test_insert_empty_values(selector):
    """Test INSERT without rows renders no VALUES section"""
    sql, binds = selector.insert_into('table').values([]).render()
    assert sql == 'INSERT INTO "table"'
    assert binds == {}


def test_insert_none_values(selector):
    """Test INSERT with None rows behaves like no rows"""
    sql, binds = selector.insert_into('table').values(None).returning('id').render()
    assert sql == 'INSERT INTO "table" RETURNING id'
    assert binds == {}


def test_insert_one_item(selector, measurement):
    """Test columns skip id and excluded fields, overrides rename"""
    sql, binds = selector.insert_into('table').values([measurement]).render()

    assert sql == ('INSERT INTO "table" (Num_A, num_b, time, num_c) VALUES '
                   '(:Num_A1, :num_b2, :time3, :num_c4)')
    assert binds == {
        'Num_A1': measurement.Num_A,
        'num_b2': measurement.NumB,
        'time3': measurement.Time,
        'num_c4': measurement.NumC,
    }


def test_insert_many(selector, measurements):
    """Test every row renders its own VALUES group in field order"""
    item1, item2 = measurements
    sql, binds = selector.insert_into('table').values(measurements).render()

    assert sql == ('INSERT INTO "table" (Num_A, num_b, time, num_c) VALUES '
                   '(:Num_A1, :num_b2, :time3, :num_c4), (:Num_A5, :num_b6, :time7, :num_c8)')
    assert binds == {
        'Num_A1': item1.Num_A,
        'num_b2': item1.NumB,
        'time3': item1.Time,
        'num_c4': item1.NumC,
        'Num_A5': item2.Num_A,
        'num_b6': item2.NumB,
        'time7': item2.Time,
        'num_c8': item2.NumC,
    }


def test_insert_values_accumulate(selector, measurements):
    """Test repeated values() calls extend the batch"""
    selector.insert_into('table').values(measurements[:1]).values(measurements[1:])
    sql, binds = selector.render()
    assert sql.count('(') == 3
    assert len(binds) == 8


def test_insert_returning(selector, measurement):
    """Test INSERT with RETURNING"""
    selector.insert_into('table').values([measurement])
    selector.returning('id', 'num_b')
    sql, _ = selector.render()

    assert sql == ('INSERT INTO "table" (Num_A, num_b, time, num_c) VALUES '
                   '(:Num_A1, :num_b2, :time3, :num_c4) '
                   'RETURNING id,num_b')


def test_insert_positional(selector, measurements):
    """Test positional INSERT keeps row-major bind order"""
    sql, binds = selector.insert_into('table').values(measurements).render_positional()
    assert sql == ('INSERT INTO "table" (Num_A, num_b, time, num_c) VALUES '
                   '($1, $2, $3, $4), ($5, $6, $7, $8)')
    assert binds == [2, 3, measurements[0].Time, 4, 20, 30, measurements[1].Time, 40]


@pytest.mark.parametrize(('rows', 'expected_sql', 'expected_binds'), [
    ([MeasurementRecord(Id=1, Num_A=2, NumB=3, Time=None, NumC=4, NumD=5)],
     'INSERT INTO "t" (Num_A, num_b, time, num_c) VALUES (:Num_A1, :num_b2, :time3, :num_c4)',
     {'Num_A1': 2, 'num_b2': 3, 'time3': None, 'num_c4': 4}),
    ([MeasurementTuple(1, 2, 3), MeasurementTuple(4, 5, 6)],
     'INSERT INTO "t" (num_a, num_b) VALUES (:num_a1, :num_b2), (:num_a3, :num_b4)',
     {'num_a1': 2, 'num_b2': 3, 'num_a3': 5, 'num_b4': 6}),
    ([{'ID': 7, 'name': 'Vova', 'Email': 'v@x'}],
     'INSERT INTO "t" (name, Email) VALUES (:name1, :Email2)',
     {'name1': 'Vova', 'Email2': 'v@x'}),
], ids=['described', 'namedtuple', 'mapping'])
def test_insert_row_shapes(rows, expected_sql, expected_binds):
    """Test each supported row shape maps to columns the same way"""
    sql, binds = Selector().insert_into('t').values(rows).render()
    assert sql == expected_sql
    assert binds == expected_binds


@pytest.mark.parametrize('row', [
    MeasurementRecord(Num_A=2, NumB=3, NumC=4),
    MeasurementTuple(1, 2, 3),
    {'id': 1, 'Num_A': 2},
], ids=['described', 'namedtuple', 'mapping'])
def test_insert_single_row(row):
    """Test a lone row value is inserted as a one-row batch"""
    single = Selector().insert_into('t').values(row).render()
    batch = Selector().insert_into('t').values([row]).render()
    assert single == batch
    assert single[0].count('VALUES (') == 1


def test_insert_single_dataclass_row(measurement):
    """Test a lone dataclass row is not iterated"""
    sql, binds = Selector().insert_into('t').values(measurement).render()
    assert sql == 'INSERT INTO "t" (Num_A, num_b, time, num_c) VALUES (:Num_A1, :num_b2, :time3, :num_c4)'
    assert len(binds) == 4


def test_later_rows_read_positionally():
    """Test later rows are read by the first row's field positions"""
    rows = [{'a': 1, 'b': 2}, {'b': 20, 'a': 10}]
    sql, binds = Selector().insert_into('t').values(rows).render()
    assert sql == 'INSERT INTO "t" (a, b) VALUES (:a1, :b2), (:a3, :b4)'
    assert binds == {'a1': 1, 'b2': 2, 'a3': 20, 'b4': 10}


class TestInsertErrors:
    """Mapping failures surface from render"""

    @pytest.mark.parametrize('row', [42, 'text', [1, 2], None],
                             ids=['int', 'str', 'list', 'none'])
    def test_not_record_like(self, row):
        """Test non-record rows raise MappingError"""
        with pytest.raises(MappingError, match='not a record-like shape'):
            Selector().insert_into('t').values([row]).render()

    def test_second_row_unreadable(self, measurement):
        """Test a later row missing the first row's fields raises MappingError"""
        sel = Selector().insert_into('t').values([measurement, {'Num_A': 1}])
        with pytest.raises(MappingError, match='Cannot read field'):
            sel.render()

    def test_failure_is_logged(self, caplog):
        """Test mapping failures are logged before being raised"""
        sel = Selector().insert_into('items').values([object()])
        with caplog.at_level(logging.ERROR, logger='dbselector.statement'):
            with pytest.raises(MappingError):
                sel.render()
        assert "Failed to map INSERT rows for 'items'" in caplog.text

    def test_positional_raises_too(self):
        """Test positional rendering propagates MappingError"""
        with pytest.raises(MappingError):
            Selector().insert_into('t').values([3.5]).render_positional()


if __name__ == '__main__':
    pytest.main([__file__])
