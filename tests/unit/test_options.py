import config
import pytest
from dbselector import Dialect, GrammarError, Selector, SelectorOptions
from dbselector import select_from


def test_init_defaults():
    """Test default initialization"""
    options = SelectorOptions()

    assert options.dialect == 'postgresql'
    assert options.dialect_enum is Dialect.POSTGRESQL
    assert options.parameter_prefix == ''
    assert options.strict is False


@pytest.mark.parametrize(('dialect', 'expected'), [
    ('postgresql', 'postgresql'),
    ('MySQL', 'mysql'),
    (Dialect.SQLITE, 'sqlite'),
])
def test_dialect_normalized(dialect, expected):
    """Test dialect names are normalized"""
    assert SelectorOptions(dialect=dialect).dialect == expected


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError, match='dialect must be one of'):
        SelectorOptions(dialect='oracle')

    with pytest.raises(ValueError):
        Selector(dialect='mssql')


def test_none_prefix():
    """Test a None prefix becomes empty"""
    assert SelectorOptions(parameter_prefix=None).parameter_prefix == ''


def test_selector_keyword_options():
    """Test options given as keywords"""
    sel = Selector(dialect='sqlite', parameter_prefix='p_')
    assert sel.options.dialect == 'sqlite'
    assert sel.where('a', '=', 1).render()[0] == 'SELECT * FROM "" WHERE a = :p_a1'


def test_selector_dict_options():
    """Test options given as a dictionary"""
    sel = Selector({'dialect': 'mysql', 'parameter_prefix': 'q_'})
    assert sel.options.dialect == 'mysql'
    assert sel.options.parameter_prefix == 'q_'


def test_selector_options_object_copied():
    """Test a shared options object is not mutated by a selector"""
    options = SelectorOptions(parameter_prefix='a_')
    sel = Selector(options, parameter_prefix='ignored')
    sel.set_parameter_prefix('b_')
    assert options.parameter_prefix == 'a_'
    assert sel.options.parameter_prefix == 'b_'


def test_selector_config_options():
    """Test options loaded from a config module"""
    sel = Selector('selector', config=config)
    assert sel.options.dialect == 'mysql'
    assert sel.options.parameter_prefix == 'cfg_'
    assert sel.options.strict is True

    sql, binds = sel.delete_from('t').where('a', '=', 1).render_positional()
    assert sql == 'DELETE FROM "t" WHERE a = ?'
    assert binds == [1]
    with pytest.raises(GrammarError):
        sel.and_('b', '=', 2).where('c', '=', 3).render()


def test_facade_config_options():
    """Test module starters pass config through"""
    sql, binds = select_from('t', options='selector', config=config).where('a', '=', 1).render()
    assert sql == 'SELECT * FROM "t" WHERE a = :cfg_a1'
    assert binds == {'cfg_a1': 1}


def test_keyword_options_validated():
    """Test keyword-only options are normalized and validated after loading"""
    assert Selector(dialect='SQLite').options.dialect == 'sqlite'
    with pytest.raises(ValueError, match='dialect must be one of'):
        Selector(config=None, dialect='oracle')


if __name__ == '__main__':
    pytest.main([__file__])
