from monkey.environment import Environment
from monkey.objects import Integer, String


def test_get_missing():
    env = Environment()
    assert env.get('x') == (None, False)
    assert 'x' not in env


def test_set_returns_value():
    env = Environment()
    value = Integer(5)
    assert env.set('x', value) is value
    assert env.get('x') == (value, True)


def test_enclosed_reads_outward():
    outer = Environment()
    outer.set('x', Integer(1))
    inner = Environment.enclosed(outer)
    assert inner.outer is outer
    assert inner.get('x') == (Integer(1), True)
    assert 'x' in inner


def test_shadowing_leaves_outer_untouched():
    outer = Environment()
    outer.set('x', Integer(1))
    inner = Environment.enclosed(outer)
    inner.set('x', String('shadow'))
    assert inner.get('x')[0] == String('shadow')
    assert outer.get('x')[0] == Integer(1)


def test_outer_does_not_see_inner():
    outer = Environment()
    inner = Environment.enclosed(outer)
    inner.set('y', Integer(2))
    assert 'y' not in outer
