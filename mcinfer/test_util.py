import pytest

from mcinfer.errors import ConfigurationError
from mcinfer.params import ParameterHandler, convert
from mcinfer.util import elapsed_time_str, item, product, StopWatch


class Owner(object):

    def __init__(self):
        self.values = {}
        self.paramhandler = ParameterHandler(self)
        self.paramhandler.add('steps', 'set_steps', int)

    def set_steps(self, steps):
        self.values['steps'] = steps


class Child(Owner):

    def __init__(self):
        Owner.__init__(self)
        self.paramhandler.add('flag', 'set_flag', bool)

    def set_flag(self, flag):
        self.values['flag'] = flag


def test_elapsed_time_str():
    assert elapsed_time_str(0) == '0:00:00.000'
    assert elapsed_time_str(3723.5) == '1:02:03.500'


def test_item_and_product():
    assert item({3}) == 3
    with pytest.raises(ValueError):
        item(set())
    assert product([2, 3, 4]) == 24
    assert product([]) == 1


def test_stopwatch():
    watch = StopWatch()
    watch.tag('sampling', verbose=False)
    assert not watch['sampling'].finished
    watch.finish('sampling')
    assert watch['sampling'].finished
    assert watch['sampling'].elapsedtime >= 0
    with pytest.raises(KeyError):
        watch.finish('grounding')
    watch.tag('grounding', verbose=False)
    watch.finish()
    assert watch['grounding'].finished
    watch.reset()
    assert watch['sampling'] is None


def test_convert():
    assert convert('12', int) == 12
    assert convert('on', bool) is True
    assert convert('False', bool) is False
    assert convert(.5, float) == .5
    with pytest.raises(ConfigurationError):
        convert('maybe', bool)
    with pytest.raises(ConfigurationError):
        convert('x', float)


def test_parameter_handler():
    owner = Owner()
    child = Child()
    owner.paramhandler.add_subhandler(child.paramhandler)
    assert owner.paramhandler.names() == {'steps', 'flag'}
    handled = owner.paramhandler.handle({'steps': '3', 'flag': 'yes'})
    assert handled == {'steps', 'flag'}
    # both handlers know 'steps'
    assert owner.values == {'steps': 3}
    assert child.values == {'steps': 3, 'flag': True}
    with pytest.raises(ConfigurationError):
        owner.paramhandler.handle({'unknown': 1})
    with pytest.raises(ConfigurationError):
        owner.paramhandler.add('other', 'set_other')


def main():
    test_elapsed_time_str()
    test_item_and_product()
    test_stopwatch()
    test_convert()
    test_parameter_handler()


if __name__ == '__main__':
    main()
