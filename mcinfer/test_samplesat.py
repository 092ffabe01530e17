import random
from collections import Counter

import pytest

from mcinfer.errors import UnsatisfiableError
from mcinfer.inference.samplesat import SampleSAT
from mcinfer.logic import WorldVariables, PossibleWorld, WeightedFormula, \
    WeightedClausalKB, Disjunction, Implication, lit


variables = WorldVariables(['a', 'b', 'c'])
a, b, c = variables

# a v b has three models, c is unconstrained
kb_or = WeightedClausalKB([WeightedFormula(Disjunction([lit(a), lit(b)]), hard=True)])

chain = WorldVariables(['x%d' % i for i in range(8)])
kb_chain = WeightedClausalKB([WeightedFormula(lit(chain[0]), hard=True)] +
                             [WeightedFormula(Implication([lit(chain[i]), lit(chain[i + 1])]), hard=True)
                              for i in range(len(chain) - 1)])


def _sampler(variables, evidence=None, seed=0, **params):
    return SampleSAT(PossibleWorld(variables), variables, evidence, random.Random(seed), **params)


def test_uniform_over_models():
    sat = _sampler(variables)
    sat.reset(kb_or.hard_clauses())
    n = 6000
    counts = Counter()
    free = 0
    for _ in range(n):
        state = sat.step()
        counts[str(state)[:2]] += 1
        free += state[c]
    assert counts['00'] == 0
    for model in ('01', '10', '11'):
        assert abs(counts[model] / n - 1. / 3) < .03
    assert abs(free / n - .5) < .03


def test_evidence_is_fixed():
    sat = _sampler(variables, {0: False})
    sat.reset(kb_or.hard_clauses())
    for _ in range(100):
        state = sat.step()
        assert not state[a]
        assert state[b]


def test_violated_by_evidence():
    sat = _sampler(variables, {0: False, 1: False})
    with pytest.raises(UnsatisfiableError):
        sat.reset(kb_or.hard_clauses())


def test_components():
    kb = WeightedClausalKB([WeightedFormula(Disjunction([lit(a), lit(b)]), hard=True),
                            WeightedFormula(lit(c, True), hard=True)])
    sat = _sampler(variables)
    sat.reset(kb.hard_clauses())
    assert sorted(atoms for atoms, _ in sat.components) == [[0, 1], [2]]


def test_walksat():
    # maxenum=0 forces the local search on every component
    sat = _sampler(chain, maxenum=0)
    sat.reset(kb_chain.hard_clauses())
    for _ in range(50):
        state = sat.step()
        assert all(cl(state) for cl in kb_chain.hard_clauses())
        assert all(state.values)


def test_unsatisfiable():
    kb = WeightedClausalKB([WeightedFormula(lit(a), hard=True),
                            WeightedFormula(lit(a, True), hard=True)])
    sat = _sampler(variables)
    sat.reset(kb.hard_clauses())
    with pytest.raises(UnsatisfiableError):
        sat.step()
    sat = _sampler(variables, maxenum=0, maxflips=100)
    sat.reset(kb.hard_clauses())
    with pytest.raises(UnsatisfiableError):
        sat.step()


def test_params():
    sat = _sampler(variables)
    assert sat.p == .5
    sat.paramhandler.handle({'p': '0.2', 'maxenum': '4'})
    assert sat.p == .2
    assert sat.maxenum == 4
    with pytest.raises(ValueError):
        sat.set_p(1.5)
    with pytest.raises(ValueError):
        sat.set_temperature(0)


def main():
    test_uniform_over_models()
    test_evidence_is_fixed()
    test_violated_by_evidence()
    test_components()
    test_walksat()
    test_unsatisfiable()
    test_params()


if __name__ == '__main__':
    main()
