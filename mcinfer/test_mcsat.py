import math
import random

import pytest

from mcinfer.errors import UnsatisfiableError, EvidenceError, ConfigurationError
from mcinfer.inference.mcsat import MCSAT
from mcinfer.logic import WorldVariables, WeightedFormula, WeightedClausalKB, \
    Disjunction, Implication, Negation, lit


variables = WorldVariables(['A', 'B'])
A, B = variables

# P(A) = 1, P(B) = e^w / (1 + e^w) = 2/3
kb = WeightedClausalKB([WeightedFormula(lit(A), hard=True),
                        WeightedFormula(lit(B), math.log(2))])

smokers = WorldVariables(['Smokes(Ann)', 'Smokes(Bob)', 'Friends(Ann,Bob)', 'Cancer(Ann)', 'Cancer(Bob)'])
kb_smokers = WeightedClausalKB([
    WeightedFormula(Implication([lit(smokers['Smokes(Ann)']), lit(smokers['Cancer(Ann)'])]), 1.5),
    WeightedFormula(Implication([lit(smokers['Smokes(Bob)']), lit(smokers['Cancer(Bob)'])]), 1.5),
    WeightedFormula(Implication([lit(smokers['Friends(Ann,Bob)']),
                                 Disjunction([Negation(lit(smokers['Smokes(Ann)'])), lit(smokers['Smokes(Bob)'])])]), hard=True),
    WeightedFormula(lit(smokers['Smokes(Ann)']), -.5),
])


def test_end_to_end():
    mcsat = MCSAT(kb, variables, rng=random.Random(1))
    mcsat.run(20000)
    assert abs(mcsat.get_result(A) - 1.) < 1e-9
    assert abs(mcsat.get_result(B) - 2. / 3) < .03
    assert mcsat.get_result(1) == mcsat.get_result(B)


def test_normalization_constant():
    zs = []
    mcsat = MCSAT(kb_smokers, smokers, rng=random.Random(2))
    def record(state, step):
        zs.append(mcsat.dist.Z)
    dist = mcsat.run(250, record)
    assert zs[-1] == 250.
    assert zs == [float(i) for i in range(1, 251)]
    assert dist.Z == 1.
    assert dist.numsamples == 250
    for atom in smokers:
        assert 0. <= mcsat.get_result(atom) <= 1.


def test_hard_constraints_hold():
    mcsat = MCSAT(kb_smokers, smokers, rng=random.Random(3))
    hard = [wf for wf in kb_smokers.formulas if wf.hard]
    def check(state, step):
        for wf in hard:
            assert wf(state)
    mcsat.run(500, check)


def test_determinism():
    def run(seed):
        worlds = []
        MCSAT(kb_smokers, smokers, rng=random.Random(seed)).run(200, lambda s, i: worlds.append(str(s)))
        return worlds
    assert run(7) == run(7)
    assert MCSAT(kb_smokers, smokers, rndseed=5).run(100).results() == \
        MCSAT(kb_smokers, smokers, rndseed=5).run(100).results()


def test_soft_inclusion_frequency():
    w = .7
    kb_soft = WeightedClausalKB([WeightedFormula(lit(A), w)])
    mcsat = MCSAT(kb_soft, variables, rng=random.Random(4))
    mcsat.state[A] = True
    n = 20000
    selected = sum(1 for _ in range(n) if mcsat._satisfy_subset())
    assert abs(selected / n - (1. - math.exp(-w))) < .02


def test_callback_stops_chain():
    mcsat = MCSAT(kb, variables, rng=random.Random(0))
    dist = mcsat.run(1000, lambda state, step: step == 10)
    assert mcsat.step == 10
    assert dist.numsamples == 10


def test_repeated_runs():
    mcsat = MCSAT(kb, variables, rng=random.Random(8))
    mcsat.run(100)
    zs = []
    dist = mcsat.run(100, lambda state, step: zs.append(mcsat.dist.Z))
    assert zs[-1] == 100.
    assert dist.numsamples == 100
    assert dist.Z == 1.
    assert mcsat.step == 100
    assert abs(mcsat.get_result(A) - 1.) < 1e-9


def test_evidence():
    mcsat = MCSAT(kb_smokers, smokers, {2: True, 0: True}, rng=random.Random(5))
    mcsat.run(300)
    assert abs(mcsat.get_result(2) - 1.) < 1e-9
    assert abs(mcsat.get_result(0) - 1.) < 1e-9
    # Friends(Ann,Bob) ^ Smokes(Ann) => Smokes(Bob)
    assert abs(mcsat.get_result(1) - 1.) < 1e-9
    with pytest.raises(EvidenceError):
        MCSAT(kb_smokers, smokers, {5: True})


def test_unsatisfiable():
    kb_unsat = WeightedClausalKB([WeightedFormula(lit(A), hard=True),
                                  WeightedFormula(Implication([lit(A), lit(B)]), hard=True)])
    with pytest.raises(UnsatisfiableError):
        MCSAT(kb_unsat, variables, {1: False}).run(10)
    kb_contradiction = WeightedClausalKB([WeightedFormula(lit(A), hard=True),
                                          WeightedFormula(lit(A, True), hard=True)])
    with pytest.raises(UnsatisfiableError):
        MCSAT(kb_contradiction, variables).run(10)


def test_params():
    mcsat = MCSAT(kb, variables)
    assert mcsat.algorithm_name == 'MCSAT[SampleSAT]'
    mcsat.handle_params({'p': .8, 'infointerval': '10', 'verbose': 'false'})
    assert mcsat.sat.p == .8
    assert mcsat.infointerval == 10
    assert not mcsat.verbose
    mcsat.set_p(.3)
    assert mcsat.sat.p == .3
    with pytest.raises(ConfigurationError):
        MCSAT(kb, variables, infointerval=0)
    with pytest.raises(ConfigurationError):
        mcsat.handle_params({'infointerval': '0'})


def main():
    test_end_to_end()
    test_normalization_constant()
    test_hard_constraints_hold()
    test_determinism()
    test_soft_inclusion_frequency()
    test_callback_stops_chain()
    test_repeated_runs()
    test_evidence()
    test_unsatisfiable()
    test_params()


if __name__ == '__main__':
    main()
