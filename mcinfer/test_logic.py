import itertools
import math

import pytest

from mcinfer.errors import ConfigurationError, NoSuchNodeError
from mcinfer.logic import WorldVariables, PossibleWorld, Conjunction, Disjunction, \
    Negation, Implication, Biimplication, TrueFalse, WeightedFormula, WeightedClausalKB, \
    DPLL, satisfiable, lit
from mcinfer.logic.common import clauses


variables = WorldVariables(['a', 'b', 'c'])
a, b, c = variables


def worlds():
    for values in itertools.product((0, 1), repeat=len(variables)):
        yield PossibleWorld(variables, values)


def equivalent(f, g):
    return all(f.truth(w) == g.truth(w) for w in worlds())


def test_variables():
    assert len(variables) == 3
    assert variables['b'] is b
    assert variables[2] is c
    assert b in variables
    with pytest.raises(NoSuchNodeError):
        variables['d']
    with pytest.raises(NoSuchNodeError):
        variables[3]
    with pytest.raises(ValueError):
        WorldVariables(['x', 'x'])


def test_possible_world():
    w = PossibleWorld(variables)
    assert str(w) == '000'
    w[b] = True
    w.set(2, 1)
    assert w.is_true(b) and w[2]
    assert str(w) == '011'
    w2 = w.copy()
    w2[0] = True
    assert str(w) == '011'
    assert str(w2) == '111'
    with pytest.raises(ValueError):
        PossibleWorld(variables, [0, 1])


def test_truth():
    w = PossibleWorld(variables, [1, 0, 1])
    assert lit(a)(w) == 1
    assert lit(b, True)(w) == 1
    assert Conjunction([lit(a), lit(b)]).truth(w) == 0
    assert Disjunction([lit(a), lit(b)]).truth(w) == 1
    assert Implication([lit(b), lit(a)]).truth(w) == 1
    assert Implication([lit(a), lit(b)]).truth(w) == 0
    assert Biimplication([lit(a), lit(c)]).truth(w) == 1
    assert Negation(lit(a)).truth(w) == 0


def test_cnf_equivalence():
    formulas = [Implication([lit(a), lit(b)]),
                Biimplication([lit(a), Conjunction([lit(b), lit(c)])]),
                Negation(Biimplication([lit(a), lit(b)])),
                Disjunction([Conjunction([lit(a), lit(b)]), Conjunction([lit(b, True), lit(c)])]),
                Negation(Conjunction([lit(a), Disjunction([lit(b), Negation(lit(c))])]))]
    for f in formulas:
        cnf = f.cnf()
        assert equivalent(f, cnf)
        for clause in clauses(cnf):
            assert clause
            for l in clause:
                assert l.gndatom in variables


def test_cnf_implication():
    cs = clauses(Implication([lit(a), lit(b)]).cnf())
    assert len(cs) == 1
    assert set(cs[0]) == {lit(a, True), lit(b)}


def test_cnf_constants():
    assert clauses(Disjunction([lit(a), lit(a, True)]).cnf()) == []
    assert clauses(TrueFalse(0)) == [[]]
    assert clauses(Conjunction([lit(a), TrueFalse(0)]).cnf()) == [[]]
    assert clauses(Conjunction([lit(a), TrueFalse(1)]).cnf()) == [[lit(a)]]


def test_weighted_kb():
    kb = WeightedClausalKB([WeightedFormula(Implication([lit(a), lit(b)]), hard=True),
                            WeightedFormula(Conjunction([lit(b), lit(c)]), 1.2)])
    assert len(kb.formulas) == 2
    assert len(kb) == 3
    assert len(kb.hard_clauses()) == 1
    assert kb.formulas[0].weight == float('inf')
    assert set(kb.gndatoms()) == {a, b, c}
    for wf, cs in kb.formulas_and_clauses():
        for w in worlds():
            assert wf(w) == all(cl(w) for cl in cs)


def test_negative_weight():
    kb = WeightedClausalKB()
    wf = kb.add(WeightedFormula(lit(a), -1.5))
    assert wf.weight == 1.5
    assert kb.formulas[0] is wf
    assert wf.truth(PossibleWorld(variables, [1, 0, 0])) == 0
    assert wf.truth(PossibleWorld(variables, [0, 0, 0])) == 1
    assert [cl.signed() for cl in kb] == [[(0, False)]]


def test_illegal_weights():
    kb = WeightedClausalKB()
    with pytest.raises(ConfigurationError):
        kb.add(WeightedFormula(lit(a), float('nan')))
    with pytest.raises(ConfigurationError):
        kb.add(WeightedFormula(lit(a), float('inf')))
    assert len(kb) == 0
    kb.add(WeightedFormula(lit(a), math.inf, hard=True))
    assert len(kb) == 1


def test_dpll():
    M, U, S, H, G = range(5)
    cnf = [[(M, False), (U, True)],
           [(M, True), (U, False)],
           [(M, True), (S, True)],
           [(U, False), (H, True)],
           [(S, False), (H, True)],
           [(H, False), (G, True)],
           [(M, False)]]
    assert DPLL(cnf)
    assert not DPLL(cnf + [[(G, False)]])
    assert not DPLL([[(0, True)], [(0, False)]])
    assert not DPLL([[]])
    assert DPLL([])


def test_satisfiable():
    kb = WeightedClausalKB([WeightedFormula(Disjunction([lit(a), lit(b)]), hard=True)])
    assert satisfiable(kb.hard_clauses())
    assert satisfiable(kb.hard_clauses(), {0: False})
    assert not satisfiable(kb.hard_clauses(), {0: False, 1: False})


def main():
    test_variables()
    test_possible_world()
    test_truth()
    test_cnf_equivalence()
    test_cnf_implication()
    test_cnf_constants()
    test_weighted_kb()
    test_negative_weight()
    test_illegal_weights()
    test_dpll()
    test_satisfiable()


if __name__ == '__main__':
    main()
