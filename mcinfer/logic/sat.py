# 
# First-Order Logic -- Satisfiability Reasoning
#
# (C) 2013 by Daniel Nyga (nyga@cs.tum.edu)
# 
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the
# "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
# CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
# TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
# SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

from ..util import item


def DPLL(clauses):
    """
    Implementation of the Davis-Putnam-Logemann-Loveland (DPLL) algorithm for 
    proving satisfiability of a sentence in CNF in propositional logic.
    Returns True iff clauses is satisfiable, or False otherwise.
    - clauses:     A collection of clauses, i.e. a list of collections of literals.
                   A literal is a pair (atom, truth), which is considered
                   true if the atom has the given truth value.
    """
    return _dpll([set(c) for c in clauses])


def _assign(clauses, lit):
    """
    Simplifies the clauses under the assumption that `lit` is true.
    """
    atom, truth = lit
    complement = (atom, not truth)
    newclauses = []
    for clause in clauses:
        if lit in clause: continue
        if complement in clause:
            clause = clause - {complement}
        newclauses.append(clause)
    return newclauses


def _dpll(clauses):
    # unit propagation
    while True:
        unit = None
        for clause in clauses:
            if not clause:
                return False
            if len(clause) == 1 and unit is None:
                unit = item(clause)
        if unit is None: break
        clauses = _assign(clauses, unit)
    if not clauses: return True
    # pure literal elimination
    polarities = {}
    for clause in clauses:
        for atom, truth in clause:
            polarities.setdefault(atom, set()).add(truth)
    pure = [(atom, item(pols)) for atom, pols in polarities.items() if len(pols) == 1]
    for lit in pure:
        clauses = _assign(clauses, lit)
    if not clauses: return True
    # split on the first atom of the shortest clause
    atom, _ = item(min(clauses, key=len))
    return _dpll(_assign(clauses, (atom, True))) or _dpll(_assign(clauses, (atom, False)))


def satisfiable(clauses, evidence=None):
    """
    Checks if the given weighted clauses are jointly satisfiable given the evidence.

    :param clauses:     an iterable of :class:`mcinfer.logic.kb.WeightedClause`.
    :param evidence:    a dict mapping atom indices to fixed truth values.
    """
    cnf = [c.signed() for c in clauses]
    if evidence:
        cnf.extend([[(atomidx, truth)] for atomidx, truth in evidence.items()])
    return DPLL(cnf)


if __name__ == '__main__':

    # this is the unicorn example from the AI class
    M, U, S, H, G = range(5)
    cnf = [[(M, False), (U, True)],
           [(M, True), (U, False)],
           [(M, True), (S, True)],
           [(U, False), (H, True)],
           [(S, False), (H, True)],
           [(H, False), (G, True)],
           [(M, False)]]
    print(DPLL(cnf))
