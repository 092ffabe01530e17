# -*- coding: utf-8 -*-
#
# Markov Logic Networks
#
# (C) 2012-2015 by Daniel Nyga
#     2006-2011 by Dominik Jain
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

import math

from dnutils import logs

from .common import Negation, clauses as cnfclauses, GroundLit
from ..errors import ConfigurationError


logger = logs.getlogger(__name__)


class WeightedFormula(object):
    """
    A propositional formula with a real-valued weight.

    Hard formulas (``hard=True``) have infinite weight and must hold in every
    possible world; their `weight` is ignored.
    """

    def __init__(self, formula, weight=0., hard=False):
        self.formula = formula
        self.hard = hard
        self.weight = float('inf') if hard else float(weight)


    @property
    def ishard(self):
        return self.hard


    def truth(self, world):
        return self.formula.truth(world)


    def __call__(self, world):
        return self.truth(world)


    def __str__(self):
        if self.hard:
            return '%s.' % str(self.formula)
        return '%f  %s' % (self.weight, str(self.formula))


    def __repr__(self):
        return '<WeightedFormula: %s>' % str(self)


class WeightedClause(object):
    """
    A clause of the CNF of a :class:`WeightedFormula`, sharing its weight and hardness.
    """

    def __init__(self, lits, weight, hard=False):
        self.lits = tuple(lits)
        self.weight = weight
        self.hard = hard


    def truth(self, world):
        for l in self.lits:
            if l.truth(world): return 1
        return 0


    def __call__(self, world):
        return self.truth(world)


    def signed(self):
        """
        Returns the literals of this clause as pairs ``(atomidx, truth)`` of an atom index
        and the truth value that renders the literal true.
        """
        return [(l.gndatom.idx, not l.negated) for l in self.lits]


    def __str__(self):
        if not self.lits: return 'False'
        return ' v '.join(map(str, self.lits))


    def __repr__(self):
        return '<WeightedClause: %s>' % str(self)


class WeightedClausalKB(object):
    """
    A weighted knowledge base in clausal form.

    Maps every :class:`WeightedFormula` to the set of :class:`WeightedClause`
    instances of its CNF. Soft formulas with negative weight are replaced by their
    negation with the absolute weight, which defines the same distribution over
    possible worlds.

    :param formulas:    an iterable of :class:`WeightedFormula` instances.
    """

    def __init__(self, formulas=()):
        self._formulas = []
        self._clauses = []
        for wf in formulas:
            self.add(wf)


    def add(self, wf):
        if not wf.hard:
            if math.isnan(wf.weight) or math.isinf(wf.weight):
                raise ConfigurationError('Illegal weight of soft formula %s: %s' % (wf.formula, wf.weight))
            if wf.weight < 0:
                logger.debug('negating formula %s with negative weight %f' % (wf.formula, wf.weight))
                wf = WeightedFormula(Negation(wf.formula), -wf.weight)
        cnf = wf.formula.cnf()
        clauses = [WeightedClause(lits, wf.weight, wf.hard) for lits in cnfclauses(cnf)]
        for c in clauses:
            for l in c.lits:
                if not isinstance(l, GroundLit):
                    raise ConfigurationError('Clause %s contains non-literal %s' % (c, l))
        self._formulas.append(wf)
        self._clauses.append(clauses)
        return wf


    @property
    def formulas(self):
        return list(self._formulas)


    def formulas_and_clauses(self):
        """
        Iterates over pairs ``(formula, clauses)``.
        """
        return zip(self._formulas, self._clauses)


    def hard_clauses(self):
        return [c for wf, cs in self.formulas_and_clauses() if wf.hard for c in cs]


    def gndatoms(self):
        atoms = []
        for wf in self._formulas:
            wf.formula.gndatoms(atoms)
        return atoms


    def __iter__(self):
        for cs in self._clauses:
            for c in cs:
                yield c


    def __len__(self):
        return sum(map(len, self._clauses))


    def __str__(self):
        return '<WeightedClausalKB: %d formulas, %d clauses>' % (len(self._formulas), len(self))
