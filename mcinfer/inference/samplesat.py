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

import itertools
import math
import random
from collections import defaultdict

from dnutils import logs, ifnone

from ..constants import DEFAULT_P, DEFAULT_MAXENUM, DEFAULT_MAXFLIPS
from ..errors import UnsatisfiableError
from ..params import ParameterHandler


logger = logs.getlogger(__name__)


class ConstraintSampler(object):
    """
    Interface of a solver that samples possible worlds satisfying a set of clauses.

    Implementations must draw the new state uniformly at random from all
    assignments that satisfy every clause passed to :meth:`reset` (and the
    evidence). MC-SAT is only correct under this condition.
    """

    def reset(self, constraints):
        """
        Replaces the active set of constraints.
        """
        raise NotImplementedError()


    def step(self):
        """
        Samples a new state that satisfies the active constraints and returns it.
        """
        raise NotImplementedError()


class SampleSAT(ConstraintSampler):
    """
    Sample-SAT algorithm.

    The constraints are split into connected components over the ground atoms
    they mention. Components with at most `maxenum` unobserved atoms are
    sampled exactly uniformly by enumerating their models; larger components
    are solved by a mix of WalkSAT moves (with probability `p`) and simulated
    annealing moves. Atoms that occur in no constraint are set uniformly at
    random, evidence atoms keep their values.

    :param state:       the :class:`mcinfer.logic.PossibleWorld` to work with;
                        it is updated in place by :meth:`step`.
    :param variables:   the :class:`mcinfer.logic.WorldVariables` of the state.
    :param evidence:    a dict mapping atom indices to fixed truth values.
    :param rng:         the random number generator.
    """

    def __init__(self, state, variables, evidence=None, rng=None, **params):
        self.state = state
        self.variables = variables
        self.evidence = dict(ifnone(evidence, {}))
        self.rng = ifnone(rng, random.Random())
        self._params = dict(params)
        self.components = []
        self.paramhandler = ParameterHandler(self)
        self.paramhandler.add('p', 'set_p', float)
        self.paramhandler.add('maxenum', 'set_max_enum', int)
        self.paramhandler.add('maxflips', 'set_max_flips', int)
        self.paramhandler.add('temperature', 'set_temperature', float)
        for atomidx, truth in self.evidence.items():
            self.state[atomidx] = truth


    @property
    def p(self):
        return self._params.get('p', DEFAULT_P)


    @property
    def maxenum(self):
        return self._params.get('maxenum', DEFAULT_MAXENUM)


    @property
    def maxflips(self):
        return self._params.get('maxflips', DEFAULT_MAXFLIPS)


    @property
    def temperature(self):
        return self._params.get('temperature', .5)


    @property
    def algorithm_name(self):
        return self.__class__.__name__


    def set_p(self, p):
        if not 0. <= p <= 1.:
            raise ValueError('p must be a probability, got %s' % p)
        self._params['p'] = p


    def set_max_enum(self, maxenum):
        self._params['maxenum'] = maxenum


    def set_max_flips(self, maxflips):
        self._params['maxflips'] = maxflips


    def set_temperature(self, temperature):
        if temperature <= 0:
            raise ValueError('temperature must be positive, got %s' % temperature)
        self._params['temperature'] = temperature


    def reset(self, constraints):
        """
        Sets the clauses to be satisfied by the next sampled state.

        :param constraints:    an iterable of :class:`mcinfer.logic.WeightedClause`.
        :raises UnsatisfiableError:  if a clause is falsified by the evidence.
        """
        clauses = []
        for c in constraints:
            lits = []
            satisfied = False
            for atomidx, truth in c.signed():
                if atomidx in self.evidence:
                    if self.evidence[atomidx] == truth:
                        satisfied = True
                        break
                    continue
                lits.append((atomidx, truth))
            if satisfied: continue
            if not lits:
                raise UnsatisfiableError('Constraint %s is violated by the evidence.' % c)
            clauses.append(lits)
        self.components = self._components(clauses)
        logger.debug('SampleSAT: %d clauses in %d components' % (len(clauses), len(self.components)))


    def _components(self, clauses):
        # union-find over the atoms of the clauses
        parent = {}
        def find(a):
            while parent[a] != a:
                parent[a] = parent[parent[a]]
                a = parent[a]
            return a
        for lits in clauses:
            for atomidx, _ in lits:
                parent.setdefault(atomidx, atomidx)
            root = find(lits[0][0])
            for atomidx, _ in lits[1:]:
                r = find(atomidx)
                if r != root: parent[r] = root
        atoms = defaultdict(list)
        for a in sorted(parent):
            atoms[find(a)].append(a)
        cclauses = defaultdict(list)
        for lits in clauses:
            cclauses[find(lits[0][0])].append(lits)
        return [(atoms[r], cclauses[r]) for r in sorted(atoms)]


    def step(self):
        constrained = set()
        for atoms, clauses in self.components:
            if len(atoms) <= self.maxenum:
                values = self._enumerate(atoms, clauses)
            else:
                values = self._walksat(atoms, clauses)
            for atomidx, truth in values.items():
                self.state[atomidx] = truth
            constrained.update(atoms)
        for atom in self.variables:
            if atom.idx in self.evidence:
                self.state[atom.idx] = self.evidence[atom.idx]
            elif atom.idx not in constrained:
                self.state[atom.idx] = self.rng.random() < .5
        return self.state


    def _enumerate(self, atoms, clauses):
        """
        Samples uniformly from all models of the clauses by enumeration.
        """
        pos = dict([(a, i) for i, a in enumerate(atoms)])
        lclauses = [[(pos[a], t) for a, t in lits] for lits in clauses]
        models = []
        for values in itertools.product((False, True), repeat=len(atoms)):
            if all(any(values[i] == t for i, t in c) for c in lclauses):
                models.append(values)
        if not models:
            raise UnsatisfiableError('Constraints over %s are unsatisfiable.' % ', '.join(str(self.variables[a]) for a in atoms))
        return dict(zip(atoms, models[self.rng.randrange(len(models))]))


    def _walksat(self, atoms, clauses):
        """
        Searches a model of the clauses by a mix of WalkSAT and simulated annealing moves,
        starting from a random assignment.
        """
        rng = self.rng
        values = dict([(a, rng.random() < .5) for a in atoms])
        occurrences = defaultdict(list)
        for ci, lits in enumerate(clauses):
            for a, _ in lits:
                occurrences[a].append(ci)
        def numtrue(ci):
            return sum(1 for a, t in clauses[ci] if values[a] == t)
        def breakcount(a):
            # clauses in which the literal of `a` is the only true one
            return sum(1 for ci in occurrences[a] if (a, values[a]) in clauses[ci] and numtrue(ci) == 1)
        unsat = set([ci for ci in range(len(clauses)) if numtrue(ci) == 0])
        flips = 0
        while unsat:
            if flips >= self.maxflips:
                raise UnsatisfiableError('SampleSAT could not satisfy %d of %d constraints within %d flips.' % (len(unsat), len(clauses), self.maxflips))
            flips += 1
            if rng.random() < self.p:
                # WalkSAT move: satisfy a random unsatisfied clause breaking as few others as possible
                ci = rng.choice(sorted(unsat))
                candidates = []
                best = None
                for a, _ in clauses[ci]:
                    b = breakcount(a)
                    if best is None or b < best:
                        best, candidates = b, [a]
                    elif b == best:
                        candidates.append(a)
                atom = rng.choice(candidates)
            else:
                # simulated annealing move
                atom = rng.choice(atoms)
                make = sum(1 for ci in occurrences[atom] if ci in unsat)
                delta = breakcount(atom) - make
                if delta > 0 and rng.random() >= math.exp(-delta / self.temperature):
                    continue
            values[atom] = not values[atom]
            for ci in occurrences[atom]:
                if numtrue(ci) == 0:
                    unsat.add(ci)
                else:
                    unsat.discard(ci)
        logger.debug('SampleSAT: solved component of %d atoms after %d flips' % (len(atoms), flips))
        return values
