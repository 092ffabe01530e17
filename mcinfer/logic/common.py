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

import sys

from dnutils import logs, ifnone

from ..constants import atom_color
from ..errors import NoSuchNodeError
from ..util import colorize


logger = logs.getlogger(__name__)


class GroundAtom(object):
    """
    Represents a ground atom, i.e. a boolean propositional variable.

    The index of a ground atom is assigned once by the :class:`WorldVariables`
    registry it belongs to and is stable for its lifetime. The domain of a
    ground atom is ``(False, True)``, so the domain index of a value equals its
    truth value.
    """

    domain = (False, True)

    def __init__(self, name, idx):
        self._name = name
        self._idx = idx


    @property
    def name(self):
        return self._name


    @property
    def idx(self):
        return self._idx


    def truth(self, world):
        return 1 if world[self.idx] else 0


    def domain_index(self, value):
        if isinstance(value, str):
            value = value.strip().lower() in ('1', 'true', 'yes')
        return 1 if value else 0


    def cstr(self, color=False):
        return colorize(self.name, atom_color, color)


    def __repr__(self):
        return '<GroundAtom: %s>' % str(self)


    def __str__(self):
        return self.name


    def __eq__(self, other):
        return isinstance(other, GroundAtom) and self.idx == other.idx and self.name == other.name


    def __ne__(self, other):
        return not self == other


    def __hash__(self):
        return hash((self.idx, self.name))


class WorldVariables(object):
    """
    The ordered, immutable registry of all ground atoms of a model.

    Defines the index space ``[0, n)`` every possible world is defined over.

    :param names:    the names of the ground atoms, in index order.
    """

    def __init__(self, names):
        atoms = []
        self._atomsbyname = {}
        for idx, name in enumerate(names):
            if name in self._atomsbyname:
                raise ValueError('Duplicate ground atom: %s' % name)
            atom = GroundAtom(name, idx)
            atoms.append(atom)
            self._atomsbyname[name] = atom
        self._atoms = tuple(atoms)


    @property
    def nodes(self):
        return self._atoms


    def atom(self, key):
        """
        Returns the ground atom with the given index or name.
        """
        try:
            if isinstance(key, str):
                return self._atomsbyname[key]
            return self._atoms[key]
        except (KeyError, IndexError):
            raise NoSuchNodeError('No such ground atom: %s' % key)


    def __getitem__(self, key):
        return self.atom(key)


    def __iter__(self):
        return iter(self._atoms)


    def __len__(self):
        return len(self._atoms)


    def __contains__(self, atom):
        return isinstance(atom, GroundAtom) and atom.idx < len(self) and self._atoms[atom.idx] == atom


    def __str__(self):
        return '<WorldVariables: %d atoms>' % len(self)


class PossibleWorld(object):
    """
    A complete truth assignment over a set of :class:`WorldVariables`.
    """

    def __init__(self, variables, values=None):
        self.variables = variables
        if values is None:
            self.values = [False] * len(variables)
        else:
            if len(values) != len(variables):
                raise ValueError('World of size %d does not match %d variables.' % (len(values), len(variables)))
            self.values = [bool(v) for v in values]


    def _index(self, key):
        return key.idx if isinstance(key, GroundAtom) else key


    def is_true(self, atom):
        return self.values[self._index(atom)]


    def set(self, atom, value):
        self.values[self._index(atom)] = bool(value)


    def copy(self):
        return PossibleWorld(self.variables, self.values)


    def print(self, stream=sys.stdout, color=False):
        for atom in self.variables:
            stream.write('%s %s\n' % ('x' if self.values[atom.idx] else ' ', atom.cstr(color)))


    def __getitem__(self, key):
        return self.values[self._index(key)]


    def __setitem__(self, key, value):
        self.set(key, value)


    def __iter__(self):
        return iter(self.values)


    def __len__(self):
        return len(self.values)


    def __eq__(self, other):
        return isinstance(other, PossibleWorld) and self.values == other.values


    def __ne__(self, other):
        return not self == other


    def __str__(self):
        return ''.join(['1' if v else '0' for v in self.values])


    def __repr__(self):
        return '<PossibleWorld: %s>' % str(self)


#  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #  #


class Formula(object):
    """
    Abstract super class of all propositional formulas.
    """

    def truth(self, world):
        """
        Evaluates the formula for its truth wrt. the truth values
        of ground atoms in the possible world `world`.

        :param world:     a possible world or a vector of truth values.
        :returns:         the truth of the formula in `world`, 1 or 0.
        """
        raise NotImplementedError('%s does not implement truth()' % str(type(self)))


    def cnf(self):
        """
        Convert to conjunctive normal form.
        """
        return self.nnf().cnf()


    def nnf(self):
        """
        Convert to negation normal form.
        """
        return self.copy()


    def negate(self):
        """
        Returns the negation of this formula in negation normal form.
        """
        return Negation(self).nnf()


    def copy(self):
        raise NotImplementedError('%s does not implement copy()' % str(type(self)))


    def literals(self):
        """
        Traverses the formula and returns a generator for the literals it contains.
        """
        if not hasattr(self, 'children'):
            yield self
            return
        for child in self.children:
            for lit in child.literals():
                yield lit


    def gndatoms(self, l=None):
        if l is None: l = []
        for lit in self.literals():
            if isinstance(lit, GroundLit) and lit.gndatom not in l:
                l.append(lit.gndatom)
        return l


    def print_structure(self, world=None, level=0, stream=sys.stdout):
        """
        Prints the structure of the formula to the given `stream`.
        """
        stream.write(''.rjust(level * 4, ' '))
        stream.write('%s: %s = %s\n' % (repr(self), str(self), ifnone(world, '?', self.truth)))
        if hasattr(self, 'children'):
            for child in self.children:
                child.print_structure(world, level + 1, stream)


    def __call__(self, world):
        return self.truth(world)


    def __repr__(self):
        return '<%s: %s>' % (self.__class__.__name__, str(self))


class ComplexFormula(Formula):
    """
    A formula that has other formulas as subelements (children)
    """

    def _childstr(self, c):
        return ('(%s)' % str(c)) if isinstance(c, ComplexFormula) else str(c)


    def copy(self):
        return type(self)([c.copy() for c in self.children])


class GroundLit(Formula):
    """
    Represents a ground literal.
    """

    def __init__(self, gndatom, negated=False):
        self.gndatom = gndatom
        self.negated = negated


    def truth(self, world):
        tv = self.gndatom.truth(world)
        return 1 - tv if self.negated else tv


    def cnf(self):
        return self.copy()


    def copy(self):
        return GroundLit(self.gndatom, self.negated)


    def negate(self):
        return GroundLit(self.gndatom, not self.negated)


    def __str__(self):
        return {True: '!', False: ''}[self.negated] + str(self.gndatom)


    def __eq__(self, other):
        return isinstance(other, GroundLit) and self.negated == other.negated and self.gndatom == other.gndatom


    def __ne__(self, other):
        return not self == other


    def __hash__(self):
        return hash((self.gndatom, self.negated))


class TrueFalse(Formula):
    """
    Represents a constant truth value.
    """

    def __init__(self, truth):
        self.value = 1 if truth else 0


    def truth(self, world=None):
        return self.value


    def cnf(self):
        return self.copy()


    def copy(self):
        return TrueFalse(self.value)


    def negate(self):
        return TrueFalse(1 - self.value)


    def __str__(self):
        return 'True' if self.value else 'False'


    def __eq__(self, other):
        return isinstance(other, TrueFalse) and self.value == other.value


    def __hash__(self):
        return hash(self.value)


def conjunction(children):
    if not children: return TrueFalse(1)
    if len(children) == 1: return children[0]
    return Conjunction(children)


def disjunction(children):
    if not children: return TrueFalse(0)
    if len(children) == 1: return children[0]
    return Disjunction(children)


class Conjunction(ComplexFormula):
    """
    Represents a logical conjunction.
    """

    def __init__(self, children):
        self.children = children


    @property
    def children(self):
        return self._children


    @children.setter
    def children(self, children):
        if len(children) < 2:
            raise ValueError('Conjunction needs at least 2 children.')
        self._children = list(children)


    def truth(self, world):
        for c in self.children:
            if not c.truth(world): return 0
        return 1


    def __str__(self):
        return ' ^ '.join([self._childstr(c) for c in self.children])


    def cnf(self):
        clauses = []
        litsets = []
        for child in self.children:
            c = child.cnf()
            if isinstance(c, Conjunction): # flatten nested conjunction
                l = c.children
            else:
                l = [c]
            for clause in l: # (clause is either a disjunction, a literal or a constant)
                # if the clause is always true, it can be ignored; if it's always false, then so is the conjunction
                if isinstance(clause, TrueFalse):
                    if clause.truth(): continue
                    return TrueFalse(0)
                if isinstance(clause, Disjunction):
                    litset = set(clause.children)
                else: # unit clause
                    litset = {clause}
                # check if the clause is equivalent to another (subset/superset of the set of literals) -> always keep the smaller one
                add = True
                i = 0
                while i < len(litsets):
                    s = litsets[i]
                    if len(litset) < len(s):
                        if litset.issubset(s):
                            del litsets[i]
                            del clauses[i]
                            continue
                    elif litset.issuperset(s):
                        add = False
                        break
                    i += 1
                if add:
                    clauses.append(clause)
                    litsets.append(litset)
        return conjunction(clauses)


    def nnf(self):
        conjuncts = []
        for child in self.children:
            c = child.nnf()
            if isinstance(c, Conjunction): # flatten nested conjunction
                conjuncts.extend(c.children)
            else:
                conjuncts.append(c)
        return conjunction(conjuncts)


class Disjunction(ComplexFormula):
    """
    Represents a disjunction of formulas.
    """

    def __init__(self, children):
        self.children = children


    @property
    def children(self):
        """
        A list of disjuncts.
        """
        return self._children


    @children.setter
    def children(self, children):
        if len(children) < 2:
            raise ValueError('Disjunction needs at least 2 children.')
        self._children = list(children)


    def truth(self, world):
        for c in self.children:
            if c.truth(world): return 1
        return 0


    def __str__(self):
        return ' v '.join([self._childstr(c) for c in self.children])


    def cnf(self):
        disj = []
        conj = []
        # convert children to CNF and group by disjunction/conjunction; flatten nested disjunction, remove duplicates, check for tautology
        for child in self.children:
            c = child.cnf()
            if isinstance(c, Conjunction):
                conj.append(c)
                continue
            lits = c.children if isinstance(c, Disjunction) else [c]
            for l in lits:
                # if the literal is always true, the disjunction is always true; if it's always false, it can be ignored
                if isinstance(l, TrueFalse):
                    if l.truth(): return TrueFalse(1)
                    continue
                # complementary literals make the clause a tautology
                if l.negate() in disj:
                    return TrueFalse(1)
                if l not in disj: disj.append(l)
        # if there are no conjunctions, this is a flat disjunction or unit clause
        if not conj:
            return disjunction(disj)
        # if there is only one conjunction and no additional disjuncts, we are done
        if len(conj) == 1 and not disj: return conj[0]
        # otherwise apply distributivity
        # (C_1 ^ ... ^ C_n) v RD = (C_1 v RD) ^ ... ^  (C_n v RD)
        remaining = disj + conj[1:]
        return Conjunction([Disjunction([c] + remaining) for c in conj[0].children]).cnf()


    def nnf(self):
        disjuncts = []
        for child in self.children:
            c = child.nnf()
            if isinstance(c, Disjunction): # flatten nested disjunction
                disjuncts.extend(c.children)
            else:
                disjuncts.append(c)
        return disjunction(disjuncts)


class Negation(ComplexFormula):
    """
    Represents a negation of a formula.
    """

    def __init__(self, child):
        self.children = [child]


    @property
    def child(self):
        return self.children[0]


    def truth(self, world):
        return 1 - self.child.truth(world)


    def copy(self):
        return Negation(self.child.copy())


    def __str__(self):
        return '!(%s)' % str(self.child)


    def nnf(self):
        c = self.child
        if isinstance(c, (GroundLit, TrueFalse)):
            return c.negate()
        if isinstance(c, Negation):
            return c.child.nnf()
        if isinstance(c, Conjunction):
            return disjunction([Negation(d).nnf() for d in c.children])
        if isinstance(c, Disjunction):
            return conjunction([Negation(d).nnf() for d in c.children])
        # implications and biimplications
        return Negation(c.nnf()).nnf()


class Implication(ComplexFormula):
    """
    Represents the implication ``children[0] => children[1]``.
    """

    def __init__(self, children):
        if len(children) != 2:
            raise ValueError('Implication needs exactly 2 children.')
        self.children = list(children)


    def truth(self, world):
        return 1 if (not self.children[0].truth(world)) or self.children[1].truth(world) else 0


    def __str__(self):
        return '%s => %s' % tuple(self._childstr(c) for c in self.children)


    def nnf(self):
        return Disjunction([Negation(self.children[0]), self.children[1]]).nnf()


class Biimplication(ComplexFormula):
    """
    Represents the equivalence ``children[0] <=> children[1]``.
    """

    def __init__(self, children):
        if len(children) != 2:
            raise ValueError('Biimplication needs exactly 2 children.')
        self.children = list(children)


    def truth(self, world):
        return 1 if self.children[0].truth(world) == self.children[1].truth(world) else 0


    def __str__(self):
        return '%s <=> %s' % tuple(self._childstr(c) for c in self.children)


    def nnf(self):
        a, b = self.children
        return Conjunction([Implication([a, b]), Implication([b, a])]).nnf()


def lit(gndatom, negated=False):
    return GroundLit(gndatom, negated)


def clauses(formula):
    """
    Returns the clauses of a formula in CNF as lists of literals.

    A formula that is always true has no clauses, a formula that is always
    false consists of the empty clause.
    """
    if isinstance(formula, TrueFalse):
        return [] if formula.truth() else [[]]
    if isinstance(formula, Conjunction):
        lc = formula.children
    else:
        lc = [formula]
    result = []
    for c in lc:
        if isinstance(c, Disjunction):
            result.append(list(c.children))
        else: # unit clause
            result.append([c])
    return result
