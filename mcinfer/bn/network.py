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

import numpy
from dnutils import logs

from ..errors import NoSuchNodeError
from ..util import product


logger = logs.getlogger(__name__)


class BeliefNode(object):
    """
    A discrete random variable of a :class:`BeliefNetwork`.

    :param name:     the name of the node.
    :param domain:   the ordered sequence of values the node can take.
    """

    def __init__(self, name, domain):
        if not domain:
            raise ValueError('Domain of node %s must not be empty.' % name)
        self.name = name
        self.domain = tuple(domain)
        self.parents = []
        self.cpf = None


    def domain_index(self, value):
        try:
            return self.domain.index(value)
        except ValueError:
            strdom = list(map(str, self.domain))
            if str(value) in strdom:
                return strdom.index(str(value))
            raise ValueError('%s is not in the domain of %s: %s' % (value, self.name, self.domain))


    def __str__(self):
        return self.name


    def __repr__(self):
        return '<BeliefNode: %s>' % self.name


class CPF(object):
    """
    A conditional probability function stored as a flattened table.

    The domain product is ``[node] + parents``; an address is a list of
    domain indices, one per element of the domain product, and is mapped to a
    position in the flat table in row-major order, i.e. the node's own
    dimension has the largest stride.
    """

    def __init__(self, domainproduct, values=None):
        self.domainproduct = list(domainproduct)
        self.shape = tuple(len(n.domain) for n in self.domainproduct)
        self.strides = []
        stride = 1
        for size in reversed(self.shape):
            self.strides.insert(0, stride)
            stride *= size
        size = product(self.shape)
        if values is None:
            self.values = numpy.zeros(size)
        else:
            values = numpy.asarray(values, dtype=float)
            if values.size != size:
                raise ValueError('CPT of %s needs %d entries, got %d' % (self.domainproduct[0], size, values.size))
            if values.ndim > 1 and values.shape != self.shape:
                raise ValueError('CPT of %s must have shape %s, got %s' % (self.domainproduct[0], self.shape, values.shape))
            self.values = values.ravel().copy()


    def addr2realaddr(self, addr):
        realaddr = 0
        for i, a in enumerate(addr):
            if not 0 <= a < self.shape[i]:
                raise IndexError('Domain index %d of %s out of range' % (a, self.domainproduct[i]))
            realaddr += a * self.strides[i]
        return realaddr


    def get_double(self, addr):
        """
        Returns the table entry at the given address, which is either a list
        of domain indices or a position in the flat table.
        """
        if not isinstance(addr, (int, numpy.integer)):
            addr = self.addr2realaddr(addr)
        return float(self.values[addr])


    def set_double(self, addr, value):
        if not isinstance(addr, (int, numpy.integer)):
            addr = self.addr2realaddr(addr)
        self.values[addr] = value


    def __len__(self):
        return len(self.values)


class BeliefNetwork(object):
    """
    A Bayesian network over discrete nodes with tabular CPTs.
    """

    def __init__(self):
        self._nodes = []
        self._nodesbyname = {}


    def add_node(self, name, domain=(True, False)):
        if name in self._nodesbyname:
            raise ValueError('Duplicate node: %s' % name)
        node = BeliefNode(name, domain)
        self._nodes.append(node)
        self._nodesbyname[name] = node
        return node


    def set_cpt(self, node, parents, table):
        """
        Sets the conditional probability table of `node`.

        :param parents:   the parents of the node, in the order of the table's dimensions.
        :param table:     the table as an array of shape ``(|node|, |parent_1|, ...)``,
                          i.e. ``table[v][p_1]...[p_n] = P(node=v | parent_1=p_1, ...)``.
        """
        node = self.node(node)
        parents = [self.node(p) for p in parents]
        node.parents = parents
        node.cpf = CPF([node] + parents, table)


    @property
    def nodes(self):
        return tuple(self._nodes)


    def node(self, key):
        if isinstance(key, BeliefNode):
            if self._nodesbyname.get(key.name) is not key:
                raise NoSuchNodeError('Node %s does not belong to this network.' % key)
            return key
        try:
            if isinstance(key, str):
                return self._nodesbyname[key]
            return self._nodes[key]
        except (KeyError, IndexError):
            raise NoSuchNodeError('No such node: %s' % key)


    def __getitem__(self, key):
        return self.node(key)


    def __iter__(self):
        return iter(self._nodes)


    def __len__(self):
        return len(self._nodes)


    def children(self, node):
        node = self.node(node)
        return [n for n in self._nodes if node in n.parents]


    def topological_order(self):
        """
        Returns the nodes ordered such that every node comes after its parents.
        """
        indegree = {n.name: len(n.parents) for n in self._nodes}
        queue = [n for n in self._nodes if not n.parents]
        order = []
        while queue:
            node = queue.pop(0)
            order.append(node)
            for child in self.children(node):
                indegree[child.name] -= 1
                if indegree[child.name] == 0:
                    queue.append(child)
        if len(order) != len(self._nodes):
            raise ValueError('Belief network contains a cycle.')
        return order


    def check_cpts(self, tolerance=1e-6):
        """
        Returns the names of all nodes without a CPT or with a CPT column
        that does not sum to one.
        """
        invalid = []
        for node in self._nodes:
            if node.cpf is None:
                invalid.append(node.name)
                continue
            table = node.cpf.values.reshape(node.cpf.shape)
            sums = table.sum(axis=0)
            if numpy.any(numpy.abs(sums - 1.) > tolerance):
                logger.debug('CPT of %s does not sum to one: %s' % (node.name, sums))
                invalid.append(node.name)
        return invalid
