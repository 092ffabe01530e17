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

import copy
import math

import numpy
from dnutils import logs
from scipy.stats import norm

from ..params import ParameterHandler


logger = logs.getlogger(__name__)


class WeightedSample(object):
    """
    A sampled assignment of domain indices to all nodes, paired with a weight.

    :param nodedomainindices:   the domain index of every node.
    :param weight:              the importance weight of the sample.
    :param trials:              the number of attempts it took to obtain the sample.
    """

    def __init__(self, nodedomainindices, weight=1., trials=1):
        self.nodedomainindices = list(nodedomainindices)
        self.weight = weight
        self.trials = trials


    def __repr__(self):
        return '<WeightedSample: %s (weight=%f)>' % (self.nodedomainindices, self.weight)


class ConfidenceInterval(object):
    """
    Wilson score interval of a probability estimated from `n` samples.
    """

    def __init__(self, p, n, confidencelevel):
        self.p = p
        z = norm.ppf(1. - (1. - confidencelevel) / 2.)
        if n == 0:
            self.lowerend, self.upperend = 0., 1.
            return
        denom = 1. + z ** 2 / n
        center = (p + z ** 2 / (2. * n)) / denom
        halfwidth = z * math.sqrt(max(0., p * (1. - p)) / n + z ** 2 / (4. * n ** 2)) / denom
        self.lowerend = max(0., center - halfwidth)
        self.upperend = min(1., center + halfwidth)


    @property
    def size(self):
        return self.upperend - self.lowerend


    def __str__(self):
        return '[%f;%f]' % (self.lowerend, self.upperend)


class BasicSampledDistribution(object):
    """
    Abstract super class of distributions that are estimated from weighted samples.

    Keeps the normalization constant `Z` (the total weight of all samples) and
    the number of samples collected.

    :param confidencelevel:    if not `None`, the level of the confidence intervals
                               that can be computed for the estimates.
    """

    def __init__(self, confidencelevel=None):
        self.Z = 0.
        self.numsamples = 0
        self.confidencelevel = confidencelevel
        self.paramhandler = ParameterHandler(self)
        self.paramhandler.add('confidencelevel', 'set_confidence_level', float)


    def set_confidence_level(self, level):
        if level is not None and not 0. < level < 1.:
            raise ValueError('Confidence level must be in (0,1), got %s' % level)
        self.confidencelevel = level


    def uses_confidence_computation(self):
        return self.confidencelevel is not None


    def _scale(self, factor):
        raise NotImplementedError()


    def probability(self, varidx, domidx):
        """
        Returns the estimated probability that variable `varidx` takes the value with domain index `domidx`.
        """
        raise NotImplementedError()


    def normalize(self):
        """
        Divides all accumulated weights by `Z` and sets `Z` to 1.

        Normalizing an already normalized distribution does not change it.
        """
        if self.Z == 0:
            logger.warning('cannot normalize a distribution without samples')
            return
        self._scale(1. / self.Z)
        self.Z = 1.


    def confidence_interval(self, varidx, domidx):
        if not self.uses_confidence_computation():
            raise ValueError('No confidence level specified.')
        return ConfidenceInterval(self.probability(varidx, domidx), self.numsamples, self.confidencelevel)


    def _copy_values(self, other):
        raise NotImplementedError()


    def clone(self):
        """
        Returns a snapshot of this distribution that shares the variables
        but none of the accumulated values.
        """
        c = copy.copy(self)
        c.paramhandler = ParameterHandler(c)
        c.paramhandler.mappings = dict(self.paramhandler.mappings)
        self._copy_values(c)
        return c


class SampledDistribution(BasicSampledDistribution):
    """
    Distribution over the ground atoms of a set of :class:`WorldVariables`.

    For each atom, keeps the total weight of all samples in which the atom was true.
    """

    def __init__(self, variables, confidencelevel=None):
        BasicSampledDistribution.__init__(self, confidencelevel)
        self.variables = variables
        self.sums = numpy.zeros(len(variables))


    def add_sample(self, world, weight=1.):
        self.sums += weight * numpy.asarray(world.values, dtype=float)
        self.Z += weight
        self.numsamples += 1


    def _scale(self, factor):
        self.sums *= factor


    def _copy_values(self, other):
        other.sums = self.sums.copy()


    def get_result(self, atomidx):
        """
        Returns the accumulated value of the atom with the given index, which
        is its estimated marginal probability once the distribution is normalized.
        """
        return float(self.sums[atomidx])


    def probability(self, varidx, domidx):
        if self.Z == 0: return 0.
        p = self.sums[varidx] / self.Z
        return float(p if domidx else 1. - p)


    def results(self):
        return dict([(str(atom), self.probability(atom.idx, 1)) for atom in self.variables])


class NetworkDistribution(BasicSampledDistribution):
    """
    Distribution over the values of discrete nodes.

    For each node and domain index, keeps the total weight of all samples that
    assigned the value to the node.

    :param nodes:    the nodes, in index order; each node provides its `domain`.
    """

    def __init__(self, nodes, confidencelevel=None):
        BasicSampledDistribution.__init__(self, confidencelevel)
        self.nodes = list(nodes)
        self.values = [numpy.zeros(len(n.domain)) for n in self.nodes]


    def add_sample(self, sample):
        for i, domidx in enumerate(sample.nodedomainindices):
            self.values[i][domidx] += sample.weight
        self.Z += sample.weight
        self.numsamples += 1


    def _scale(self, factor):
        for v in self.values:
            v *= factor


    def _copy_values(self, other):
        other.values = [v.copy() for v in self.values]


    def get_result(self, nodeidx, domidx):
        return float(self.values[nodeidx][domidx])


    def probability(self, varidx, domidx):
        if self.Z == 0: return 0.
        return float(self.values[varidx][domidx] / self.Z)


    def distribution(self, nodeidx):
        """
        Returns the estimated distribution over the domain of the node as a list of probabilities.
        """
        return [self.probability(nodeidx, i) for i in range(len(self.values[nodeidx]))]


    def results(self):
        return dict([(str(n), self.distribution(i)) for i, n in enumerate(self.nodes)])
