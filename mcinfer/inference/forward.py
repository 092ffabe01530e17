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

from dnutils import logs, ProgressBar

from .distribution import WeightedSample
from .sampler import InferenceStrategy
from ..errors import SamplingError, ConfigurationError


logger = logs.getlogger(__name__)


class ForwardSampling(InferenceStrategy):
    """
    Forward (logic) sampling with rejection of worlds that contradict the evidence.
    """

    def _order(self, sampler):
        if not hasattr(sampler.network, 'topological_order'):
            raise ConfigurationError('%s requires a belief network.' % self.name)
        return [(node, sampler.node_index(node)) for node in sampler.network.topological_order()]


    def _sample_once(self, sampler, order):
        """
        Tries to sample a complete world once. Returns a pair (domain indices, weight)
        or None if the attempt failed.
        """
        domidx = [-1] * len(sampler.nodes)
        for node, idx in order:
            value = sampler.sample_forward(node, domidx)
            if value < 0:
                return None
            if sampler.evidence[idx] >= 0 and value != sampler.evidence[idx]:
                return None
            domidx[idx] = value
        return domidx, 1.


    def _sample(self, sampler, order, step):
        for trial in range(1, sampler.maxtrials + 1):
            result = self._sample_once(sampler, order)
            if result is not None:
                return WeightedSample(result[0], result[1], trial)
            logger.debug('step %d: trial %d failed' % (step, trial))
        if sampler.skipfailedsteps:
            logger.info('step %d: skipped after %d failed trials' % (step, sampler.maxtrials))
            sampler.report('step %d skipped after %d failed trials' % (step, sampler.maxtrials))
            return None
        raise SamplingError('Could not obtain a sample in step %d after %d trials.' % (step, sampler.maxtrials))


    def infer(self, sampler):
        order = self._order(sampler)
        if sampler.verbose:
            bar = ProgressBar(steps=sampler.numsamples, color='green')
        for step in range(1, sampler.numsamples + 1):
            if sampler.cancelled:
                logger.info('%s cancelled after %d steps' % (self.name, step - 1))
                break
            if step % sampler.infointerval == 0:
                logger.info('%s step %d' % (self.name, step))
            s = self._sample(sampler, order, step)
            if sampler.verbose:
                bar.inc()
                bar.label('%d / %d' % (step, sampler.numsamples))
            if s is None:
                continue
            if s.trials > 1:
                logger.debug('step %d: needed %d trials' % (step, s.trials))
            sampler.add_sample(s)
            if sampler.converged():
                break
        return sampler.dist


class LikelihoodWeighting(ForwardSampling):
    """
    Likelihood weighting: evidence nodes are clamped to their observed values and
    every sample is weighted by the probability of the evidence given its parents.
    """

    def _sample_once(self, sampler, order):
        domidx = [-1] * len(sampler.nodes)
        weight = 1.
        for node, idx in order:
            if sampler.evidence[idx] >= 0:
                domidx[idx] = sampler.evidence[idx]
                weight *= sampler.get_cpt_probability(node, domidx)
                if weight == 0:
                    return None
                continue
            value = sampler.sample_forward(node, domidx)
            if value < 0:
                return None
            domidx[idx] = value
        return domidx, weight
