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

import random
import threading

from dnutils import logs, ifnone

from .distribution import NetworkDistribution
from .sampling import sample
from ..constants import DEFAULT_NUMSAMPLES, DEFAULT_MAXTRIALS, DEFAULT_INFOINTERVAL, \
    DEFAULT_CONVERGENCE_CHECK_INTERVAL
from ..errors import EvidenceError, EvidenceConsistencyError, ConfigurationError, NoSuchNodeError
from ..params import ParameterHandler
from ..util import StopWatch, elapsed_time_str


logger = logs.getlogger(__name__)


class InferenceStrategy(object):
    """
    Abstract super class of sampling algorithms that can be run by a :class:`Sampler`.

    A strategy draws samples using the state the sampler provides (nodes,
    evidence, random number generator, sampling primitives and settings),
    folds them into the sampler's distribution via :meth:`Sampler.add_sample`
    and returns the distribution.
    """

    def __init__(self, **params):
        self._params = params
        self.paramhandler = ParameterHandler(self)


    @property
    def name(self):
        return self.__class__.__name__


    def infer(self, sampler):
        raise NotImplementedError('%s does not implement infer()' % self.name)


class Sampler(object):
    """
    Generic driver for sampling-based inference.

    Owns the node index registry, the evidence, the convergence policy and
    the distribution the samples are accumulated in. The actual sampling
    algorithm is an :class:`InferenceStrategy`.

    Sampling runs on a single thread. :meth:`poll_results` may be called from
    another thread while :meth:`infer` is running.

    :param network:     the model providing the `nodes` to be sampled, e.g. a
                        :class:`mcinfer.bn.BeliefNetwork` or a
                        :class:`mcinfer.logic.WorldVariables` registry.
    :param strategy:    the :class:`InferenceStrategy` to be run.
    :param rng:         the random number generator; if `None`, a new one is
                        created and seeded with the `rndseed` parameter.
    """

    def __init__(self, network, strategy, rng=None, **params):
        self.network = network
        self.strategy = strategy
        self.nodes = list(network.nodes)
        self.nodeindices = dict([(n, i) for i, n in enumerate(self.nodes)])
        self._params = dict(params)
        if params.get('infointerval') is not None:
            self.set_info_interval(params['infointerval'])
        if params.get('convergencecheckinterval') is not None:
            self.set_convergence_check_interval(params['convergencecheckinterval'])
        self.rng = ifnone(rng, random.Random(self.rndseed))
        self.evidence = [-1] * len(self.nodes)
        self.queryvars = None
        self.dist = None
        self.samplingtime = None
        self._report = []
        self._lock = threading.RLock()
        self._cancelled = threading.Event()
        self.paramhandler = ParameterHandler(self)
        self.paramhandler.add('numsamples', 'set_num_samples', int)
        self.paramhandler.add('maxtrials', 'set_max_trials', int)
        self.paramhandler.add('skipfailedsteps', 'set_skip_failed_steps', bool)
        self.paramhandler.add('infointerval', 'set_info_interval', int)
        self.paramhandler.add('confidenceintervalsizethreshold', 'set_confidence_interval_size_threshold', float)
        self.paramhandler.add('convergencecheckinterval', 'set_convergence_check_interval', int)
        self.paramhandler.add('confidencelevel', 'set_confidence_level', float)
        self.paramhandler.add('debug', 'set_debug_mode', bool)
        self.paramhandler.add('verbose', 'set_verbose', bool)
        self.paramhandler.add_subhandler(strategy.paramhandler)


    @property
    def numsamples(self):
        return self._params.get('numsamples', DEFAULT_NUMSAMPLES)


    @property
    def maxtrials(self):
        return self._params.get('maxtrials', DEFAULT_MAXTRIALS)


    @property
    def skipfailedsteps(self):
        return self._params.get('skipfailedsteps', False)


    @property
    def infointerval(self):
        return self._params.get('infointerval', DEFAULT_INFOINTERVAL)


    @property
    def confidenceintervalsizethreshold(self):
        return self._params.get('confidenceintervalsizethreshold')


    @property
    def convergencecheckinterval(self):
        return self._params.get('convergencecheckinterval', DEFAULT_CONVERGENCE_CHECK_INTERVAL)


    @property
    def confidencelevel(self):
        return self._params.get('confidencelevel')


    @property
    def debug(self):
        return self._params.get('debug', False)


    @property
    def verbose(self):
        return self._params.get('verbose', False)


    @property
    def rndseed(self):
        return self._params.get('rndseed')


    @property
    def algorithm_name(self):
        return self.strategy.name


    def set_num_samples(self, numsamples):
        self._params['numsamples'] = numsamples


    def set_max_trials(self, maxtrials):
        self._params['maxtrials'] = maxtrials


    def set_skip_failed_steps(self, canskip):
        self._params['skipfailedsteps'] = canskip


    def set_info_interval(self, interval):
        if interval < 1:
            raise ConfigurationError('Info interval must be positive, got %s' % interval)
        self._params['infointerval'] = interval


    def set_confidence_interval_size_threshold(self, t):
        self._params['confidenceintervalsizethreshold'] = t


    def set_convergence_check_interval(self, interval):
        if interval < 1:
            raise ConfigurationError('Convergence check interval must be positive, got %s' % interval)
        self._params['convergencecheckinterval'] = interval


    def set_confidence_level(self, level):
        self._params['confidencelevel'] = level


    def set_debug_mode(self, active):
        self._params['debug'] = active


    def set_verbose(self, verbose):
        self._params['verbose'] = verbose


    def handle_params(self, params, strict=True):
        return self.paramhandler.handle(params, strict)


    def node_index(self, node):
        try:
            return self.nodeindices[node]
        except KeyError:
            raise NoSuchNodeError('Unknown node: %s' % node)


    def set_query_vars(self, queryvars):
        """
        Sets the indices of the nodes that convergence is determined on.
        """
        self.queryvars = list(queryvars)


    def set_evidence(self, evidence):
        """
        Sets the evidence as a vector of domain indices, one per node; -1 marks an unobserved node.
        """
        evidence = list(evidence)
        if len(evidence) != len(self.nodes):
            raise EvidenceError('Evidence vector has %d entries but there are %d nodes.' % (len(evidence), len(self.nodes)))
        for node, domidx in zip(self.nodes, evidence):
            if domidx >= len(node.domain) or domidx < -1:
                raise EvidenceError('Illegal domain index %d for node %s' % (domidx, node))
        self.evidence = evidence


    def create_distribution(self):
        if self.confidenceintervalsizethreshold is not None and self.confidencelevel is None:
            raise ConfigurationError('Cannot determine convergence based on confidence interval size: No confidence level specified.')
        dist = NetworkDistribution(self.nodes, self.confidencelevel)
        with self._lock:
            self.dist = dist
        return dist


    def add_sample(self, sample):
        with self._lock:
            # security check: in debug mode, check if sample respects evidence
            if self.debug:
                for i, domidx in enumerate(self.evidence):
                    if domidx >= 0 and sample.nodedomainindices[i] != domidx:
                        raise EvidenceConsistencyError('Attempted to add sample to distribution that does not respect evidence: %s = %s (evidence: %s)' % (self.nodes[i], sample.nodedomainindices[i], domidx))
            self.dist.add_sample(sample)


    def converged(self):
        """
        Checks the convergence criterion. Must be called after every sample.

        The sampling process is considered to have converged if the
        largest confidence interval over all query variables is not larger
        than the `confidenceintervalsizethreshold`.
        """
        numsamples = self.dist.numsamples
        if numsamples == 0 or numsamples % self.convergencecheckinterval != 0:
            return False
        if self.confidenceintervalsizethreshold is None:
            return False
        if not self.dist.uses_confidence_computation():
            raise ConfigurationError('Cannot determine convergence based on confidence interval size: No confidence level specified.')
        queryvars = ifnone(self.queryvars, range(len(self.nodes)))
        maxsize = 0.
        for i in queryvars:
            maxsize = max(maxsize, self.dist.confidence_interval(i, 0).size)
        if maxsize <= self.confidenceintervalsizethreshold:
            logger.info('convergence criterion reached after %d samples: maximum confidence interval size = %f' % (numsamples, maxsize))
            self.report('Convergence criterion reached after %d samples: maximum confidence interval size = %f' % (numsamples, maxsize))
            return True
        return False


    def cancel(self):
        """
        Asks the running strategy to stop after the current step.
        """
        self._cancelled.set()


    @property
    def cancelled(self):
        return self._cancelled.is_set()


    def infer(self):
        """
        Runs the inference strategy and returns the resulting distribution.
        """
        watch = StopWatch()
        self._cancelled.clear()
        self._report = []
        self.create_distribution()
        watch.tag('sampling', self.verbose)
        logger.debug('running %s with %d samples' % (self.algorithm_name, self.numsamples))
        dist = self.strategy.infer(self)
        watch.finish('sampling')
        self.samplingtime = watch['sampling'].elapsedtime
        self.report('%s: %d samples in %s' % (self.algorithm_name, dist.numsamples, elapsed_time_str(self.samplingtime)))
        if self.verbose:
            print('\n'.join(self._report))
        else:
            for line in self._report:
                logger.info(line)
        return dist


    def poll_results(self):
        """
        Returns a snapshot of the current distribution or `None` if sampling
        has not started yet.
        """
        with self._lock:
            if self.dist is None:
                return None
            return self.dist.clone()


    def report(self, s):
        """
        Adds a line to the report that is emitted after inference has finished.
        """
        self._report.append(s)


    def _address(self, node, nodedomainindices):
        cpf = node.cpf
        if cpf is None:
            raise ConfigurationError('Node %s has no CPT.' % node)
        return cpf, [nodedomainindices[self.node_index(n)] for n in cpf.domainproduct]


    def get_cpt_probability(self, node, nodedomainindices):
        """
        Returns the CPT entry of the given node for the configuration of the node and
        its parents given by `nodedomainindices`.
        """
        cpf, addr = self._address(node, nodedomainindices)
        return cpf.get_double(addr)


    def sample_forward(self, node, nodedomainindices):
        """
        Samples a value for `node` given its parents.

        :param node:                the node for which to sample a value.
        :param nodedomainindices:   the domain indices of all nodes; the values
                                    of the parents of `node` must be set already.
        :returns:                   the sampled domain index or -1 if sampling is
                                    impossible because all entries in the relevant
                                    column are 0.
        """
        cpf, addr = self._address(node, nodedomainindices)
        # get the address of the first entry of the column and the address difference
        # between two consecutive entries
        addr[0] = 0
        realaddr = cpf.addr2realaddr(addr)
        addr[0] = 1 if len(node.domain) > 1 else 0
        diff = cpf.addr2realaddr(addr) - realaddr
        column = []
        total = 0.
        for _ in range(len(node.domain)):
            p = cpf.get_double(realaddr)
            column.append(p)
            total += p
            realaddr += diff
        # if the column contains only zeros, it is an impossible case
        if total == 0:
            return -1
        return sample(column, self.rng, total)
