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
import random

from dnutils import logs, ProgressBar, ifnone

from .distribution import SampledDistribution, WeightedSample
from .sampler import InferenceStrategy
from .samplesat import SampleSAT
from ..constants import DEFAULT_INFOINTERVAL
from ..errors import UnsatisfiableError, ConfigurationError, EvidenceError
from ..logic.common import PossibleWorld
from ..logic.sat import satisfiable
from ..params import ParameterHandler


logger = logs.getlogger(__name__)


class MCSAT(object):
    """ 
    MC-SAT sampler for weighted clausal knowledge bases.

    Runs a Markov chain over possible worlds whose stationary distribution is
    the distribution defined by the knowledge base. In every step, each
    formula that is satisfied by the current state is selected with
    probability ``1 - exp(-weight)`` (hard formulas always), and the next
    state is sampled uniformly from the worlds satisfying all clauses of the
    selected formulas.

    :param kb:          the :class:`mcinfer.logic.WeightedClausalKB`.
    :param variables:   the :class:`mcinfer.logic.WorldVariables` of the model.
    :param evidence:    a dict mapping atom indices to fixed truth values.
    :param rng:         the random number generator; if `None`, a new one is
                        created and seeded with the `rndseed` parameter.
    :param sat:         the :class:`mcinfer.inference.samplesat.ConstraintSampler`
                        to use; defaults to :class:`SampleSAT`.
    """
    
    def __init__(self, kb, variables, evidence=None, rng=None, sat=None, **params):
        self.kb = kb
        self.variables = variables
        self._params = dict(params)
        self.evidence = dict(ifnone(evidence, {}))
        for atomidx in self.evidence:
            if not 0 <= atomidx < len(variables):
                raise EvidenceError('No ground atom with index %s' % atomidx)
        if self._params.get('infointerval') is not None:
            self.set_info_interval(self._params['infointerval'])
        self.rng = ifnone(rng, random.Random(self.rndseed))
        self.dist = SampledDistribution(variables)
        self.step = 0
        self.paramhandler = ParameterHandler(self)
        self.paramhandler.add('verbose', 'set_verbose', bool)
        self.paramhandler.add('debug', 'set_debug_mode', bool)
        self.paramhandler.add('infointerval', 'set_info_interval', int)
        self.state = PossibleWorld(variables)
        if sat is None:
            sat = SampleSAT(self.state, variables, self.evidence, self.rng,
                            **dict([(k, v) for k, v in params.items() if k in ('p', 'maxenum', 'maxflips', 'temperature')]))
        self.sat = sat
        if hasattr(sat, 'paramhandler'):
            self.paramhandler.add_subhandler(sat.paramhandler)
        

    @property
    def verbose(self):
        return self._params.get('verbose', False)
    
    
    @property
    def debug(self):
        return self._params.get('debug', False)
    
    
    @property
    def infointerval(self):
        return self._params.get('infointerval', DEFAULT_INFOINTERVAL)
    
    
    @property
    def rndseed(self):
        return self._params.get('rndseed')


    @property
    def algorithm_name(self):
        return '%s[%s]' % (self.__class__.__name__, getattr(self.sat, 'algorithm_name', type(self.sat).__name__))
    
    
    def set_verbose(self, verbose):
        self._params['verbose'] = verbose
        
        
    def set_debug_mode(self, active):
        self._params['debug'] = active
        
        
    def set_info_interval(self, interval):
        if interval < 1:
            raise ConfigurationError('Info interval must be positive, got %s' % interval)
        self._params['infointerval'] = interval


    def set_p(self, p):
        """
        Sets the probability of a greedy (WalkSAT) move of the SampleSAT solver.
        """
        self.sat.set_p(p)


    def handle_params(self, params, strict=True):
        return self.paramhandler.handle(params, strict)


    def run(self, steps, sample_callback=None):
        """
        Runs the Markov chain for the given number of steps and returns the normalized
        distribution.

        :param sample_callback:   if given, a function that is called with the sampled
                                  state and the step number after every step. If it
                                  returns True, the chain is stopped.
        :raises UnsatisfiableError:  if the hard constraints cannot be satisfied.
        """
        if self.debug:
            logger.debug('MC-SAT constraints:')
            for wc in self.kb:
                logger.debug('  %s' % wc)
        verbose = self.verbose or self.debug
        logger.debug('%s sampling with %d steps...' % (self.algorithm_name, steps))
        # find initial state satisfying all hard constraints
        M = self.kb.hard_clauses()
        if not satisfiable(M, self.evidence):
            raise UnsatisfiableError('The hard constraints of the knowledge base are unsatisfiable given the evidence.')
        self.sat.reset(M)
        self.state = self.sat.step()
        # every run starts a fresh distribution
        self.dist = SampledDistribution(self.variables)
        self.step = 0
        if verbose:
            bar = ProgressBar(steps=steps, color='green')
        # actual MC-SAT sampling
        for i in range(steps):
            self.step = i + 1
            M = self._satisfy_subset()
            if self.verbose or self.step % self.infointerval == 0:
                logger.info('MC-SAT step %d: %d constraints to be satisfied' % (self.step, len(M)))
                if self.debug:
                    for wc in M:
                        logger.debug('    %s' % wc)
            self.sat.reset(M)
            self.state = self.sat.step()
            self.dist.add_sample(self.state, 1.)
            if verbose:
                bar.inc()
                bar.label('%d / %d' % (self.step, steps))
            if sample_callback is not None and sample_callback(self.state, self.step):
                logger.debug('MC-SAT stopped after %d steps' % self.step)
                break
        self.dist.normalize()
        return self.dist


    def _satisfy_subset(self):
        """
        Chooses the set of clauses to be satisfied in the next state: all clauses of
        the satisfied hard formulas and, with probability ``1 - exp(-weight)``, all
        clauses of each satisfied soft formula.
        """
        M = []
        for wf, clauses in self.kb.formulas_and_clauses():
            if not wf.truth(self.state): continue
            if wf.hard or self.rng.random() > math.exp(-wf.weight):
                M.extend(clauses)
        return M


    def get_result(self, atom):
        """
        Returns the estimated marginal probability of the given ground atom (or atom index).
        """
        return self.dist.get_result(getattr(atom, 'idx', atom))


class MCSATStrategy(InferenceStrategy):
    """
    Runs MC-SAT within a :class:`mcinfer.inference.sampler.Sampler` whose
    network is a :class:`mcinfer.logic.WorldVariables` registry. Every state of
    the chain is added to the sampler's distribution as a sample of weight 1.

    :param kb:    the :class:`mcinfer.logic.WeightedClausalKB`.
    """

    def __init__(self, kb, **params):
        InferenceStrategy.__init__(self, **params)
        self.kb = kb
        self.mcsat = None
        self.paramhandler.add('p', 'set_p', float)
        self.paramhandler.add('maxenum', 'set_max_enum', int)
        self.paramhandler.add('maxflips', 'set_max_flips', int)
        self.paramhandler.add('temperature', 'set_temperature', float)


    @property
    def name(self):
        return 'MC-SAT'


    def set_p(self, p):
        self._params['p'] = p


    def set_max_enum(self, maxenum):
        self._params['maxenum'] = maxenum


    def set_max_flips(self, maxflips):
        self._params['maxflips'] = maxflips


    def set_temperature(self, temperature):
        self._params['temperature'] = temperature


    def infer(self, sampler):
        evidence = dict([(i, bool(domidx)) for i, domidx in enumerate(sampler.evidence) if domidx >= 0])
        self.mcsat = MCSAT(self.kb, sampler.network, evidence, rng=sampler.rng,
                           verbose=sampler.verbose, debug=sampler.debug,
                           infointerval=sampler.infointerval,
                           **dict([(k, v) for k, v in self._params.items() if k not in ('verbose', 'debug', 'infointerval')]))
        def add_sample(state, step):
            sampler.add_sample(WeightedSample([1 if v else 0 for v in state.values], 1.))
            return sampler.cancelled or sampler.converged()
        self.mcsat.run(sampler.numsamples, add_sample)
        return sampler.dist
