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

from dnutils import logs, ifnone
from tabulate import tabulate

from .config import InferenceConfig
from .constants import ALL, DEFAULT_POLLING_INTERVAL
from .errors import ConfigurationError
from .inference.mcsat import MCSATStrategy
from .inference.sampler import Sampler
from .inference.timed import TimeLimitedInference
from .methods import InferenceMethods
from .util import headline, StopWatch


logger = logs.getlogger(__name__)

# settings of a query that are not parameters of the inference algorithm
QUERY_SETTINGS = ['network', 'kb', 'method', 'evidence', 'queries', 'timelimit',
                  'pollinginterval', 'rndseed', 'verbose', 'debug']


class MCQuery(object):

    def __init__(self, config=None, verbose=None, **params):
        '''
        Class for performing sampling-based inference
        :param config:  the configuration of the inference, an
                        :class:`InferenceConfig` or a dict
        :param verbose: boolean value whether verbosity logs will be
                        printed or not
        :param params:  dictionary of additional settings
        '''
        self.configfile = None
        if config is None:
            self._config = {}
        elif isinstance(config, InferenceConfig):
            self._config = dict(config.config)
            self.configfile = config
        else:
            self._config = dict(config)
        self._config.update(params)
        if verbose is not None:
            self._verbose = verbose
        else:
            self._verbose = self._config.get('verbose', False)


    @property
    def network(self):
        return self._config.get('network')


    @property
    def kb(self):
        return self._config.get('kb')


    @property
    def method(self):
        method = self._config.get('method', 'MC-SAT')
        if method not in InferenceMethods:
            raise ConfigurationError('Unknown inference method: %s (available: %s)' % (method, ', '.join(InferenceMethods.names())))
        return InferenceMethods.clazz(method)


    @property
    def evidence(self):
        return self._config.get('evidence', {})


    @property
    def queries(self):
        q = self._config.get('queries', ALL)
        if isinstance(q, str):
            if q == ALL:
                return ALL
            return [s.strip() for s in q.split(',') if s.strip()]
        return q


    @property
    def timelimit(self):
        return self._config.get('timelimit')


    @property
    def pollinginterval(self):
        return self._config.get('pollinginterval', DEFAULT_POLLING_INTERVAL)


    @property
    def rndseed(self):
        return self._config.get('rndseed')


    @property
    def verbose(self):
        return self._verbose


    @property
    def params(self):
        '''
        The parameters of the inference algorithm, i.e. all settings that
        are not settings of the query itself.
        '''
        return dict([(k, v) for k, v in self._config.items() if k not in QUERY_SETTINGS])


    def _strategy(self):
        clazz = self.method
        if issubclass(clazz, MCSATStrategy):
            if self.kb is None:
                raise ConfigurationError('MC-SAT needs a weighted knowledge base.')
            return clazz(self.kb)
        return clazz()


    def _log_level(self):
        debug = self._config.get('debug', 'WARNING')
        if isinstance(debug, bool):
            return logs.DEBUG if debug else logs.WARNING
        return getattr(logs, str(debug).upper())


    def _evidence(self, sampler):
        evidence = [-1] * len(sampler.nodes)
        for name, value in self.evidence.items():
            node = self.network[name]
            evidence[sampler.node_index(node)] = node.domain_index(value)
        return evidence


    def run(self):
        watch = StopWatch()
        watch.tag('inference', self.verbose)
        if self.network is None:
            raise ConfigurationError('No network specified')
        sampler = Sampler(self.network, self._strategy(), rndseed=self.rndseed, verbose=self.verbose)
        params = self.params
        sampler.handle_params(params)
        sampler.set_evidence(self._evidence(sampler))
        if isinstance(self._config.get('debug'), bool):
            # a boolean switches on the evidence consistency checks of the sampler
            sampler.set_debug_mode(self._config['debug'])
        if self.queries != ALL:
            sampler.set_query_vars([sampler.node_index(self.network[q]) for q in self.queries])
        if self.verbose:
            print(tabulate(sorted(list(params.items()), key=lambda k_v: str(k_v[0])), headers=('Parameter:', 'Value:')))
        # set the debug level
        pkglogger = logs.getlogger('mcinfer')
        olddebug = pkglogger.level
        pkglogger.level = self._log_level()
        try:
            if self.timelimit is not None:
                result = TimeLimitedInference(sampler, self.timelimit, self.pollinginterval).run()
            else:
                result = sampler.infer()
        finally:
            # reset the debug level
            pkglogger.level = olddebug
        if self.verbose and result is not None:
            print()
            print(headline('INFERENCE RESULTS'))
            print()
            queryvars = ifnone(sampler.queryvars, range(len(sampler.nodes)))
            rows = [(str(sampler.nodes[i]), ' '.join(['%s: %.3f' % (v, p) for v, p in zip(sampler.nodes[i].domain, result.distribution(i))])) for i in queryvars]
            print(tabulate(rows, headers=('Variable:', 'Distribution:')))
            print()
            watch.finish()
            watch.printsteps()
        return result
