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

import threading
import time

from dnutils import logs

from ..constants import DEFAULT_POLLING_INTERVAL


logger = logs.getlogger(__name__)


class TimeLimitedInference(object):
    """
    Runs the inference of a :class:`mcinfer.inference.sampler.Sampler` for at most
    a given amount of time.

    Inference is executed in a worker thread while the calling thread polls
    the intermediate results. If the deadline is reached before the sampler has
    finished, the sampler is asked to stop and the last snapshot is returned.

    :param sampler:     the sampler to run.
    :param time:        the time limit in seconds.
    :param interval:    the polling interval in seconds.
    """

    def __init__(self, sampler, time, interval=DEFAULT_POLLING_INTERVAL):
        self.sampler = sampler
        self.time = time
        self.interval = interval
        self.snapshots = []
        self.finished = False
        self._result = None
        self._error = None


    def _infer(self):
        try:
            self._result = self.sampler.infer()
        except Exception as e:
            self._error = e


    def run(self):
        """
        Runs inference and returns the final distribution if the sampler finished in
        time, or the latest snapshot otherwise (`None` if sampling has not started).
        """
        worker = threading.Thread(target=self._infer, name='%s-worker' % self.sampler.algorithm_name)
        worker.daemon = True
        start = time.time()
        deadline = start + self.time
        worker.start()
        while True:
            remaining = deadline - time.time()
            if remaining <= 0: break
            worker.join(min(self.interval, remaining))
            if not worker.is_alive(): break
            snapshot = self.sampler.poll_results()
            if snapshot is not None:
                self.snapshots.append((time.time() - start, snapshot))
                logger.info('%.1fs: %d samples' % (time.time() - start, snapshot.numsamples))
        if not worker.is_alive():
            self.finished = True
            if self._error is not None:
                raise self._error
            return self._result
        logger.warning('time limit of %.1fs reached, stopping %s' % (self.time, self.sampler.algorithm_name))
        self.sampler.cancel()
        result = self.sampler.poll_results()
        if result is not None:
            self.snapshots.append((time.time() - start, result))
        return result
