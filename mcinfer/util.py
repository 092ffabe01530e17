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

import time

import colored
from dnutils import ifnone

from .constants import BOLD


def elapsed_time_str(elapsed):
    '''
    Formats a duration given in seconds as ``h:mm:ss.mmm``.
    '''
    minutes, secs = divmod(elapsed, 60)
    hours, minutes = divmod(int(minutes), 60)
    return '%d:%02d:%06.3f' % (hours, minutes, secs)


def colorize(message, format, color=False):
    '''
    Wraps `message` in ANSI escape codes for the console.

    :param format:    a triple ``(bg-color, fg-color, bold)``; colors are
                      names understood by :mod:`colored`, `None` leaves the
                      color unchanged.
    :param color:     if False, `message` is returned unchanged.
    '''
    if not color: return message
    bg, fg, bold = format
    styles = []
    if bold: styles.append(colored.attr('bold'))
    if bg: styles.append(colored.bg(bg))
    if fg: styles.append(colored.fg(fg))
    return colored.stylize(message, set(styles))


def headline(s):
    rule = colorize('=' * len(s), BOLD, True)
    return '\n'.join((rule, colorize(s, BOLD, True), rule))


def item(s):
    '''
    Returns an arbitrary element of the non-empty collection `s`.
    '''
    for it in s:
        return it
    raise ValueError('Argument of type %s is empty.' % type(s).__name__)


def product(values):
    p = 1
    for v in values:
        p *= v
    return p


class StopWatchTag(object):
    '''
    A labelled time span. It is running as long as `stoptime` is `None`.
    '''

    def __init__(self, label, starttime, stoptime=None):
        self.label = label
        self.starttime = starttime
        self.stoptime = stoptime


    @property
    def elapsedtime(self):
        return ifnone(self.stoptime, time.time()) - self.starttime


    @property
    def finished(self):
        return self.stoptime is not None


class StopWatch(object):
    '''
    Measures the phases of an inference run, e.g. sampling or the
    preparation of the constraints.
    '''

    def __init__(self):
        self.tags = {}


    def tag(self, label, verbose=True):
        '''
        Starts (or restarts) the time span `label`.
        '''
        if verbose:
            print('%s...' % label)
        self.tags[label] = StopWatchTag(label, time.time())


    def finish(self, label=None):
        '''
        Stops the time span `label` or, if no label is given, all running ones.
        '''
        now = time.time()
        if label is not None:
            if label not in self.tags:
                raise KeyError('Unknown tag: %s' % label)
            self.tags[label].stoptime = now
            return
        for tag in self.tags.values():
            if not tag.finished:
                tag.stoptime = now


    def __getitem__(self, label):
        return self.tags.get(label)


    def reset(self):
        self.tags = {}


    def printsteps(self):
        for tag in sorted(self.tags.values(), key=lambda t: t.starttime):
            label = colorize(tag.label, BOLD, True)
            if tag.finished:
                print('%s took %s' % (label, elapsed_time_str(tag.elapsedtime)))
            else:
                print('%s is running for %s now...' % (label, elapsed_time_str(tag.elapsedtime)))
