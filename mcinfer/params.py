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

from dnutils import logs

from .errors import ConfigurationError


logger = logs.getlogger(__name__)


def convert(value, type_):
    """
    Converts a (string) parameter value to the given type.
    """
    if type_ is None or not isinstance(value, str):
        return value
    if type_ is bool:
        v = value.strip().lower()
        if v in ('1', 'true', 'yes', 'on'): return True
        if v in ('0', 'false', 'no', 'off'): return False
        raise ConfigurationError('Not a boolean value: %s' % value)
    try:
        return type_(value)
    except ValueError:
        raise ConfigurationError('Cannot convert "%s" to %s' % (value, type_.__name__))


class ParameterHandler(object):
    """
    Maps parameter names to the setter methods of an owner object.

    Parameters that an owner does not handle itself can be forwarded to
    sub-handlers, e.g. the MC-SAT engine forwards the parameters of its
    SampleSAT solver.
    """

    def __init__(self, owner):
        self.owner = owner
        self.mappings = {}
        self.subhandlers = []


    def add(self, name, setter, type_=None):
        """
        Registers the method named `setter` of the owner for parameter `name`.
        """
        if not callable(getattr(self.owner, setter, None)):
            raise ConfigurationError('%s has no method %s' % (type(self.owner).__name__, setter))
        self.mappings[name] = (setter, type_)


    def add_subhandler(self, handler):
        if handler is not self and handler not in self.subhandlers:
            self.subhandlers.append(handler)


    def names(self):
        names = set(self.mappings)
        for h in self.subhandlers:
            names.update(h.names())
        return names


    def _handle(self, name, value):
        handled = False
        if name in self.mappings:
            setter, type_ = self.mappings[name]
            getattr(self.owner, setter)(convert(value, type_))
            handled = True
        for h in self.subhandlers:
            handled = h._handle(name, value) or handled
        return handled


    def handle(self, params, strict=True):
        """
        Applies all parameters in the dict `params`.

        :param strict:   if True, parameters that no handler knows raise a
                         :class:`ConfigurationError`.
        :returns:        the set of names of the parameters that were handled.
        """
        handled = set()
        for name, value in params.items():
            if self._handle(name, value):
                logger.debug('%s: %s = %s' % (type(self.owner).__name__, name, value))
                handled.add(name)
            elif strict:
                raise ConfigurationError('Unknown parameter for %s: %s (known: %s)' % (type(self.owner).__name__, name, ', '.join(sorted(self.names()))))
        return handled
