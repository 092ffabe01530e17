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

from .inference.forward import ForwardSampling, LikelihoodWeighting
from .inference.mcsat import MCSATStrategy


class MethodRegistry(object):
    '''
    Registry of inference strategies, addressable by their class, their
    id (the class name) or their human-readable name.
    '''

    def __init__(self, items):
        self.id2name = dict([(clazz.__name__, name) for (clazz, name) in items])
        self.name2id = dict([(name, clazz.__name__) for (clazz, name) in items])
        self.id2clazz = dict([(clazz.__name__, clazz) for (clazz, _) in items])


    def __getattr__(self, id_):
        if id_ in ('id2name', 'name2id', 'id2clazz'):
            raise AttributeError(id_)
        if id_ in self.id2clazz:
            return self.id2clazz[id_]
        raise AttributeError('No inference method %s, only %s' % (id_, list(self.id2clazz.keys())))


    def __contains__(self, key):
        if isinstance(key, type):
            key = key.__name__
        return key in self.id2clazz or key in self.name2id


    def __iter__(self):
        return iter(self.id2clazz.values())


    def clazz(self, key):
        if isinstance(key, type):
            key = key.__name__
        if key in self.id2clazz:
            return self.id2clazz[key]
        if key in self.name2id:
            return self.id2clazz[self.name2id[key]]
        raise KeyError('No such inference method "%s"' % key)


    def id(self, key):
        if isinstance(key, type):
            return key.__name__
        if key in self.name2id:
            return self.name2id[key]
        raise KeyError('No such inference method "%s"' % key)


    def name(self, id_):
        if isinstance(id_, type):
            id_ = id_.__name__
        if id_ in self.id2name:
            return self.id2name[id_]
        raise KeyError('No inference method with id "%s"' % id_)


    def names(self):
        return list(self.id2name.values())


    def ids(self):
        return list(self.id2name.keys())


InferenceMethods = MethodRegistry(
    (
     (MCSATStrategy, 'MC-SAT'),
     (ForwardSampling, 'Forward sampling'),
     (LikelihoodWeighting, 'Likelihood weighting'),
    ))
