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

import json
import os

from dnutils import logs


logger = logs.getlogger(__name__)


class InferenceConfig(object):
    """
    The settings of an inference run, stored as a JSON object.

    Top-level keys are the settings passed to :class:`mcinfer.query.MCQuery`.
    The entries of nested objects are addressed by slices, e.g.
    ``config['evidence':'WetGrass']``.

    :param filepath:    the JSON file to read from and to dump to. If it
                        does not exist yet, the configuration starts from the defaults.
    :param defaults:    settings that apply unless the file overrides them.
    """

    def __init__(self, filepath=None, **defaults):
        self.config_file = filepath
        self.config = dict(defaults)
        self._dirty = False
        if filepath is not None and os.path.exists(filepath):
            self.load(filepath)


    def load(self, filepath):
        with open(filepath, 'r') as f:
            self.config.update(json.load(f))
        self.config_file = filepath
        logger.debug('loaded config %s' % filepath)


    @property
    def dirty(self):
        return self._dirty


    def get(self, k, d=None):
        return self.config.get(k, d)


    def update(self, d):
        self.config.update(d)
        self._dirty = True


    def __getitem__(self, key):
        if isinstance(key, slice):
            section = self.config.get(key.start)
            return None if section is None else section.get(key.stop)
        return self.config.get(key)


    def __setitem__(self, key, value):
        if isinstance(key, slice):
            self.config.setdefault(key.start, {})[key.stop] = value
        else:
            self.config[key] = value
        self._dirty = True


    def __contains__(self, k):
        return k in self.config


    def dump(self, filepath=None):
        if filepath is not None:
            self.config_file = filepath
        if self.config_file is None:
            raise ValueError('no filename specified')
        with open(self.config_file, 'w+') as cf:
            json.dump(self.config, cf, indent=4)
        self._dirty = False


    def dumps(self):
        self._dirty = False
        return json.dumps(self.config, indent=4)
