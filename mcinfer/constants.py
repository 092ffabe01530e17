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

ALL = '*'

# default settings of the samplers
DEFAULT_NUMSAMPLES = 1000
DEFAULT_MAXTRIALS = 5000
DEFAULT_INFOINTERVAL = 100
DEFAULT_CONVERGENCE_CHECK_INTERVAL = 100

# default settings of SampleSAT
DEFAULT_P = .5
DEFAULT_MAXENUM = 12
DEFAULT_MAXFLIPS = 100000

# default settings of time-limited inference
DEFAULT_POLLING_INTERVAL = 1.

# console formats (bg, fg, bold)
BOLD = (None, None, True)
atom_color = (None, 'white', True)
