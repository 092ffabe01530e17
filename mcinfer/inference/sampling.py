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


def sample(distribution, rng, total=None):
    """
    Samples an index from an unnormalized distribution.

    The distribution is either an indexable sequence of non-negative weights
    or a one-pass iterable thereof. The sampled index is the first one whose
    cumulative weight reaches a uniform draw from ``[0, total)``.

    :param distribution:    the weights of the outcomes.
    :param rng:             the random number generator (providing ``random()``).
    :param total:           the distribution's normalization constant. If `None`,
                            it is computed from the weights first.
    :returns:               the index of the value that was sampled or -1 if the
                            distribution is not well-defined.
    """
    if total is None:
        if not hasattr(distribution, '__getitem__'):
            distribution = list(distribution)
        total = sum(distribution)
    if not total > 0:
        return -1
    u = rng.random() * total
    cumsum = 0.
    for i, w in enumerate(distribution):
        cumsum += w
        # zero-weight entries are never sampled, even for u == 0
        if w > 0 and cumsum >= u:
            return i
    return -1
