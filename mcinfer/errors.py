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


class MCInferenceError(Exception):
    """
    Base class of all errors raised by the inference engines.
    """
    pass


class UnsatisfiableError(MCInferenceError):
    """
    Raised if a set of (hard) constraints cannot be satisfied jointly.
    """
    pass


class EvidenceError(MCInferenceError):
    """
    Raised if an evidence vector does not fit the variables of a model.
    """
    pass


class EvidenceConsistencyError(MCInferenceError):
    """
    Raised in debug mode if a sample does not respect the evidence.
    """
    pass


class SamplingError(MCInferenceError):
    """
    Raised if sampling a world failed more often than allowed.
    """
    pass


class ConfigurationError(MCInferenceError):
    """
    Raised if an inference method is set up with invalid parameters.
    """
    pass


class NoSuchNodeError(MCInferenceError): pass
