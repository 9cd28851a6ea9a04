# -*- coding: utf-8 -*-
#
# Copyright (c) 2016, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import collections




class keydefaultdict(collections.defaultdict):
    '''
    Default dict that passes missing keys to the factory function, rather than
    calling the factory function with no arguments.  Used for memoizing escape
    and unescape tables and for the emitter's type dispatch.
    '''
    def __missing__(self, k):
        if self.default_factory is None:
            raise KeyError(k)
        self[k] = self.default_factory(k)
        return self[k]
