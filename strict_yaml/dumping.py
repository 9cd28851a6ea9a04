# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import logging

from . import erring
from .emitting import StrictYamlEmitter


logger = logging.getLogger(__name__)


_DEFAULT_EMITTER = StrictYamlEmitter()




def _emitter(cls, kwargs):
    if cls is None:
        if not kwargs:
            return _DEFAULT_EMITTER
        return StrictYamlEmitter(**kwargs)
    return cls(**kwargs)


def _write(text, fp):
    try:
        fp.write(text)
    except Exception as e:
        raise erring.EmitError('Could not write to output stream', e) from e


def dump(obj, fp, cls=None, **kwargs):
    '''
    Dump a single document to a file-like object.
    '''
    text = _emitter(cls, kwargs).encode(obj)
    _write(text, fp)
    logger.debug('Emitted 1 document (%d characters)', len(text))


def dumps(obj, cls=None, **kwargs):
    '''
    Dump a single document to a Unicode string.
    '''
    return _emitter(cls, kwargs).encode(obj)


def dump_all(objs, fp, cls=None, **kwargs):
    '''
    Dump several documents to a file-like object.
    '''
    objs = list(objs)
    text = _emitter(cls, kwargs).encode_all(objs)
    _write(text, fp)
    logger.debug('Emitted %d document(s) (%d characters)', len(objs), len(text))


def dumps_all(objs, cls=None, **kwargs):
    '''
    Dump several documents to a Unicode string.
    '''
    return _emitter(cls, kwargs).encode_all(objs)
