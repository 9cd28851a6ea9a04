# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import logging

from .version import __version__, __version_info__


from .loading import load, loads, StrictYamlLoader
from .dumping import dump, dumps, dump_all, dumps_all
from .emitting import StrictYamlEmitter
from .values import (StrictYaml, Scalar, Sequence, Mapping, Null, BadValue,
                     NULL, BAD_VALUE, from_python)
from .erring import (StrictYamlException, LoadError, ScanError,
                     IndentationError, InvalidLiteralError, SourceDecodeError,
                     ParseError, ForbiddenConstructError, DuplicateKeyError,
                     EmitError)


logging.getLogger(__name__).addHandler(logging.NullHandler())
