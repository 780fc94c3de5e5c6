# Copyright (C) 2012-2015 The python-txscript developers
#
# This file is part of python-txscript.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-txscript, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Serialization routines

You probabably don't need to use these directly.
"""

import hashlib
import struct

from io import BytesIO

MAX_SIZE = 0x02000000


class SerializationError(Exception):
    """Base class for serialization errors"""


class SerializationTruncationError(SerializationError):
    """Serialized data was truncated

    Thrown by ser_read() when fewer than the requested bytes remain.
    """
    def __init__(self, msg, requested, available):
        self.requested = requested
        self.available = available
        super(SerializationTruncationError, self).__init__(msg)


def ser_read(f, n):
    """Read from a stream safely

    Raises SerializationError and SerializationTruncationError appropriately.
    Use this instead of f.read() when decoding untrusted data.
    """
    if n > MAX_SIZE:
        raise SerializationError('Asked to read 0x%x bytes; MAX_SIZE exceeded' % n)
    r = f.read(n)
    if len(r) < n:
        raise SerializationTruncationError('Failed read of %d bytes; only %d available' % (n, len(r)),
                                           n, len(r))
    return r


def ser_read_uint(f, size):
    """Read a little-endian unsigned integer of size 1, 2 or 4 bytes"""
    fmt = {1: b'<B', 2: b'<H', 4: b'<I'}[size]
    return struct.unpack(fmt, ser_read(f, size))[0]


def Hash(msg):
    """SHA256^2)(msg) -> bytes"""
    return hashlib.sha256(hashlib.sha256(msg).digest()).digest()


def Hash160(msg):
    """RIPEME160(SHA256(msg)) -> bytes"""
    h = hashlib.new('ripemd160')
    h.update(hashlib.sha256(msg).digest())
    return h.digest()


__all__ = (
        'MAX_SIZE',
        'SerializationError',
        'SerializationTruncationError',
        'ser_read',
        'ser_read_uint',
        'BytesIO',
        'Hash',
        'Hash160',
)
