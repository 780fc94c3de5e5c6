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

"""Scripts

Transactions don't say what they do directly. Instead a small binary stack
language is used: an input script (scriptSig) supplies data, an output script
(scriptPubKey) states what must be supplied to spend the output.

This module breaks a script up into chunks, data pushes and opcodes, without
evaluating it. That is enough to pull the addresses out of the standard
forms, which is what you need to show where coins came from and where they
went. It can also build the standard forms from scratch.
"""

import logging
import struct
from collections import namedtuple

import txscript.base58
import txscript.core
from txscript.core.serialize import (
        BytesIO,
        SerializationError,
        SerializationTruncationError,
        ser_read,
        ser_read_uint,
)


__all__ = [
        'OPCODE_NAMES',
        'OPCODES_BY_NAME',
        'CScriptOp',
        'CScriptChunk',
        'CScript',
        'ScriptParseError',
        'ScriptTruncatedError',
        'ScriptUnsupportedEncodingError',
        'ScriptError',
        'UnexpectedShapeError',
        'UnexpectedOperationError',
        'EncodeError',
        'PayloadTooLargeError',
        'build_lock_script',
        'build_unlock_script',
]

log = logging.getLogger(__name__)

# First byte of a two-byte opcode
EXTENDED_OPCODE_MIN = 0xf0

OPCODE_NAMES = {}
OPCODES_BY_NAME = {}

_opcode_instances = []
class CScriptOp(int):
    """A single script opcode

    Single-byte opcodes are singletons; two-byte extended opcodes
    (0xf000-0xffff) are not.
    """
    __slots__ = []

    @staticmethod
    def encode_op_pushdata(d):
        """Encode a PUSHDATA op, returning bytes

        Always uses the shortest possible form.
        """
        if len(d) < 0x4c:
            return bytes([len(d)]) + d # OP_PUSHDATA
        elif len(d) <= 0xff:
            return b'\x4c' + bytes([len(d)]) + d # OP_PUSHDATA1
        elif len(d) <= 0xffff:
            return b'\x4d' + struct.pack(b'<H', len(d)) + d # OP_PUSHDATA2
        else:
            raise PayloadTooLargeError(len(d))

    def is_extended(self):
        return self > 0xff

    def serialize(self):
        """Wire encoding of the opcode, one or two bytes"""
        if self.is_extended():
            return struct.pack(b'>H', self)
        return bytes([self])

    def __str__(self):
        return repr(self)

    def __repr__(self):
        if self in OPCODE_NAMES:
            return OPCODE_NAMES[self]
        else:
            return 'CScriptOp(0x%x)' % self

    def __new__(cls, n):
        if not (0 <= n <= 0xff or EXTENDED_OPCODE_MIN << 8 <= n <= 0xffff):
            raise ValueError('Opcode must be in range 0 <= n <= 0xff or 0x%x <= n <= 0xffff, got %d' %
                             (EXTENDED_OPCODE_MIN << 8, n))
        if n > 0xff:
            return super(CScriptOp, cls).__new__(cls, n)
        try:
            return _opcode_instances[n]
        except IndexError:
            assert len(_opcode_instances) == n
            _opcode_instances.append(super(CScriptOp, cls).__new__(cls, n))
            return _opcode_instances[n]

# Populate opcode instance table
for n in range(0xff+1):
    CScriptOp(n)


_NAMED_OPCODES = {
    # push value
    'OP_0': 0x00,
    'OP_FALSE': 0x00,
    'OP_PUSHDATA1': 0x4c,
    'OP_PUSHDATA2': 0x4d,
    'OP_PUSHDATA4': 0x4e,
    'OP_1NEGATE': 0x4f,
    'OP_RESERVED': 0x50,
    'OP_TRUE': 0x51,

    # control
    'OP_NOP': 0x61,
    'OP_VER': 0x62,
    'OP_IF': 0x63,
    'OP_NOTIF': 0x64,
    'OP_VERIF': 0x65,
    'OP_VERNOTIF': 0x66,
    'OP_ELSE': 0x67,
    'OP_ENDIF': 0x68,
    'OP_VERIFY': 0x69,
    'OP_RETURN': 0x6a,

    # stack ops
    'OP_TOALTSTACK': 0x6b,
    'OP_FROMALTSTACK': 0x6c,
    'OP_2DROP': 0x6d,
    'OP_2DUP': 0x6e,
    'OP_3DUP': 0x6f,
    'OP_2OVER': 0x70,
    'OP_2ROT': 0x71,
    'OP_2SWAP': 0x72,
    'OP_IFDUP': 0x73,
    'OP_DEPTH': 0x74,
    'OP_DROP': 0x75,
    'OP_DUP': 0x76,
    'OP_NIP': 0x77,
    'OP_OVER': 0x78,
    'OP_PICK': 0x79,
    'OP_ROLL': 0x7a,
    'OP_ROT': 0x7b,
    'OP_SWAP': 0x7c,
    'OP_TUCK': 0x7d,

    # splice ops
    'OP_CAT': 0x7e,
    'OP_SUBSTR': 0x7f,
    'OP_LEFT': 0x80,
    'OP_RIGHT': 0x81,
    'OP_SIZE': 0x82,

    # bit logic
    'OP_INVERT': 0x83,
    'OP_AND': 0x84,
    'OP_OR': 0x85,
    'OP_XOR': 0x86,
    'OP_EQUAL': 0x87,
    'OP_EQUALVERIFY': 0x88,
    'OP_RESERVED1': 0x89,
    'OP_RESERVED2': 0x8a,

    # numeric
    'OP_1ADD': 0x8b,
    'OP_1SUB': 0x8c,
    'OP_2MUL': 0x8d,
    'OP_2DIV': 0x8e,
    'OP_NEGATE': 0x8f,
    'OP_ABS': 0x90,
    'OP_NOT': 0x91,
    'OP_0NOTEQUAL': 0x92,
    'OP_ADD': 0x93,
    'OP_SUB': 0x94,
    'OP_MUL': 0x95,
    'OP_DIV': 0x96,
    'OP_MOD': 0x97,
    'OP_LSHIFT': 0x98,
    'OP_RSHIFT': 0x99,
    'OP_BOOLAND': 0x9a,
    'OP_BOOLOR': 0x9b,
    'OP_NUMEQUAL': 0x9c,
    'OP_NUMEQUALVERIFY': 0x9d,
    'OP_NUMNOTEQUAL': 0x9e,
    'OP_LESSTHAN': 0x9f,
    'OP_GREATERTHAN': 0xa0,
    'OP_LESSTHANOREQUAL': 0xa1,
    'OP_GREATERTHANOREQUAL': 0xa2,
    'OP_MIN': 0xa3,
    'OP_MAX': 0xa4,
    'OP_WITHIN': 0xa5,

    # crypto
    'OP_RIPEMD160': 0xa6,
    'OP_SHA1': 0xa7,
    'OP_SHA256': 0xa8,
    'OP_HASH160': 0xa9,
    'OP_HASH256': 0xaa,
    'OP_CODESEPARATOR': 0xab,
    'OP_CHECKSIG': 0xac,
    'OP_CHECKSIGVERIFY': 0xad,
    'OP_CHECKMULTISIG': 0xae,
    'OP_CHECKMULTISIGVERIFY': 0xaf,
}
# OP_1 .. OP_16 and the expansion NOPs
_NAMED_OPCODES.update(('OP_%d' % n, 0x50 + n) for n in range(1, 17))
_NAMED_OPCODES.update(('OP_NOP%d' % n, 0xaf + n) for n in range(1, 11))

# Sorted so that the aliases OP_FALSE/OP_TRUE lose to OP_0/OP_1 for naming.
for k, v in sorted(_NAMED_OPCODES.items(), reverse=True):
    locals()[k] = var = CScriptOp(v)
    OPCODE_NAMES[var] = k
    OPCODES_BY_NAME[k] = var
    __all__.append(k)


class ScriptParseError(Exception):
    """Base class for script decoding errors"""

class ScriptTruncatedError(ScriptParseError):
    """A read ran past the end of the script"""
    def __init__(self, msg, requested, available):
        self.requested = requested
        self.available = available
        super(ScriptTruncatedError, self).__init__(msg)

class ScriptUnsupportedEncodingError(ScriptParseError):
    """A push form this decoder declines to handle"""

class ScriptError(Exception):
    """Base class for script template matching errors"""

class UnexpectedShapeError(ScriptError):
    """Script has the wrong number of chunks for the requested form"""
    def __init__(self, msg, expected_chunks=None, actual_chunks=None):
        self.expected_chunks = expected_chunks
        self.actual_chunks = actual_chunks
        super(UnexpectedShapeError, self).__init__(msg)

class UnexpectedOperationError(UnexpectedShapeError):
    """Script has the right size but the wrong chunks"""

class EncodeError(ValueError):
    """Base class for script encoding errors"""

class PayloadTooLargeError(EncodeError):
    def __init__(self, length):
        self.length = length
        super(PayloadTooLargeError, self).__init__(
                'Data too long to encode in a PUSHDATA op: %d bytes' % length)


def _read(f, n, what):
    try:
        return ser_read(f, n)
    except SerializationTruncationError as err:
        raise ScriptTruncatedError('%s: %s' % (what, err), err.requested, err.available)

def _read_uint(f, size, what):
    try:
        return ser_read_uint(f, size)
    except SerializationTruncationError as err:
        raise ScriptTruncatedError('%s: %s' % (what, err), err.requested, err.available)


class CScriptChunk(namedtuple('CScriptChunk', ['opcode', 'data', 'sop_idx'])):
    """A decoded element of a script

    Either an operation, in which case data is None, or a data push. For data
    pushes opcode is the push opcode that was used, so that the different
    possible PUSHDATA encodings can be told apart and reproduced exactly.
    sop_idx is the byte index of the chunk within the script.
    """
    __slots__ = ()

    def is_data(self):
        return self.data is not None

    def is_op(self, opcode=None):
        """True if an operation, optionally a specific one"""
        if self.data is not None:
            return False
        return opcode is None or self.opcode == opcode

    @property
    def payload(self):
        """The data pushed, or the opcode bytes for an operation"""
        if self.data is None:
            return self.opcode.serialize()
        return self.data

    def to_bytes(self):
        """Serialize the chunk exactly as it was found in the script"""
        if self.data is None:
            return self.opcode.serialize()
        elif self.opcode < OP_PUSHDATA1:
            return bytes([self.opcode]) + self.data
        elif self.opcode == OP_PUSHDATA1:
            return b'\x4c' + struct.pack(b'<B', len(self.data)) + self.data
        elif self.opcode == OP_PUSHDATA2:
            return b'\x4d' + struct.pack(b'<H', len(self.data)) + self.data
        else:
            return b'\x4e' + struct.pack(b'<I', len(self.data)) + self.data

    def __str__(self):
        if self.data is not None:
            return '[%d]%s' % (len(self.data), txscript.core.b2x(self.data))
        name = OPCODE_NAMES.get(self.opcode)
        if name is None:
            return '?(%d)' % self.opcode
        return name[3:]


class CScript(bytes):
    """Serialized script, decoded into chunks

    A bytes subclass, so you can use this directly whenever bytes are accepted.
    Note that this means that indexing does *not* work - you'll get an index by
    byte rather than chunk. iter(script) however does iterate by chunk, and
    the chunks attribute holds the whole decoded tuple.

    The script is decoded when it is created; malformed scripts raise a
    ScriptParseError subclass. The bytes are always copied out of program, so
    changing the caller's buffer later has no effect.

    params is the chain the script belongs to; it is only used to derive
    addresses.
    """
    def __new__(cls, program=b'', params=None, offset=0, length=None):
        if offset < 0:
            raise ValueError('offset must be non-negative; got %d' % offset)
        available = max(len(program) - offset, 0)
        if length is None:
            length = available
        elif length < 0:
            raise ValueError('length must be non-negative; got %d' % length)
        elif length > available:
            raise ScriptTruncatedError('Script range of %d bytes at offset %d exceeds buffer; %d available' % \
                                       (length, offset, available),
                                       length, available)

        self = super(CScript, cls).__new__(cls, bytes(program[offset:offset + length]))
        self._params = params
        self._chunks = tuple(self._decode())
        return self

    def _decode(self):
        f = BytesIO(self)
        while f.tell() < len(self):
            sop_idx = f.tell()
            opcode = _read_uint(f, 1, 'opcode')
            if opcode >= EXTENDED_OPCODE_MIN:
                opcode = (opcode << 8) | _read_uint(f, 1, 'extended opcode 0x%x' % opcode)
                log.debug('Two-byte opcode 0x%04x at byte %d', opcode, sop_idx)
            opcode = CScriptOp(opcode)

            if 0 < opcode < OP_PUSHDATA1:
                pushdata_type = 'PUSHDATA(%d)' % opcode
                datasize = opcode

            elif opcode == OP_PUSHDATA1:
                pushdata_type = 'PUSHDATA1'
                datasize = _read_uint(f, 1, 'PUSHDATA1: missing data length')

            elif opcode == OP_PUSHDATA2:
                pushdata_type = 'PUSHDATA2'
                datasize = _read_uint(f, 2, 'PUSHDATA2: missing data length')

            elif opcode == OP_PUSHDATA4:
                pushdata_type = 'PUSHDATA4'
                datasize = _read_uint(f, 4, 'PUSHDATA4: missing data length')

            else:
                yield CScriptChunk(opcode, None, sop_idx)
                continue

            try:
                data = _read(f, datasize, '%s: truncated data' % pushdata_type)
            except SerializationError as err:
                log.debug('Declined %s of %d bytes at byte %d', pushdata_type, datasize, sop_idx)
                raise ScriptUnsupportedEncodingError('%s: %s' % (pushdata_type, err))

            yield CScriptChunk(opcode, data, sop_idx)

    @property
    def params(self):
        return self._params

    @property
    def chunks(self):
        return self._chunks

    def __iter__(self):
        return iter(self._chunks)

    def __repr__(self):
        def _repr(chunk):
            if chunk.is_data():
                return "x('%s')" % txscript.core.b2x(chunk.data)
            else:
                return repr(chunk.opcode)

        return "CScript([%s])" % ', '.join(_repr(chunk) for chunk in self._chunks)

    def __str__(self):
        """Human readable form, for example "DUP HASH160 [20]0123.. EQUALVERIFY CHECKSIG" """
        return ' '.join(str(chunk) for chunk in self._chunks)

    def is_legacy_direct_transfer(self):
        """Test if the script pays directly to a public key

        That is <pubkey> CHECKSIG, the form used by long deprecated IP to IP
        transactions and early coinbases.
        """
        return (len(self._chunks) == 2 and
                self._chunks[1].is_op(OP_CHECKSIG) and
                self._chunks[0].is_data() and
                len(self._chunks[0].data) > 1)

    def extract_pubkey_hash(self):
        """Return the pubkey hash of a standard scriptPubKey

        The script must match DUP HASH160 <20 byte hash> EQUALVERIFY CHECKSIG
        exactly, otherwise UnexpectedShapeError is raised.
        """
        if len(self._chunks) != 5:
            raise UnexpectedShapeError('Script not of right size to be a scriptPubKey, expecting 5 but got %d' % \
                                       len(self._chunks),
                                       5, len(self._chunks))

        dup, hash160, pubkey_hash, equalverify, checksig = self._chunks
        if not (dup.is_op(OP_DUP) and
                hash160.is_op(OP_HASH160) and
                pubkey_hash.is_data() and len(pubkey_hash.data) == 20 and
                equalverify.is_op(OP_EQUALVERIFY) and
                checksig.is_op(OP_CHECKSIG)):
            raise UnexpectedOperationError('Script not in the standard scriptPubKey form: %s' % self,
                                           5, len(self._chunks))

        return pubkey_hash.data

    def is_pay_to_pubkey_hash(self):
        try:
            self.extract_pubkey_hash()
        except ScriptError:
            return False
        return True

    def extract_pubkey(self):
        """Return the public key from a scriptSig

        A single chunk is returned as-is, as IP to IP transactions only have
        the public key in their scriptSig. Otherwise the script must have two
        chunks, normally <sig> <pubkey>, and the second is returned. This is a
        loose check: if only the first chunk looks like a public key, that is
        returned instead.
        """
        if len(self._chunks) == 1:
            return self._chunks[0].payload

        if len(self._chunks) != 2:
            raise UnexpectedShapeError('Script not of right size to be a scriptSig, expecting 2 but got %d' % \
                                       len(self._chunks),
                                       2, len(self._chunks))

        def is_key(chunk):
            return chunk.is_data() and len(chunk.data) > 1

        if is_key(self._chunks[1]):
            return self._chunks[1].data
        elif is_key(self._chunks[0]):
            return self._chunks[0].data
        else:
            raise UnexpectedOperationError('Script not in the standard scriptSig form: %s' % self,
                                           2, len(self._chunks))

    def _require_params(self):
        if self._params is None:
            raise ValueError('CScript: no chain parameters to build an address with')
        return self._params

    def get_source_address(self, hash160=txscript.core.Hash160):
        """Address of the key that signed this scriptSig

        hash160 is the function used to hash the public key; Hash160() by
        default.
        """
        import txscript.wallet
        return txscript.wallet.CBitcoinAddress.from_hash160(hash160(self.extract_pubkey()),
                                                            self._require_params())

    def get_destination_address(self):
        """Address this scriptPubKey pays to"""
        import txscript.wallet
        return txscript.wallet.CBitcoinAddress.from_hash160(self.extract_pubkey_hash(),
                                                            self._require_params())

    def is_push_only(self):
        """Test if the script only contains pushdata ops"""
        for chunk in self._chunks:
            # Note how OP_RESERVED is considered a pushdata op.
            if not chunk.is_data() and chunk.opcode > OP_16:
                return False
        return True

    def has_canonical_pushes(self):
        """Test if script only uses canonical pushes"""
        for chunk in self._chunks:
            if not chunk.is_data():
                continue

            op, data = chunk.opcode, chunk.data
            if op < OP_PUSHDATA1 and len(data) == 1 and data[0] <= 16:
                # Could have used an OP_n code, rather than a 1-byte push.
                return False

            elif op == OP_PUSHDATA1 and len(data) < OP_PUSHDATA1:
                # Could have used a normal n-byte push, rather than OP_PUSHDATA1.
                return False

            elif op == OP_PUSHDATA2 and len(data) <= 0xFF:
                # Could have used a OP_PUSHDATA1.
                return False

            elif op == OP_PUSHDATA4 and len(data) <= 0xFFFF:
                # Could have used a OP_PUSHDATA2.
                return False

        return True

    def is_unspendable(self):
        """Test if the script is provably unspendable"""
        return len(self) > 0 and self[0] == OP_RETURN


def build_lock_script(to):
    """Create a scriptPubKey paying to an address or a public key

    Given an address (a CBase58Data instance) the standard
    DUP HASH160 <hash> EQUALVERIFY CHECKSIG form is used. Given raw bytes
    they are taken to be a public key and <pubkey> CHECKSIG is used, as in
    coinbase transactions.

    Returns bytes.
    """
    f = BytesIO()
    if isinstance(to, txscript.base58.CBase58Data):
        f.write(OP_DUP.serialize())
        f.write(OP_HASH160.serialize())
        f.write(CScriptOp.encode_op_pushdata(bytes(to)))
        f.write(OP_EQUALVERIFY.serialize())
        f.write(OP_CHECKSIG.serialize())
    else:
        f.write(CScriptOp.encode_op_pushdata(bytes(to)))
        f.write(OP_CHECKSIG.serialize())
    return f.getvalue()


def build_unlock_script(signature, pubkey):
    """Create the standard <sig> <pubkey> scriptSig, returning bytes"""
    f = BytesIO()
    f.write(CScriptOp.encode_op_pushdata(bytes(signature)))
    f.write(CScriptOp.encode_op_pushdata(bytes(pubkey)))
    return f.getvalue()
